"""
Category registry - per-unit, per-type category names.

Wraps a CategorySource (the remote list) with the rules the record forms
rely on:
- Listing is case-insensitively alphabetical
- Names are unique ignoring case within (unit, type)
- Renames never collide with a different entry
- Category lists cached on the device before they moved server-side are
  merged once, then cleared

Renaming does not touch existing finance records. Callers that want
historical records relabelled pass the RenameResult to relabel_records.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from unitfin.config import LEGACY_CATEGORY_KEY_PREFIX
from unitfin.model.finance import CategoryEntry, FinanceRecord, FinanceType
from unitfin.services.exceptions import (
    CategoryConflict,
    CategoryNotFound,
    InvalidCategoryName,
    RegistryError,
)
from unitfin.services.sources import CategorySource, LegacyCategoryCache

logger = logging.getLogger(__name__)


def legacy_key(unit_id: str, finance_type: Optional[FinanceType] = None) -> str:
    """Cache key of a legacy list; without a type, the very old shared list."""
    if finance_type is None:
        return f"{LEGACY_CATEGORY_KEY_PREFIX}:{unit_id}"
    return f"{LEGACY_CATEGORY_KEY_PREFIX}:{unit_id}:{FinanceType(finance_type).value}"


@dataclass
class RenameResult:
    """Outcome of a rename; ``changed`` is False for a same-name no-op."""

    unit_id: str
    finance_type: FinanceType
    from_name: str
    to_name: str
    changed: bool


@dataclass
class MigrationResult:
    migrated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    cleared_keys: list[str] = field(default_factory=list)


def _parse_legacy_list(raw: Optional[str]) -> list[str]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(data, list):
        return []
    return [str(item) for item in data if isinstance(item, str)]


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidCategoryName("Category name cannot be empty")
    return cleaned


class CategoryRegistry:
    """
    Category list management for one CategorySource.

    Does NOT:
    - Retry or queue concurrent mutations (the source enforces uniqueness)
    - Delete categories
    - Relabel finance records on rename
    """

    def __init__(
        self,
        source: CategorySource,
        legacy_cache: Optional[LegacyCategoryCache] = None,
    ):
        """
        Args:
            source: Persisted category list
            legacy_cache: Device cache holding pre-migration lists, if any
        """
        self._source = source
        self._legacy_cache = legacy_cache
        self._migrated: set[tuple[str, FinanceType]] = set()

    def list_categories(self, unit_id: str, finance_type: FinanceType) -> list[str]:
        """Category names for a unit and type, sorted ignoring case."""
        finance_type = FinanceType(finance_type)
        self._ensure_migrated(unit_id, finance_type)
        names = [e.name for e in self._source.list(unit_id, finance_type)]
        return sorted(names, key=lambda n: (n.casefold(), n))

    def add_category(self, unit_id: str, finance_type: FinanceType, name: str) -> CategoryEntry:
        """
        Register a new category name.

        Raises:
            InvalidCategoryName: If the name is blank
            CategoryConflict: If the name exists ignoring case
        """
        finance_type = FinanceType(finance_type)
        cleaned = _clean_name(name)
        if self._find(unit_id, finance_type, cleaned) is not None:
            raise CategoryConflict(unit_id, finance_type.value, cleaned)
        entry = self._source.add(unit_id, finance_type, cleaned)
        logger.info("Added %s category %r for unit %s", finance_type.value, cleaned, unit_id)
        return entry

    def rename_category(
        self,
        unit_id: str,
        finance_type: FinanceType,
        from_name: str,
        to_name: str,
    ) -> RenameResult:
        """
        Rename a category.

        Raises:
            InvalidCategoryName: If the new name is blank
            CategoryNotFound: If ``from_name`` is not registered
            CategoryConflict: If ``to_name`` matches a different entry ignoring case
        """
        finance_type = FinanceType(finance_type)
        cleaned = _clean_name(to_name)
        if cleaned == from_name:
            return RenameResult(unit_id, finance_type, from_name, cleaned, changed=False)

        entries = self._source.list(unit_id, finance_type)
        if not any(e.name == from_name for e in entries):
            raise CategoryNotFound(f"Category '{from_name}' not found for unit {unit_id}")
        if any(e.name.casefold() == cleaned.casefold() and e.name != from_name for e in entries):
            raise CategoryConflict(unit_id, finance_type.value, cleaned)

        self._source.rename(unit_id, finance_type, from_name, cleaned)
        logger.info("Renamed %s category %r to %r for unit %s", finance_type.value, from_name, cleaned, unit_id)
        return RenameResult(unit_id, finance_type, from_name, cleaned, changed=True)

    def migrate_legacy(self, unit_id: str, finance_type: FinanceType) -> MigrationResult:
        """
        Merge legacy device-cached lists into the source and clear them.

        The per-type list wins; the very old shared list only feeds income
        and only when the per-type list is missing or holds no names. Both
        keys are cleared once their names are merged (a shared list beaten
        by a non-empty per-type list is superseded and cleared too). Names
        that already exist are skipped silently, so running twice is harmless.
        """
        finance_type = FinanceType(finance_type)
        result = MigrationResult()
        if self._legacy_cache is None:
            return result

        typed_key = legacy_key(unit_id, finance_type)
        shared_key = legacy_key(unit_id)
        typed_raw = self._legacy_cache.get(typed_key)
        shared_raw = self._legacy_cache.get(shared_key) if finance_type == FinanceType.income else None

        # An empty or unreadable per-type list does not shadow the shared one
        names = _parse_legacy_list(typed_raw)
        if not names and shared_raw is not None:
            names = _parse_legacy_list(shared_raw)

        for name in names:
            try:
                self.add_category(unit_id, finance_type, name)
                result.migrated.append(name.strip())
            except RegistryError:
                result.skipped.append(name)

        for key, raw in ((typed_key, typed_raw), (shared_key, shared_raw)):
            if raw is not None:
                self._legacy_cache.remove(key)
                result.cleared_keys.append(key)

        if result.migrated or result.cleared_keys:
            logger.info(
                "Migrated %d legacy %s categories for unit %s",
                len(result.migrated), finance_type.value, unit_id,
            )
        return result

    def _ensure_migrated(self, unit_id: str, finance_type: FinanceType) -> None:
        if (unit_id, finance_type) in self._migrated:
            return
        self.migrate_legacy(unit_id, finance_type)
        self._migrated.add((unit_id, finance_type))

    def _find(self, unit_id: str, finance_type: FinanceType, name: str) -> Optional[CategoryEntry]:
        key = name.casefold()
        for entry in self._source.list(unit_id, finance_type):
            if entry.key == key:
                return entry
        return None


def relabel_records(
    records: Iterable[FinanceRecord],
    rename: RenameResult,
) -> list[FinanceRecord]:
    """Apply a rename to the records of its unit and type; other records pass through."""
    relabelled: list[FinanceRecord] = []
    for record in records:
        if (
            rename.changed
            and record.unit_id == rename.unit_id
            and record.type == rename.finance_type
            and record.category == rename.from_name
        ):
            record = record.replace_fields(category=rename.to_name)
        relabelled.append(record)
    return relabelled


__all__ = [
    "CategoryRegistry",
    "MigrationResult",
    "RenameResult",
    "legacy_key",
    "relabel_records",
]
