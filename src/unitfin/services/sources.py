"""
Collaborator interfaces the engine depends on.

The engine never performs I/O itself. Record fetching, the remote category
list and the device's key-value cache are injected through these protocols;
storage adapters in unitfin.storage implement them for the local CLI.
"""
from __future__ import annotations

from typing import Optional, Protocol

from unitfin.model.finance import CategoryEntry, FinanceRecord, FinanceType
from unitfin.model.periods import DateRange


class TransactionSource(Protocol):
    def fetch(
        self,
        unit_id: str,
        finance_type: FinanceType,
        date_range: Optional[DateRange] = None,
    ) -> list[FinanceRecord]:
        """Records of one type for a unit, optionally limited to an inclusive range."""
        ...


class CategorySource(Protocol):
    def list(self, unit_id: str, finance_type: FinanceType) -> list[CategoryEntry]:
        ...

    def add(self, unit_id: str, finance_type: FinanceType, name: str) -> CategoryEntry:
        """Persist a new name; raises CategoryConflict if the store already has it."""
        ...

    def rename(
        self, unit_id: str, finance_type: FinanceType, from_name: str, to_name: str
    ) -> CategoryEntry:
        ...


class LegacyCategoryCache(Protocol):
    """Key-value cache that held category lists before they moved server-side."""

    def get(self, key: str) -> Optional[str]:
        ...

    def remove(self, key: str) -> None:
        ...


__all__ = [
    "CategorySource",
    "LegacyCategoryCache",
    "TransactionSource",
]
