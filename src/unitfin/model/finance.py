from __future__ import annotations

"""
Canonical data models for unit finance records and categories.

Scope
- Pure Pydantic v2 models; no I/O
- Mirrors the backend's finance documents (income/expense records) and the
  per-unit category list
- Derived structures (month buckets, comparisons, chart geometry) live with
  the services that compute them
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from unitfin.config import BLANK_CATEGORY
from unitfin.model.periods import parse_timestamp


class FinanceType(str, Enum):
    income = "income"
    expense = "expense"


class FinanceRecord(BaseModel):
    """A single income or expense entry recorded for a unit.

    Records are immutable; edits go through ``replace_fields`` which produces
    a new record and refuses to change ``type``. The ``date`` field keeps the
    raw text when it cannot be parsed so that aggregation can skip it instead
    of failing the whole batch.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    unit_id: str
    type: FinanceType
    amount: Decimal = Field(ge=0, description="Non-negative amount in naira")
    category: str = Field(default="", description="Income source or expense category")
    description: Optional[str] = None
    date: Union[datetime, str]
    recorded_by: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        if isinstance(value, str):
            parsed = parse_timestamp(value)
            return parsed if parsed is not None else value
        return value

    @property
    def timestamp(self) -> Optional[datetime]:
        return self.date if isinstance(self.date, datetime) else None

    @property
    def period(self) -> Optional[tuple[int, int]]:
        """Numeric (year, month) bucket key, or None for an unreadable date."""
        ts = self.timestamp
        if ts is None:
            return None
        return ts.year, ts.month

    @property
    def category_label(self) -> str:
        return self.category.strip() or BLANK_CATEGORY

    def replace_fields(self, **changes) -> FinanceRecord:
        """Return a copy with the given fields replaced and re-validated."""
        if "type" in changes and FinanceType(changes["type"]) != self.type:
            raise ValueError("Finance record type cannot change after creation")
        data = self.model_dump()
        data.update(changes)
        return FinanceRecord.model_validate(data)


class CategoryEntry(BaseModel):
    """A category name registered for one unit and finance type."""

    model_config = ConfigDict(frozen=True)

    unit_id: str
    type: FinanceType
    name: str = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @property
    def key(self) -> str:
        """Case-insensitive identity within (unit_id, type)."""
        return self.name.casefold()


__all__ = [
    "CategoryEntry",
    "FinanceRecord",
    "FinanceType",
]
