"""
TransactionSource over finance records exported to a local CSV file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from unitfin.model.finance import FinanceRecord, FinanceType
from unitfin.model.periods import DateRange
from unitfin.model.records_io import dump_records_csv, load_records_csv


class RecordsTransactionSource:
    """Serves fetch() from an in-memory record list.

    Records with unreadable dates are only returned for unbounded fetches,
    since they cannot be placed inside a range.
    """

    def __init__(self, records: list[FinanceRecord]):
        self.records = list(records)

    @classmethod
    def from_csv(cls, path: Path) -> RecordsTransactionSource:
        if not path.exists():
            return cls([])
        return cls(load_records_csv(path.read_text(encoding="utf-8")))

    def save_csv(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_records_csv(self.records), encoding="utf-8")

    def fetch(
        self,
        unit_id: str,
        finance_type: FinanceType,
        date_range: Optional[DateRange] = None,
    ) -> list[FinanceRecord]:
        finance_type = FinanceType(finance_type)
        matched = []
        for record in self.records:
            if record.unit_id != unit_id or record.type != finance_type:
                continue
            if date_range is not None:
                ts = record.timestamp
                if ts is None or not date_range.contains(ts):
                    continue
            matched.append(record)
        return matched


__all__ = ["RecordsTransactionSource"]
