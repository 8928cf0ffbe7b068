from __future__ import annotations

"""
Tests for records CSV I/O.
"""

from decimal import Decimal

from unitfin.model.finance import FinanceRecord, FinanceType
from unitfin.model.records_io import RECORD_COLUMNS, dump_records_csv, load_records_csv


class DescribeRecordsCsv:
    def it_should_write_header_in_column_order(self):
        text = dump_records_csv([])
        assert text.strip() == ",".join(RECORD_COLUMNS)

    def it_should_load_what_it_dumps(self):
        records = [
            FinanceRecord(
                id="r1",
                unit_id="u1",
                type="expense",
                amount=Decimal("2000.50"),
                category="Rent",
                description="January rent",
                date="2025-01-10T00:00:00",
                recorded_by="user-9",
            )
        ]
        loaded = load_records_csv(dump_records_csv(records))
        assert loaded == records

    def it_should_skip_invalid_rows(self):
        text = (
            ",".join(RECORD_COLUMNS)
            + "\n"
            + "r1,u1,income,100,Tithe,,2025-01-01,\n"
            + "r2,u1,income,-5,Tithe,,2025-01-01,\n"
            + "r3,u1,refund,5,Tithe,,2025-01-01,\n"
        )
        loaded = load_records_csv(text)
        assert [r.id for r in loaded] == ["r1"]
        assert loaded[0].type == FinanceType.income
        assert loaded[0].description is None

