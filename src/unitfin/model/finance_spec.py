from __future__ import annotations

"""
Tests for finance record and category models.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from unitfin.model.finance import CategoryEntry, FinanceRecord, FinanceType


def _record(**overrides) -> FinanceRecord:
    data = dict(
        id="rec-1",
        unit_id="unit-1",
        type="income",
        amount=5000,
        category="Tithe",
        date="2025-01-05",
    )
    data.update(overrides)
    return FinanceRecord(**data)


class DescribeFinanceRecord:
    def it_should_parse_iso_dates_into_periods(self):
        record = _record(date="2025-10-02T08:30:00Z")
        assert record.period == (2025, 10)
        assert record.amount == Decimal("5000")

    def it_should_accept_plain_dates(self):
        record = _record(date=date(2024, 12, 31))
        assert record.timestamp == datetime(2024, 12, 31)

    def it_should_keep_unreadable_dates_without_period(self):
        record = _record(date="sometime last week")
        assert record.date == "sometime last week"
        assert record.period is None

    def it_should_reject_negative_amount(self):
        with pytest.raises(ValidationError):
            _record(amount=-1)

    def it_should_reject_unknown_type(self):
        with pytest.raises(ValidationError):
            _record(type="transfer")

    def it_should_show_dash_for_blank_category(self):
        assert _record(category="  ").category_label == "—"

    def it_should_be_immutable(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.amount = Decimal(1)

    def it_should_replace_fields_into_new_record(self):
        record = _record()
        updated = record.replace_fields(amount=7500, category="Offering")
        assert updated.amount == Decimal("7500")
        assert updated.category == "Offering"
        assert record.amount == Decimal("5000")

    def it_should_refuse_type_change_on_replace(self):
        with pytest.raises(ValueError, match="type cannot change"):
            _record().replace_fields(type=FinanceType.expense)


class DescribeCategoryEntry:
    def it_should_strip_names(self):
        entry = CategoryEntry(unit_id="u", type="expense", name="  Rent ")
        assert entry.name == "Rent"
        assert entry.key == "rent"

    def it_should_reject_blank_names(self):
        with pytest.raises(ValidationError):
            CategoryEntry(unit_id="u", type="expense", name="   ")
