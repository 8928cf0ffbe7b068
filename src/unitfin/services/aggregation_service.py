from __future__ import annotations

"""
Aggregation Service - month buckets and category breakdowns for unit finances.

Groups already-fetched finance records by calendar month, subtotals each
bucket per category and derives the year-level figures shown on the unit
finance summary (totals, category pickers, search).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from unitfin.model.finance import FinanceRecord, FinanceType
from unitfin.model.periods import format_date_long, label_for_month
from unitfin.services.category_classifier import IconTag, classify

logger = logging.getLogger(__name__)

# Passed as unit_id when records are already scoped to one unit
ALL_UNITS = "*"

ZERO = Decimal(0)


@dataclass
class CategoryTotal:
    """Subtotal of one category inside a month bucket."""
    category: str
    amount: Decimal
    icon: IconTag


@dataclass
class MonthBucket:
    """All records sharing a calendar year and month."""
    year: int
    month: int
    label: str
    totals_by_category: List[CategoryTotal]
    total: Decimal

    @property
    def period(self) -> Tuple[int, int]:
        return self.year, self.month


@dataclass
class YearTotals:
    """Income, expense and net for a set of records."""
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass
class YearSummary:
    """Everything the unit finance summary shows for one year."""
    unit_id: str
    year: int
    totals: YearTotals
    income_buckets: List[MonthBucket] = field(default_factory=list)
    expense_buckets: List[MonthBucket] = field(default_factory=list)
    income_categories: List[str] = field(default_factory=list)
    expense_categories: List[str] = field(default_factory=list)


def _in_scope(
    record: FinanceRecord,
    period: Tuple[int, int],
    unit_id: str,
    finance_type: Optional[FinanceType],
    year: Optional[int],
) -> bool:
    if unit_id != ALL_UNITS and record.unit_id != unit_id:
        return False
    if finance_type is not None and record.type != finance_type:
        return False
    if year is not None and period[0] != year:
        return False
    return True


def aggregate_by_month(
    records: Iterable[FinanceRecord],
    category_filter: Optional[str] = None,
    *,
    unit_id: Optional[str] = ALL_UNITS,
    finance_type: Optional[FinanceType] = None,
    year: Optional[int] = None,
) -> List[MonthBucket]:
    """
    Group records into month buckets with per-category subtotals.

    Args:
        records: Records to aggregate (never mutated)
        category_filter: Only aggregate records whose category matches exactly
        unit_id: Restrict to one unit; None or "" means the caller could not
            resolve a unit and yields no buckets
        finance_type: Restrict to income or expense records
        year: Restrict to one calendar year

    Returns:
        Buckets ordered most recent first; categories within a bucket ordered
        by descending subtotal, ties keeping first-seen order
    """
    if not unit_id:
        return []

    grouped: Dict[Tuple[int, int], Dict[str, Decimal]] = {}
    for record in records:
        period = record.period
        if period is None:
            logger.debug("Skipping record %s with unreadable date %r", record.id, record.date)
            continue
        if not _in_scope(record, period, unit_id, finance_type, year):
            continue
        category = record.category_label
        if category_filter is not None and category != category_filter:
            continue
        cats = grouped.setdefault(period, {})
        cats[category] = cats.get(category, ZERO) + record.amount

    buckets: List[MonthBucket] = []
    for (y, m) in sorted(grouped, reverse=True):
        cats = grouped[(y, m)]
        ordered = sorted(cats.items(), key=lambda kv: kv[1], reverse=True)
        buckets.append(
            MonthBucket(
                year=y,
                month=m,
                label=label_for_month(y, m),
                totals_by_category=[
                    CategoryTotal(category=name, amount=amount, icon=classify(name))
                    for name, amount in ordered
                ],
                total=sum(cats.values(), ZERO),
            )
        )
    return buckets


def totals_for_year(records: Iterable[FinanceRecord], year: Optional[int] = None) -> YearTotals:
    """Sum income and expense, optionally restricted to one year."""
    totals = YearTotals()
    for record in records:
        period = record.period
        if period is None or (year is not None and period[0] != year):
            continue
        if record.type == FinanceType.income:
            totals.income += record.amount
        else:
            totals.expense += record.amount
    return totals


def month_totals(
    records: Iterable[FinanceRecord], year: int
) -> Dict[int, Tuple[Decimal, Decimal]]:
    """Map month number to (income, expense) for the months of ``year`` with records."""
    result: Dict[int, Tuple[Decimal, Decimal]] = {}
    for record in records:
        period = record.period
        if period is None or period[0] != year:
            continue
        income, expense = result.get(period[1], (ZERO, ZERO))
        if record.type == FinanceType.income:
            income += record.amount
        else:
            expense += record.amount
        result[period[1]] = (income, expense)
    return result


def category_options(
    records: Iterable[FinanceRecord],
    year: int,
    finance_type: Optional[FinanceType] = None,
) -> List[str]:
    """Distinct category names used in ``year``, sorted case-insensitively."""
    names = {
        r.category_label
        for r in records
        if r.period is not None
        and r.period[0] == year
        and (finance_type is None or r.type == finance_type)
    }
    return sorted(names, key=lambda n: (n.casefold(), n))


def _record_matches(record: FinanceRecord, query: str) -> bool:
    haystacks = [
        record.category,
        record.description or "",
        format(record.amount, "f"),
        format_date_long(record.date),
    ]
    if record.timestamp is not None:
        haystacks.append(record.timestamp.strftime("%Y-%m-%d"))
    return any(query in text.lower() for text in haystacks)


def search_records(records: Iterable[FinanceRecord], query: Optional[str]) -> List[FinanceRecord]:
    """Filter records by a free-text query; a blank query keeps everything."""
    q = (query or "").strip().lower()
    if not q:
        return list(records)
    return [r for r in records if _record_matches(r, q)]


def summarize_year(
    records: Iterable[FinanceRecord],
    unit_id: Optional[str],
    year: int,
    *,
    income_category: Optional[str] = None,
    expense_category: Optional[str] = None,
    search: Optional[str] = None,
) -> YearSummary:
    """Build the income and expense breakdowns for one unit and year."""
    records = list(records)
    if not unit_id:
        return YearSummary(unit_id="", year=year, totals=YearTotals())

    scoped = [r for r in records if unit_id == ALL_UNITS or r.unit_id == unit_id]
    visible = search_records(scoped, search)
    return YearSummary(
        unit_id=unit_id,
        year=year,
        totals=totals_for_year(scoped, year),
        income_buckets=aggregate_by_month(
            visible, income_category, finance_type=FinanceType.income, year=year
        ),
        expense_buckets=aggregate_by_month(
            visible, expense_category, finance_type=FinanceType.expense, year=year
        ),
        income_categories=category_options(scoped, year, FinanceType.income),
        expense_categories=category_options(scoped, year, FinanceType.expense),
    )


__all__ = [
    "ALL_UNITS",
    "CategoryTotal",
    "MonthBucket",
    "YearSummary",
    "YearTotals",
    "aggregate_by_month",
    "category_options",
    "month_totals",
    "search_records",
    "summarize_year",
    "totals_for_year",
]
