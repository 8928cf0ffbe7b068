from __future__ import annotations

"""
Comparison Service - current vs previous month net surplus/deficit.

Each month's income and expense is resolved through an ordered list of
strategies, one per data source:

1. precise totals fetched for exactly that (year, month)
2. totals aggregated from the year's records already loaded
3. the backend's cached summary-by-month

The first strategy that shows activity (income + expense > 0) wins, even if
a higher-precedence strategy answered with zeros. If no strategy shows
activity, the first one that answered at all is used.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from unitfin.model.finance import FinanceRecord, FinanceType
from unitfin.model.periods import label_for_month, month_range, parse_month_key, previous_month
from unitfin.services.aggregation_service import ALL_UNITS, ZERO, month_totals
from unitfin.services.currency import Number, format_percent
from unitfin.services.sources import TransactionSource

logger = logging.getLogger(__name__)

PCT_LIMIT = Decimal(100)


class TrendLabel(str, Enum):
    surplus = "Surplus"
    deficit = "Deficit"


@dataclass(frozen=True)
class MonthAmounts:
    income: Decimal
    expense: Decimal

    @property
    def has_activity(self) -> bool:
        return self.income + self.expense > 0


@dataclass(frozen=True)
class FetchedMonthTotals:
    """Totals fetched from the backend for one explicitly tagged month."""
    year: int
    month: int
    income: Decimal
    expense: Decimal


@dataclass
class PeriodTotals:
    year: int
    month: int
    income: Decimal
    expense: Decimal
    source: Optional[str] = None

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    @property
    def label(self) -> str:
        return label_for_month(self.year, self.month)


@dataclass
class ComparisonResult:
    current: PeriodTotals
    previous: PeriodTotals
    percent_change: Decimal
    trend_label: TrendLabel
    text: str


class TotalsStrategy(Protocol):
    name: str

    def totals_for(self, year: int, month: int) -> Optional[MonthAmounts]:
        """Amounts for the month, or None when this source knows nothing about it."""
        ...


class FetchedTotalsStrategy:
    name = "fetched"

    def __init__(self, fetched: Iterable[FetchedMonthTotals]):
        self._by_period: Dict[Tuple[int, int], MonthAmounts] = {
            (f.year, f.month): MonthAmounts(Decimal(f.income), Decimal(f.expense))
            for f in fetched
        }

    def totals_for(self, year: int, month: int) -> Optional[MonthAmounts]:
        return self._by_period.get((year, month))


class LocalRecordsStrategy:
    """Aggregates the loaded records; only knows months of the selected year."""

    name = "records"

    def __init__(self, records: Iterable[FinanceRecord], selected_year: int):
        self._year = selected_year
        self._months = month_totals(records, selected_year)

    def totals_for(self, year: int, month: int) -> Optional[MonthAmounts]:
        if year != self._year or month not in self._months:
            return None
        income, expense = self._months[month]
        return MonthAmounts(income, expense)


def _amount(value) -> Decimal:
    try:
        amount = Decimal(str(value or 0))
    except ArithmeticError:
        return ZERO
    return amount if amount.is_finite() else ZERO


class SummaryCacheStrategy:
    name = "summary"

    def __init__(self, cached_summary_by_month: Optional[Mapping[str, Mapping[str, Number]]]):
        self._entries: List[Tuple[Tuple[int, int], MonthAmounts]] = []
        for key, totals in (cached_summary_by_month or {}).items():
            period = parse_month_key(str(key))
            if period is None:
                logger.debug("Ignoring summary key %r", key)
                continue
            if not isinstance(totals, Mapping):
                logger.debug("Ignoring summary entry %r: not a mapping", key)
                continue
            self._entries.append(
                (period, MonthAmounts(_amount(totals.get("income")), _amount(totals.get("expense"))))
            )

    def totals_for(self, year: int, month: int) -> Optional[MonthAmounts]:
        for period, amounts in self._entries:
            if period == (year, month):
                return amounts
        return None


def resolve_month(
    strategies: Sequence[TotalsStrategy], year: int, month: int
) -> Tuple[MonthAmounts, Optional[str]]:
    """Pick amounts for one month using the ordered strategy list."""
    fallback: Optional[Tuple[MonthAmounts, str]] = None
    for strategy in strategies:
        amounts = strategy.totals_for(year, month)
        if amounts is None:
            continue
        if amounts.has_activity:
            return amounts, strategy.name
        if fallback is None:
            fallback = (amounts, strategy.name)
    if fallback is not None:
        return fallback
    return MonthAmounts(ZERO, ZERO), None


def percent_change(current_net: Decimal, previous_net: Decimal) -> Decimal:
    """Change in net magnitude, clamped to [-100, 100] and rounded to one decimal."""
    cur_mag = abs(current_net)
    prev_mag = abs(previous_net)
    if prev_mag == 0:
        raw = PCT_LIMIT if cur_mag > 0 else ZERO
    else:
        raw = (cur_mag - prev_mag) / prev_mag * 100
    clamped = max(-PCT_LIMIT, min(PCT_LIMIT, raw))
    rounded = clamped.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return Decimal("0.0")
    return rounded


def target_months(year: int, today: date) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """(current, previous) months compared for the selected year."""
    target = (year, today.month) if year == today.year else (year, 12)
    return target, previous_month(*target)


class ComparisonResolver:
    """Resolves the month-over-month comparison shown on the unit summary."""

    def __init__(self, today: Callable[[], date] = date.today):
        """
        Args:
            today: Clock used to pick the target month
        """
        self._today = today

    def strategies(
        self,
        year: int,
        records: Iterable[FinanceRecord],
        cached_summary_by_month: Optional[Mapping[str, Mapping[str, Number]]],
        fetched: Iterable[FetchedMonthTotals] = (),
    ) -> List[TotalsStrategy]:
        return [
            FetchedTotalsStrategy(fetched),
            LocalRecordsStrategy(records, year),
            SummaryCacheStrategy(cached_summary_by_month),
        ]

    def resolve(
        self,
        unit_id: Optional[str],
        year: int,
        all_records_for_year: Iterable[FinanceRecord],
        cached_summary_by_month: Optional[Mapping[str, Mapping[str, Number]]] = None,
        fetched: Iterable[FetchedMonthTotals] = (),
    ) -> ComparisonResult:
        """
        Compare the target month of ``year`` with the month before it.

        Args:
            unit_id: Unit whose records are compared; records of other units are ignored
            year: Selected year (current year compares this month, past years December)
            all_records_for_year: Records loaded for the selected year
            cached_summary_by_month: Backend summary keyed by month label
            fetched: Precise totals fetched for specific months

        Returns:
            ComparisonResult with both periods, the clamped change and display text
        """
        records = [
            r
            for r in all_records_for_year
            if unit_id and (unit_id == ALL_UNITS or r.unit_id == unit_id)
        ]
        strategies = self.strategies(year, records, cached_summary_by_month, fetched)
        (cur_y, cur_m), (prev_y, prev_m) = target_months(year, self._today())

        cur_amounts, cur_source = resolve_month(strategies, cur_y, cur_m)
        prev_amounts, prev_source = resolve_month(strategies, prev_y, prev_m)

        current = PeriodTotals(cur_y, cur_m, cur_amounts.income, cur_amounts.expense, cur_source)
        previous = PeriodTotals(prev_y, prev_m, prev_amounts.income, prev_amounts.expense, prev_source)

        pct = percent_change(current.net, previous.net)
        trend = TrendLabel.surplus if current.net >= 0 else TrendLabel.deficit
        logger.debug(
            "Comparison for unit %s: %s via %s vs %s via %s",
            unit_id, current.label, cur_source, previous.label, prev_source,
        )
        return ComparisonResult(
            current=current,
            previous=previous,
            percent_change=pct,
            trend_label=trend,
            text=f"{format_percent(pct)} Compared to {previous.label}",
        )


def fetch_precise_totals(
    source: TransactionSource,
    unit_id: str,
    year: int,
    today: date,
) -> List[FetchedMonthTotals]:
    """Fetch exact income/expense totals for the compared months from a source."""
    fetched: List[FetchedMonthTotals] = []
    for y, m in target_months(year, today):
        window = month_range(y, m)
        income = sum((r.amount for r in source.fetch(unit_id, FinanceType.income, window)), ZERO)
        expense = sum((r.amount for r in source.fetch(unit_id, FinanceType.expense, window)), ZERO)
        fetched.append(FetchedMonthTotals(y, m, income, expense))
    return fetched


__all__ = [
    "ComparisonResolver",
    "ComparisonResult",
    "FetchedMonthTotals",
    "FetchedTotalsStrategy",
    "LocalRecordsStrategy",
    "MonthAmounts",
    "PeriodTotals",
    "SummaryCacheStrategy",
    "TotalsStrategy",
    "TrendLabel",
    "fetch_precise_totals",
    "percent_change",
    "resolve_month",
    "target_months",
]
