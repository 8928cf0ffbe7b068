from __future__ import annotations

"""
Unit finance summary: year totals, month-over-month trend, pie split and
monthly income/expense breakdowns.
"""

from datetime import date
from typing import Optional

from rich.table import Table
from rich.text import Text

from .util import console, fmt_amount
from unitfin.config import FIRST_YEAR
from unitfin.model.finance import FinanceType
from unitfin.model.periods import year_range
from unitfin.model.summary_io import load_summary_by_month
from unitfin.services.aggregation_service import MonthBucket, summarize_year
from unitfin.services.category_classifier import ICON_NAMES
from unitfin.services.chart_geometry import build
from unitfin.services.comparison_service import ComparisonResolver, TrendLabel, fetch_precise_totals
from unitfin.storage.record_source import RecordsTransactionSource
from unitfin.workspace import Workspace

PIE_RADIUS = 60.0
PIE_CENTER = (80.0, 70.0)


def run(
    *,
    unit: str,
    year: Optional[int] = None,
    workspace: Workspace,
    income_category: Optional[str] = None,
    expense_category: Optional[str] = None,
    search: Optional[str] = None,
    compact: bool = False,
    today: Optional[date] = None,
) -> int:
    """Display the finance summary for one unit and year.

    Returns an exit code (0 for success, 1 for invalid arguments).
    """
    the_today = today or date.today()
    the_year = year or the_today.year

    if not unit or not unit.strip():
        console.print("[red]Error:[/] --unit is required")
        return 1
    if the_year < FIRST_YEAR or the_year > the_today.year:
        console.print(f"[red]Error:[/] --year must be between {FIRST_YEAR} and {the_today.year}")
        return 1

    source = RecordsTransactionSource.from_csv(workspace.records_path)
    window = year_range(the_year)
    records = source.fetch(unit, FinanceType.income, window) + source.fetch(
        unit, FinanceType.expense, window
    )

    summary = summarize_year(
        records,
        unit,
        the_year,
        income_category=income_category,
        expense_category=expense_category,
        search=search,
    )
    comparison = ComparisonResolver(today=lambda: the_today).resolve(
        unit,
        the_year,
        records,
        load_summary_by_month(workspace.summary_cache_path),
        fetched=fetch_precise_totals(source, unit, the_year, the_today),
    )

    totals = Table(title=f"Unit {unit} — {the_year}", show_header=False)
    totals.add_column("Metric", style="bold")
    totals.add_column("Value", justify="right")
    totals.add_row("Income", fmt_amount(summary.totals.income, compact))
    totals.add_row("Expense", fmt_amount(summary.totals.expense, compact))
    totals.add_row("Net Surplus/Deficit", fmt_amount(summary.totals.net, compact))
    trend_style = "green" if comparison.trend_label == TrendLabel.surplus else "red"
    totals.add_row(
        "Compared to Last Month",
        Text(f"{comparison.trend_label.value}: {comparison.text}", style=trend_style),
    )
    console.print(totals)

    pie = build(summary.totals.expense, summary.totals.income, PIE_RADIUS, PIE_CENTER)
    if pie.is_empty:
        console.print("[dim]No data to compare[/]")
    else:
        console.print(
            f"Expense {pie.expense_percent}% [dim]|[/] Income {pie.income_percent}%"
        )

    _print_breakdown("Income", summary.income_buckets, compact)
    _print_breakdown("Expense", summary.expense_buckets, compact)
    return 0


def _print_breakdown(title: str, buckets: list[MonthBucket], compact: bool) -> None:
    if not buckets:
        console.print(f"[yellow]No {title.lower()} records.[/]")
        return
    table = Table(title=f"{title} by Month", show_lines=False)
    table.add_column("Month", style="cyan", no_wrap=True)
    table.add_column("Category", style="white")
    table.add_column("Icon", style="dim", no_wrap=True)
    table.add_column("Amount", justify="right")
    for bucket in buckets:
        table.add_row(Text(bucket.label, style="bold"), "", "", fmt_amount(bucket.total, compact))
        for item in bucket.totals_by_category:
            table.add_row("", item.category, ICON_NAMES[item.icon], fmt_amount(item.amount, compact))
    console.print(table)
