from __future__ import annotations

"""
Finance history: one unit's income or expense records for a date-range preset.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from rich.table import Table
from rich.text import Text

from .util import console, fmt_amount
from unitfin.model.finance import FinanceType
from unitfin.model.periods import as_utc, format_date_long, history_range
from unitfin.services.aggregation_service import search_records
from unitfin.storage.record_source import RecordsTransactionSource
from unitfin.workspace import Workspace

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def run(
    *,
    unit: str,
    finance_type: str,
    workspace: Workspace,
    range_preset: str = "all",
    search: Optional[str] = None,
    now: Optional[datetime] = None,
) -> int:
    """List records newest first with a total footer.

    Returns an exit code (0 for success, 1 for invalid arguments).
    """
    try:
        the_type = FinanceType(finance_type)
    except ValueError:
        console.print(f"[red]Error:[/] Invalid type '{finance_type}'. Use 'income' or 'expense'")
        return 1
    try:
        window = history_range(range_preset, now or datetime.now(timezone.utc))
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    source = RecordsTransactionSource.from_csv(workspace.records_path)
    records = search_records(source.fetch(unit, the_type, window), search)
    records.sort(key=lambda r: as_utc(r.timestamp) if r.timestamp else _OLDEST, reverse=True)

    if not records:
        console.print(f"[yellow]No {the_type.value} records for unit[/] [bold]{unit}[/].")
        return 0

    title = "Income History" if the_type == FinanceType.income else "Expenses History"
    table = Table(title=f"{title} — {unit}", show_lines=False)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Source" if the_type == FinanceType.income else "Category", style="yellow")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("ID8", style="dim", no_wrap=True)

    total = Decimal(0)
    for r in records:
        total += r.amount
        table.add_row(
            format_date_long(r.date) or str(r.date),
            r.category_label,
            r.description or "",
            fmt_amount(r.amount),
            r.id[:8],
        )
    table.add_row("", "", Text(""), Text(""), "")
    table.add_row("", "", Text("Total", style="bold"), fmt_amount(total), "")
    console.print(table)
    return 0
