from __future__ import annotations

from decimal import Decimal

from rich.console import Console
from rich.text import Text

from unitfin.services.currency import format_compact, format_full

console = Console()


def fmt_amount(amt: Decimal, compact: bool = False) -> Text:
    s = format_compact(amt) if compact else format_full(amt)
    if amt < 0:
        return Text(s, style="bold red")
    elif amt > 0:
        return Text(s, style="bold green")
    return Text(s)
