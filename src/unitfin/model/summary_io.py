from __future__ import annotations

"""
Cached summary-by-month I/O (YAML).

The backend's unit summary carries a ``byMonth`` mapping whose keys have
used several label formats over time. The CLI keeps a local copy in
data/summary.yml shaped as::

    byMonth:
      "2025-01": {income: 8000, expense: 2000}
      "February, 2025": {income: 100}

Keys are returned untouched; parsing happens in the comparison service.
Entries that are not mappings are skipped. Amounts are written as strings
so Decimal values survive a round trip exactly.
"""

import logging
from decimal import Decimal
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


def _amount(value) -> Decimal:
    try:
        amount = Decimal(str(value or 0))
    except ArithmeticError:
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def load_summary_by_month(path: Path) -> dict[str, dict[str, Decimal]]:
    """Load the cached summary; missing file yields an empty mapping."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        logger.debug("Ignoring unreadable summary cache %s", path)
        return {}
    by_month = data.get("byMonth") if isinstance(data, dict) else None
    if not isinstance(by_month, dict):
        return {}
    result: dict[str, dict[str, Decimal]] = {}
    for key, totals in by_month.items():
        if not isinstance(totals, dict):
            logger.debug("Ignoring summary entry %r: not a mapping", key)
            continue
        result[str(key)] = {
            "income": _amount(totals.get("income")),
            "expense": _amount(totals.get("expense")),
        }
    return result


def save_summary_by_month(path: Path, by_month: dict[str, dict[str, Decimal]]) -> None:
    """Write the cached summary, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "byMonth": {
            key: {name: str(value) for name, value in totals.items()}
            for key, totals in by_month.items()
        }
    }
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


__all__ = [
    "load_summary_by_month",
    "save_summary_by_month",
]
