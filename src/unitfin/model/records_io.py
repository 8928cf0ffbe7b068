from __future__ import annotations

"""
Finance records CSV <-> model conversion (pure text, no disk I/O).

A flat CSV with one row per FinanceRecord. Rows that fail validation (bad
type, negative or missing amount) are skipped with a debug log so that one
bad export line does not hide a whole year of records. Unparseable dates are
kept on the record; the aggregation layer decides to skip them.
"""

import csv
import io
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from .finance import FinanceRecord

logger = logging.getLogger(__name__)

# Keep order stable for deterministic outputs.
RECORD_COLUMNS: list[str] = [
    "id",
    "unit_id",
    "type",
    "amount",
    "category",
    "description",
    "date",
    "recorded_by",
]


def _to_str(v) -> str:
    if v is None:
        return ""
    if hasattr(v, "isoformat"):
        return v.isoformat()
    if hasattr(v, "value"):
        return str(v.value)
    return str(v)


def load_records_csv(text: str) -> list[FinanceRecord]:
    """Parse records CSV text into FinanceRecord models."""
    reader = csv.DictReader(io.StringIO(text))
    records: list[FinanceRecord] = []
    for line_no, row in enumerate(reader, start=2):
        data = {k: (row.get(k) or "").strip() for k in RECORD_COLUMNS}
        data["description"] = data["description"] or None
        data["recorded_by"] = data["recorded_by"] or None
        try:
            records.append(FinanceRecord.model_validate(data))
        except ValidationError as exc:
            logger.debug("Skipping records row %d: %s", line_no, exc.errors()[0]["msg"])
    return records


def dump_records_csv(records: Iterable[FinanceRecord]) -> str:
    """Serialize records to CSV text with a header row."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=RECORD_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow({col: _to_str(getattr(record, col)) for col in RECORD_COLUMNS})
    return buf.getvalue()


__all__ = [
    "RECORD_COLUMNS",
    "dump_records_csv",
    "load_records_csv",
]
