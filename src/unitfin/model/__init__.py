from .finance import CategoryEntry, FinanceRecord, FinanceType
from .records_io import RECORD_COLUMNS, dump_records_csv, load_records_csv

__all__ = [
    # models
    "CategoryEntry",
    "FinanceRecord",
    "FinanceType",
    # IO helpers
    "dump_records_csv",
    "load_records_csv",
    "RECORD_COLUMNS",
]
