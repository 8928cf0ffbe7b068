"""
Storage adapters backing the engine's collaborator protocols for the CLI.

- category_store: SQLite and in-memory CategorySource
- legacy_cache: JSON-file and in-memory LegacyCategoryCache
- record_source: TransactionSource over locally exported records
"""

from unitfin.storage.category_store import InMemoryCategorySource, SqliteCategorySource
from unitfin.storage.legacy_cache import InMemoryLegacyCache, JsonLegacyCache
from unitfin.storage.record_source import RecordsTransactionSource

__all__ = [
    "InMemoryCategorySource",
    "SqliteCategorySource",
    "InMemoryLegacyCache",
    "JsonLegacyCache",
    "RecordsTransactionSource",
]
