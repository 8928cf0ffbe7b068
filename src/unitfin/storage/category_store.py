"""
Category store implementations.

SqliteCategorySource keeps one row per (unit, type, name) with a
case-insensitive unique index, so two writers racing to add the same name
cannot both succeed: the loser gets CategoryConflict.

Privacy: local-only SQLite file; category names only, no amounts.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from unitfin.model.finance import CategoryEntry, FinanceType
from unitfin.services.exceptions import CategoryConflict, CategoryNotFound


class SqliteCategorySource:
    """CategorySource persisted in a SQLite database.

    Usage:
        source = SqliteCategorySource("data/categories.db")
        source.add("unit-1", FinanceType.income, "Tithe")
        names = [e.name for e in source.list("unit-1", FinanceType.income)]
    """

    def __init__(self, db_path: str):
        """Initialize the store, creating the database file if needed.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self) -> None:
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS finance_categories (
                    unit_id TEXT NOT NULL,
                    finance_type TEXT NOT NULL,
                    name TEXT NOT NULL,
                    created_at TEXT DEFAULT (datetime('now'))
                )
            """)
            cursor.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_finance_categories_name
                ON finance_categories(unit_id, finance_type, name COLLATE NOCASE)
            """)
            conn.commit()
        finally:
            conn.close()

    def list(self, unit_id: str, finance_type: FinanceType) -> list[CategoryEntry]:
        finance_type = FinanceType(finance_type)
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT name FROM finance_categories
                WHERE unit_id = ? AND finance_type = ?
                ORDER BY rowid
                """,
                (unit_id, finance_type.value),
            )
            return [
                CategoryEntry(unit_id=unit_id, type=finance_type, name=row[0])
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def add(self, unit_id: str, finance_type: FinanceType, name: str) -> CategoryEntry:
        entry = CategoryEntry(unit_id=unit_id, type=finance_type, name=name)
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO finance_categories (unit_id, finance_type, name) VALUES (?, ?, ?)",
                    (unit_id, entry.type.value, entry.name),
                )
            except sqlite3.IntegrityError as exc:
                raise CategoryConflict(unit_id, entry.type.value, entry.name) from exc
            conn.commit()
        finally:
            conn.close()
        return entry

    def rename(
        self, unit_id: str, finance_type: FinanceType, from_name: str, to_name: str
    ) -> CategoryEntry:
        entry = CategoryEntry(unit_id=unit_id, type=finance_type, name=to_name)
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    UPDATE finance_categories SET name = ?
                    WHERE unit_id = ? AND finance_type = ? AND name = ?
                    """,
                    (entry.name, unit_id, entry.type.value, from_name),
                )
            except sqlite3.IntegrityError as exc:
                raise CategoryConflict(unit_id, entry.type.value, entry.name) from exc
            if cursor.rowcount == 0:
                raise CategoryNotFound(f"Category '{from_name}' not found for unit {unit_id}")
            conn.commit()
        finally:
            conn.close()
        return entry


class InMemoryCategorySource:
    """CategorySource held in a dict; used by tests and dry runs."""

    def __init__(self, entries: list[CategoryEntry] | None = None):
        self._entries: list[CategoryEntry] = list(entries or [])

    def list(self, unit_id: str, finance_type: FinanceType) -> list[CategoryEntry]:
        finance_type = FinanceType(finance_type)
        return [e for e in self._entries if e.unit_id == unit_id and e.type == finance_type]

    def add(self, unit_id: str, finance_type: FinanceType, name: str) -> CategoryEntry:
        entry = CategoryEntry(unit_id=unit_id, type=finance_type, name=name)
        if any(e.key == entry.key for e in self.list(unit_id, entry.type)):
            raise CategoryConflict(unit_id, entry.type.value, entry.name)
        self._entries.append(entry)
        return entry

    def rename(
        self, unit_id: str, finance_type: FinanceType, from_name: str, to_name: str
    ) -> CategoryEntry:
        renamed = CategoryEntry(unit_id=unit_id, type=finance_type, name=to_name)
        for idx, e in enumerate(self._entries):
            if e.unit_id == unit_id and e.type == renamed.type and e.name == from_name:
                self._entries[idx] = renamed
                return renamed
        raise CategoryNotFound(f"Category '{from_name}' not found for unit {unit_id}")


__all__ = ["InMemoryCategorySource", "SqliteCategorySource"]
