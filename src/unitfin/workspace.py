"""
Workspace - centralized data path resolution for the unitfin CLI.

A Workspace represents the root directory containing the locally exported
finance records, the category store and the legacy key-value cache. All
paths are computed relative to this root.

Resolution priority:
1. Explicit path (--data-dir CLI option)
2. UNITFIN_DATA environment variable
3. Current working directory
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Workspace:
    """Root directory for all unit finance data paths."""

    root: Path

    @classmethod
    def resolve(cls, explicit: Path | None = None) -> Workspace:
        """Resolve workspace root from explicit path, env var, or CWD.

        Args:
            explicit: Explicitly provided path (highest priority)

        Returns:
            Workspace with resolved root
        """
        if explicit is not None:
            return cls(root=explicit)
        env = os.environ.get("UNITFIN_DATA")
        if env:
            return cls(root=Path(env))
        return cls(root=Path.cwd())

    @property
    def records_path(self) -> Path:
        return self.root / "data" / "records.csv"

    @property
    def category_store_path(self) -> Path:
        return self.root / "data" / "categories.db"

    @property
    def legacy_cache_path(self) -> Path:
        return self.root / "data" / "legacy_cache.json"

    @property
    def summary_cache_path(self) -> Path:
        return self.root / "data" / "summary.yml"


__all__ = ["Workspace"]
