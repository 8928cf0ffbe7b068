"""Tests for categories command."""

from __future__ import annotations

import json
from decimal import Decimal
from io import StringIO
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

from rich.console import Console

from unitfin.cli.command.categories import run
from unitfin.model.finance import FinanceRecord, FinanceType
from unitfin.storage.category_store import SqliteCategorySource
from unitfin.storage.record_source import RecordsTransactionSource
from unitfin.workspace import Workspace

UNIT = "choir-01"


def _run(workspace: Workspace, **kwargs) -> tuple[int, str]:
    buf = StringIO()
    test_console = Console(file=buf, width=200)
    with patch("unitfin.cli.command.categories.console", test_console):
        rc = run(unit=UNIT, workspace=workspace, **kwargs)
    return rc, buf.getvalue()


def _names(workspace: Workspace, finance_type=FinanceType.income) -> list[str]:
    source = SqliteCategorySource(str(workspace.category_store_path))
    return [e.name for e in source.list(UNIT, finance_type)]


class DescribeCategoriesCommand:
    def it_should_report_when_no_categories_exist(self):
        with TemporaryDirectory() as tmpdir:
            rc, output = _run(Workspace(root=Path(tmpdir)), finance_type="income")
            assert rc == 0
            assert "No income categories" in output

    def it_should_list_categories_with_icons(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            source = SqliteCategorySource(str(workspace.category_store_path))
            source.add(UNIT, FinanceType.expense, "rent")
            source.add(UNIT, FinanceType.expense, "Fuel")

            rc, output = _run(workspace, finance_type="expense")

            assert rc == 0
            assert output.index("Fuel") < output.index("rent")
            assert "home-outline" in output

    def it_should_not_persist_add_in_dry_run(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            rc, output = _run(workspace, finance_type="income", add="Tithe")
            assert rc == 0
            assert "Dry-run" in output
            assert _names(workspace) == []

    def it_should_add_category_with_write(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            rc, _ = _run(workspace, finance_type="income", add=" Tithe ", write=True)
            assert rc == 0
            assert _names(workspace) == ["Tithe"]

    def it_should_fail_on_duplicate_ignoring_case(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            _run(workspace, finance_type="income", add="Tithe", write=True)
            rc, output = _run(workspace, finance_type="income", add="TITHE", write=True)
            assert rc == 1
            assert "already exists" in output
            assert _names(workspace) == ["Tithe"]

    def it_should_rename_and_relabel_records(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            SqliteCategorySource(str(workspace.category_store_path)).add(UNIT, "income", "Tithes")
            RecordsTransactionSource(
                [
                    FinanceRecord(id="r1", unit_id=UNIT, type="income", amount=Decimal(5),
                                  category="Tithes", date="2025-01-01"),
                    FinanceRecord(id="r2", unit_id=UNIT, type="income", amount=Decimal(5),
                                  category="Seed", date="2025-01-02"),
                ]
            ).save_csv(workspace.records_path)

            rc, output = _run(
                workspace, finance_type="income", rename="Tithes", to="Tithe", relabel=True, write=True
            )

            assert rc == 0
            assert _names(workspace) == ["Tithe"]
            records = RecordsTransactionSource.from_csv(workspace.records_path).records
            assert [r.category for r in records] == ["Tithe", "Seed"]
            assert "Relabelled 1 record(s)" in output

    def it_should_leave_records_alone_without_relabel(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            SqliteCategorySource(str(workspace.category_store_path)).add(UNIT, "income", "Tithes")

            rc, _ = _run(workspace, finance_type="income", rename="Tithes", to="Tithe", write=True)

            assert rc == 0
            assert not workspace.records_path.exists()

    def it_should_fail_renaming_unknown_category(self):
        with TemporaryDirectory() as tmpdir:
            rc, output = _run(
                Workspace(root=Path(tmpdir)), finance_type="income", rename="Seed", to="Seeds", write=True
            )
            assert rc == 1
            assert "not found" in output

    def it_should_migrate_legacy_lists_only_with_write(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            workspace.legacy_cache_path.parent.mkdir(parents=True, exist_ok=True)
            workspace.legacy_cache_path.write_text(
                json.dumps({f"financeCategories:{UNIT}:income": '["Tithe", "Offering"]'}),
                encoding="utf-8",
            )

            rc, _ = _run(workspace, finance_type="income")
            assert rc == 0
            assert _names(workspace) == []

            rc, output = _run(workspace, finance_type="income", write=True)
            assert rc == 0
            assert _names(workspace) == ["Tithe", "Offering"]
            assert json.loads(workspace.legacy_cache_path.read_text(encoding="utf-8")) == {}

    def it_should_reject_conflicting_arguments(self):
        with TemporaryDirectory() as tmpdir:
            workspace = Workspace(root=Path(tmpdir))
            rc, _ = _run(workspace, finance_type="income", add="A", rename="B", to="C")
            assert rc == 1
            rc, _ = _run(workspace, finance_type="income", rename="B")
            assert rc == 1
            rc, _ = _run(workspace, finance_type="gift")
            assert rc == 1
