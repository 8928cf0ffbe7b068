from __future__ import annotations

"""
Manage a unit's finance categories (list, add, rename).
"""

from typing import Optional

from rich.table import Table

from .util import console
from unitfin.model.finance import FinanceType
from unitfin.services.category_classifier import classify_for_type
from unitfin.services.category_registry import CategoryRegistry, relabel_records
from unitfin.services.exceptions import RegistryError
from unitfin.storage.category_store import SqliteCategorySource
from unitfin.storage.legacy_cache import JsonLegacyCache
from unitfin.storage.record_source import RecordsTransactionSource
from unitfin.workspace import Workspace


def run(
    *,
    unit: str,
    finance_type: str,
    workspace: Workspace,
    add: Optional[str] = None,
    rename: Optional[str] = None,
    to: Optional[str] = None,
    relabel: bool = False,
    write: bool = False,
) -> int:
    """List, add or rename categories for a unit and type.

    Actions (mutually exclusive):
    - no action: list categories
    - --add NAME: register a new category
    - --rename FROM --to TO: rename a category (--relabel also updates records)

    Legacy device-cached lists are merged on the first listing made with
    --write; without --write nothing is persisted.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        the_type = FinanceType(finance_type)
    except ValueError:
        console.print(f"[red]Error:[/] Invalid type '{finance_type}'. Use 'income' or 'expense'")
        return 1

    if add is not None and rename is not None:
        console.print("[red]Error:[/] Specify only one action: --add or --rename")
        return 1
    if rename is not None and to is None:
        console.print("[red]Error:[/] --to is required with --rename")
        return 1

    source = SqliteCategorySource(str(workspace.category_store_path))
    legacy = JsonLegacyCache(workspace.legacy_cache_path) if write else None
    registry = CategoryRegistry(source, legacy_cache=legacy)

    if add is not None:
        return _handle_add(registry, unit, the_type, add, write)
    if rename is not None:
        return _handle_rename(registry, workspace, unit, the_type, rename, to, relabel, write)
    return _handle_list(registry, unit, the_type)


def _handle_list(registry: CategoryRegistry, unit: str, finance_type: FinanceType) -> int:
    names = registry.list_categories(unit, finance_type)
    if not names:
        console.print(f"[yellow]No {finance_type.value} categories for unit[/] [bold]{unit}[/].")
        return 0

    table = Table(title=f"{finance_type.value.title()} Categories — {unit}")
    table.add_column("Name", style="white")
    table.add_column("Icon", style="dim")
    for name in names:
        hint = classify_for_type(name, finance_type)
        table.add_row(name, f"[{hint.color}]{hint.icon}[/]")
    console.print(table)
    return 0


def _handle_add(
    registry: CategoryRegistry,
    unit: str,
    finance_type: FinanceType,
    name: str,
    write: bool,
) -> int:
    console.print(f"[bold]Adding {finance_type.value} category:[/] {name.strip()}")
    if not write:
        console.print("[dim]Dry-run: use --write to persist changes[/]")
        return 0
    try:
        registry.add_category(unit, finance_type, name)
    except RegistryError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1
    console.print("[green]✓[/] Category added")
    return 0


def _handle_rename(
    registry: CategoryRegistry,
    workspace: Workspace,
    unit: str,
    finance_type: FinanceType,
    from_name: str,
    to_name: str,
    relabel: bool,
    write: bool,
) -> int:
    console.print(f"[bold]Renaming {finance_type.value} category:[/] {from_name} → {to_name.strip()}")
    if not write:
        console.print("[dim]Dry-run: use --write to persist changes[/]")
        return 0
    try:
        result = registry.rename_category(unit, finance_type, from_name, to_name)
    except RegistryError as e:
        console.print(f"[red]Error:[/] {e}")
        return 1

    if not result.changed:
        console.print("[yellow]Name unchanged[/]")
        return 0
    console.print("[green]✓[/] Category renamed")

    if relabel:
        records_source = RecordsTransactionSource.from_csv(workspace.records_path)
        before = records_source.records
        records_source.records = relabel_records(before, result)
        changed = sum(1 for old, new in zip(before, records_source.records) if old is not new)
        records_source.save_csv(workspace.records_path)
        console.print(f"[green]✓[/] Relabelled {changed} record(s) in {workspace.records_path}")
    return 0
