from __future__ import annotations

"""
unitfin CLI Wrapper (Typer + Rich)

Local-only CLI over exported unit finance records.

All paths are resolved from a single workspace root:
  --data-dir / UNITFIN_DATA env var / current working directory
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from unitfin.workspace import Workspace

HELP_WRITE = "Persist changes (default: dry-run)"
HELP_UNIT = "Unit ID whose finances to show (e.g., choir-01)"
HELP_TYPE = "Finance type: income or expense"

APP_HELP = "Unit finance CLI (local-only)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar="UNITFIN_DATA",
        help="Workspace root directory (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions"),
):
    """unitfin CLI: all paths resolved from a single workspace root."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


@app.command()
def summary(
    ctx: typer.Context,
    unit: str = typer.Option(..., "--unit", "-u", help=HELP_UNIT),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year to summarize (defaults to current year)"),
    income_category: Optional[str] = typer.Option(None, "--income-category", help="Only show this income source"),
    expense_category: Optional[str] = typer.Option(None, "--expense-category", help="Only show this expense category"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter breakdowns by text"),
    compact: bool = typer.Option(False, "--compact", help="Abbreviate amounts (₦1.5K, ₦2.5M)"),
):
    """Show year totals, month-over-month trend and monthly breakdowns.

    Examples:
      unitfin summary --unit choir-01
      unitfin summary -u choir-01 --year 2024 --expense-category Rent
    """
    from unitfin.cli.command import summary as cmd_summary

    code = cmd_summary.run(
        unit=unit,
        year=year,
        workspace=_ws(ctx),
        income_category=income_category,
        expense_category=expense_category,
        search=search,
        compact=compact,
    )
    raise typer.Exit(code=code)


@app.command()
def history(
    ctx: typer.Context,
    unit: str = typer.Option(..., "--unit", "-u", help=HELP_UNIT),
    finance_type: str = typer.Option("income", "--type", "-t", help=HELP_TYPE),
    range_preset: str = typer.Option("all", "--range", "-r", help="7, 30, year or all"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by source, description, amount or date"),
):
    """List income or expense records, newest first.

    Examples:
      unitfin history --unit choir-01 --type expense --range 30
      unitfin history -u choir-01 --search tithe
    """
    from unitfin.cli.command import history as cmd_history

    code = cmd_history.run(
        unit=unit,
        finance_type=finance_type,
        workspace=_ws(ctx),
        range_preset=range_preset,
        search=search,
    )
    raise typer.Exit(code=code)


@app.command()
def categories(
    ctx: typer.Context,
    unit: str = typer.Option(..., "--unit", "-u", help=HELP_UNIT),
    finance_type: str = typer.Option("income", "--type", "-t", help=HELP_TYPE),
    add: Optional[str] = typer.Option(None, "--add", help="Add a new category"),
    rename: Optional[str] = typer.Option(None, "--rename", help="Category to rename"),
    to: Optional[str] = typer.Option(None, "--to", help="New name for --rename"),
    relabel: bool = typer.Option(False, "--relabel", help="Also relabel existing records on rename"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """List, add or rename a unit's finance categories.

    Examples:
      unitfin categories --unit choir-01 --type income
      unitfin categories -u choir-01 -t expense --add "Generator Fuel" --write
      unitfin categories -u choir-01 --rename Tithes --to Tithe --relabel --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from unitfin.cli.command import categories as cmd_categories

    code = cmd_categories.run(
        unit=unit,
        finance_type=finance_type,
        workspace=_ws(ctx),
        add=add,
        rename=rename,
        to=to,
        relabel=relabel,
        write=write,
    )
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
