from __future__ import annotations

# Command implementations for the unitfin CLI.
# Each command module exposes a `run(...)` function that performs the action
# and prints to the console. Typer wrappers in unitfin.cli.app delegate here.

__all__ = [
    "summary",
    "history",
    "categories",
]
