"""CLI command implementations exposed via `fontzones.cli`.

Re-exports the Typer command callables defined in the sibling modules so they
can be imported using dotted paths (e.g. ``fontzones.cli.commands.build``).
"""

from __future__ import annotations

from .build import build
from .inspect import inspect
from .lookup import lookup


__all__ = ["build", "inspect", "lookup"]
