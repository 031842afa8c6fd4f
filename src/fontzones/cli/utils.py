"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer

from fontzones.exceptions import EncodingInvariantError
from fontzones.serializer import load
from fontzones.table import FontTable

from .state import emit_error


def load_artifact(path: Path) -> FontTable:
    """Load a font table or exit with a diagnostic."""
    try:
        return load(path)
    except (EncodingInvariantError, ValueError) as exc:
        emit_error(f"Cannot load font table '{path}': {exc}", exception=exc)
        raise typer.Exit(code=1) from exc


def format_codepoint(value: int) -> str:
    return f"U+{value:04X}"


def format_fonts(fonts: tuple[str, ...] | list[str]) -> str:
    return ", ".join(fonts) if fonts else "-"


__all__ = ["format_codepoint", "format_fonts", "load_artifact"]
