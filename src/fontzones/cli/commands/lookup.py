"""Implementation of the ``fontzones lookup`` command."""

from __future__ import annotations

from typing import Annotated

from rich import box
from rich.table import Table
import typer

from fontzones.lookup import FontLookup

from .._options import ArtifactArgument
from ..state import emit_warning, get_cli_state
from ..utils import format_codepoint, format_fonts, load_artifact


TextArgument = Annotated[str, typer.Argument(metavar="TEXT", help="Text to resolve.")]


def lookup(artifact: ArtifactArgument, text: TextArgument) -> None:
    """Show which fonts of ARTIFACT can render each part of TEXT."""
    lookup_helper = FontLookup(load_artifact(artifact))
    console = get_cli_state().console

    table = Table(box=box.SQUARE, header_style="bold cyan")
    table.add_column("Ranges", style="green")
    table.add_column("Count", justify="right")
    table.add_column("Fonts")
    for entry in lookup_helper.summary(text):
        table.add_row(", ".join(entry["ranges"]), str(entry["count"]), format_fonts(entry["fonts"]))
    console.print(table)

    missing = lookup_helper.uncovered(text)
    if missing:
        emit_warning(
            "No font renders " + ", ".join(format_codepoint(value) for value in missing) + "."
        )


__all__ = ["lookup"]
