"""Implementation of the ``fontzones inspect`` command."""

from __future__ import annotations

from rich import box
from rich.table import Table

from .._options import ArtifactArgument
from ..state import get_cli_state
from ..utils import format_codepoint, format_fonts, load_artifact


def inspect(artifact: ArtifactArgument) -> None:
    """Print the font sets and zones stored in ARTIFACT."""
    table = load_artifact(artifact)
    console = get_cli_state().console

    groups = Table(title="Font sets", box=box.SQUARE, header_style="bold cyan")
    groups.add_column("Group", justify="right", style="magenta")
    groups.add_column("Fonts")
    for index, fonts in enumerate(table.font_sets):
        groups.add_row(str(index), format_fonts(fonts))
    console.print(groups)

    zones = Table(title="Zones", box=box.SQUARE, header_style="bold cyan")
    zones.add_column("First", style="green")
    zones.add_column("Last", style="green")
    zones.add_column("Group", justify="right", style="magenta")
    for (first, last, _fonts), index in zip(table.iter_ranges(), table.zone_font_sets):
        zones.add_row(format_codepoint(first), format_codepoint(last), str(index))
    console.print(zones)


__all__ = ["inspect"]
