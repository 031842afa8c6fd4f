"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Inputs"
SCAN_PANEL = "Scan"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"


def parse_codepoint(value: str) -> int:
    """Parse ``U+XXXX``, ``0xXXXX`` or decimal code points."""
    text = value.strip()
    try:
        if text[:2].lower() in {"u+", "0x"}:
            return int(text[2:], 16)
        return int(text, 10)
    except ValueError:
        raise typer.BadParameter(
            f"'{value}' is not a code point (use U+XXXX, 0xXXXX or decimal)."
        ) from None


FontsDirArgument = Annotated[
    Path | None,
    typer.Argument(
        metavar="FONTS_DIR",
        help="Directory containing the font files to probe.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ManifestOption = Annotated[
    Path | None,
    typer.Option(
        "--manifest",
        "-m",
        help="YAML file listing the fonts in probing order.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file with build settings; command-line options take precedence.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

StartOption = Annotated[
    int | None,
    typer.Option(
        "--start",
        parser=parse_codepoint,
        metavar="CODEPOINT",
        help="First code point to scan (default U+0000).",
        rich_help_panel=SCAN_PANEL,
    ),
]

StopOption = Annotated[
    int | None,
    typer.Option(
        "--stop",
        parser=parse_codepoint,
        metavar="CODEPOINT",
        help="Code point where the scan stops, exclusive (default U+10FFFF).",
        rich_help_panel=SCAN_PANEL,
    ),
]

KeepPrivateUseOption = Annotated[
    bool,
    typer.Option(
        "--keep-private-use",
        help="Probe private-use code points instead of mapping them to no font.",
        rich_help_panel=SCAN_PANEL,
    ),
]

WorkersOption = Annotated[
    int | None,
    typer.Option(
        "--workers",
        "-j",
        min=1,
        help="Number of threads probing fonts.",
        rich_help_panel=SCAN_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Artifact path (default fontzones.json).",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FormatOption = Annotated[
    str | None,
    typer.Option(
        "--format",
        "-f",
        help="Artifact format: json or python. Inferred from the output suffix by default.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ArtifactArgument = Annotated[
    Path,
    typer.Argument(
        metavar="ARTIFACT",
        help="Font table written by 'fontzones build'.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase output verbosity (repeat for more detail).",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on failure.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
