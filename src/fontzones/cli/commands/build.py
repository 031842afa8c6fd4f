"""Implementation of the ``fontzones build`` command."""

from __future__ import annotations

from pydantic import ValidationError
import typer

from fontzones.config import ConfigError, build_config
from fontzones.exceptions import FontZonesError
from fontzones.logging import PipelineLogger
from fontzones.pipeline import TableBuilder

from .._options import (
    ConfigOption,
    FontsDirArgument,
    FormatOption,
    KeepPrivateUseOption,
    ManifestOption,
    OutputOption,
    StartOption,
    StopOption,
    WorkersOption,
)
from ..state import emit_error, get_cli_state


def _validation_summary(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def build(
    fonts_dir: FontsDirArgument = None,
    manifest: ManifestOption = None,
    config: ConfigOption = None,
    start: StartOption = None,
    stop: StopOption = None,
    keep_private_use: KeepPrivateUseOption = False,
    workers: WorkersOption = None,
    output: OutputOption = None,
    format: FormatOption = None,
) -> None:
    """Scan FONTS_DIR and write the compacted code point → fonts table."""
    state = get_cli_state()
    try:
        settings = build_config(
            config,
            fonts_dir=fonts_dir,
            manifest=manifest,
            output=output,
            format=format,
            start=start,
            stop=stop,
            skip_private_use=False if keep_private_use else None,
            workers=workers,
        )
    except ValidationError as exc:
        emit_error(f"Invalid build settings: {_validation_summary(exc)}", exception=exc)
        raise typer.Exit(code=1) from exc
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    builder = TableBuilder(logger=PipelineLogger(verbose=state.verbosity >= 1))
    try:
        table, path = builder.run(settings)
    except FontZonesError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    typer.echo(f"{path}: {len(table.font_sets)} font sets, {len(table.zone_starts)} zones")


__all__ = ["build"]
