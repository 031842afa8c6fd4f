"""Small logging helpers that integrate with the fontzones CLI."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import typer


def _resolve_state() -> object | None:
    try:
        from fontzones.cli.state import get_cli_state
    except Exception:  # pragma: no cover - fallback when CLI is unavailable
        return None
    try:
        return get_cli_state(create=False)
    except Exception:
        return None


@dataclass(slots=True)
class PipelineLogger:
    """Light wrapper around the CLI state with graceful degradation."""

    verbose: bool = False
    _state: object | None = None

    def __post_init__(self) -> None:
        self._state = _resolve_state()

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *(str(arg) for arg in args)])
        return message

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            console = getattr(self._state, "console", None)
            if console is not None:
                console.log(message)
                return
        typer.echo(message, err=True)

    def warning(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            from fontzones.cli.state import emit_warning

            emit_warning(message)
            return
        typer.secho(message, fg="yellow", err=True)

    def notice(self, message: str, *args: Any) -> None:
        """Alias for info to mirror the CLI vocabulary."""
        self.info(message, *args)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a debug/verbose message when verbose mode is enabled."""
        if not self.verbose:
            return
        self.info(message, *args)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[[int], None]]:
        """Yield a progress updater rendered as a Rich progress bar."""
        from rich.progress import (
            BarColumn,
            Progress,
            SpinnerColumn,
            TaskID,
            TextColumn,
            TimeElapsedColumn,
        )

        if self._state is not None:
            console = self._state.err_console
        else:
            from rich.console import Console

            console = Console(stderr=True)

        with Progress(
            SpinnerColumn(),
            TextColumn(f"[bold cyan]{task}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}" if total else "{task.completed}"),
            TimeElapsedColumn(),
            console=console,
            transient=not self.verbose,
        ) as progress:
            task_id: TaskID = progress.add_task(task, total=total)

            def _advance(step: int = 1) -> None:
                progress.update(task_id, advance=step)

            yield _advance


__all__ = ["PipelineLogger"]
