"""User-facing reporting of run outcomes."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from helm_wrapper.core.orchestrator import RunResult
from helm_wrapper.output.themes import styled_stage

err_console = Console(stderr=True)


def report_failure(result: RunResult, console: Console | None = None) -> None:
    """Print ``Error [<stage>]: <message>`` to the error console."""
    console = console or err_console
    console.print(
        f"[bold red]Error[/bold red] \\[{styled_stage(result.stage)}]: {escape(str(result.error))}",
        highlight=False,
    )
