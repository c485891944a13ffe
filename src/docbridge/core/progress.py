"""Progress rendering for TTY output with Rich."""

import os
import sys
from typing import TextIO

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from .models import DocumentJob, FileResult, RunSummary, TranslationOutcome


def is_tty() -> bool:
    """Check if stdout is a TTY (interactive terminal)."""
    return sys.stdout.isatty()


def is_ci() -> bool:
    """Check if running in CI environment."""
    ci_vars = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]
    return any(os.environ.get(var) for var in ci_vars)


def should_use_pretty() -> bool:
    """Determine if pretty output should be used based on TTY and CI detection."""
    return is_tty() and not is_ci()


_OUTCOME_STYLE = {
    TranslationOutcome.SUCCESS: "green",
    TranslationOutcome.FAILURE: "red",
    TranslationOutcome.SKIPPED: "yellow",
}


class ProgressRenderer:
    """Progress bar plus start/finish panels for a translation run.

    Implements the RunObserver protocol.
    """

    def __init__(
        self,
        enabled: bool | None = None,
        file: TextIO | None = None,
        no_color: bool = False,
    ):
        """
        Initialize progress renderer.

        Args:
            enabled: Whether to show progress. Auto-detected if None.
            file: Output file, defaults to stderr.
            no_color: Disable color output for Rich console.
        """
        self.enabled = enabled if enabled is not None else should_use_pretty()
        self.file = file or sys.stderr
        self.console = Console(
            file=self.file,
            color_system=None if no_color else "auto",
            force_terminal=self.enabled,
        )
        self.progress: Progress | None = None
        self.task: TaskID | None = None

    def on_run_start(self, run_id: str, total: int) -> None:
        if not self.enabled:
            return

        self.console.print(
            Panel(
                f"[bold]Run:[/bold] [cyan]{run_id}[/cyan]\n[bold]Files:[/bold] {total}",
                title="[bold green]Translation[/bold green]",
                border_style="blue",
            )
        )
        self.progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        self.progress.start()
        self.task = self.progress.add_task("Starting...", total=total)

    def on_file_start(self, job: DocumentJob) -> None:
        if self.progress is not None and self.task is not None:
            self.progress.update(self.task, description=f"Translating: {job.source.name}")

    def on_file_complete(self, run_id: str, result: FileResult) -> None:
        if self.progress is not None and self.task is not None:
            self.progress.advance(self.task)

    def on_run_complete(self, run_id: str, summary: RunSummary) -> None:
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
            self.task = None
        if not self.enabled:
            return
        self.console.print(summary_table(summary))


def summary_table(summary: RunSummary) -> Table:
    """Per-file outcome table followed by totals in the caption."""
    table = Table(title="Translation Summary", show_header=True, header_style="bold blue")
    table.add_column("File", style="cyan")
    table.add_column("Type", style="dim")
    table.add_column("Outcome")
    table.add_column("Chunks", justify="right")
    table.add_column("Chars", justify="right", style="magenta")

    for result in summary.results:
        style = _OUTCOME_STYLE[result.outcome]
        table.add_row(
            str(result.job.relative_path),
            result.job.doc_type.value,
            f"[{style}]{result.outcome.value}[/{style}]",
            str(result.chunk_count),
            str(result.source_chars),
        )

    table.caption = (
        f"{summary.succeeded} succeeded, {summary.failed} failed, "
        f"{summary.skipped} skipped in {summary.elapsed:.1f}s"
    )
    return table
