from contextlib import ExitStack
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..chunking import split_document, verify_chunks
from ..core.config import Settings
from ..core.errors import PreflightError
from ..core.logging import log, setup_logging
from ..core.models import DocType
from ..core.progress import ProgressRenderer
from ..obs.events import CompositeObserver, EventLogObserver, LoggingObserver, RunObserver
from ..pipeline.runner import plan_run, run
from ..translate.client import ClaudeTranslator

app = typer.Typer(add_completion=False, help="docbridge: translate documentation trees with Claude")


@app.callback()
def _init(
    log_format: str = typer.Option("auto", "--log-format", help="Log format: json|plain|auto"),
) -> None:
    setup_logging(log_format)


def _load_settings(config_file: str | None) -> Settings:
    try:
        settings = Settings.load_config(config_file)
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e
    log.info("config.loaded", config_file=config_file or "auto-discovered")
    return settings


def _make_translator(settings: Settings) -> ClaudeTranslator:
    return ClaudeTranslator.from_settings(settings)


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def translate(
    source: str | None = typer.Option(None, "--source", help="Source directory (default: TRANSLATION_SOURCE_DIR)"),
    target: str | None = typer.Option(
        None, "--target", help="Target directory name inside the source dir (default: TRANSLATION_TARGET_DIR)"
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="Config file (.docbridge.yaml auto-discovered)"
    ),
    latest_only: bool = typer.Option(
        False, "--latest-only", help="Only translate files modified within LATEST_ONLY_HOURS"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="List source -> target pairs without translating"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress bar"),
    events: str | None = typer.Option(None, "--events", help="Append per-file events to this NDJSON file"),
) -> None:
    """
    Translate every supported file under the source directory.

    Translations are written to a mirrored tree under <source>/<target>.
    Files that fail are still written, prefixed with a failure marker.
    """
    settings = _load_settings(config_file)
    if source:
        settings.TRANSLATION_SOURCE_DIR = source
    if target:
        settings.TRANSLATION_TARGET_DIR = target

    source_root = Path(settings.TRANSLATION_SOURCE_DIR)
    target_dir = settings.TRANSLATION_TARGET_DIR

    try:
        jobs = plan_run(settings, source_root, latest_only=latest_only, require_api_key=not dry_run)
    except PreflightError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"Starting translation of files from {source_root} to {target_dir}")

    if not jobs:
        typer.echo(f"No translatable files found in {source_root}")
        return

    typer.echo(f"Found {len(jobs)} files to translate")

    if dry_run:
        for job in jobs:
            typer.echo(f"{job.source} -> {job.target}")
        return

    progress_enabled = None if settings.PROGRESS and not no_progress else False
    observers: list[RunObserver] = [
        LoggingObserver(),
        ProgressRenderer(enabled=progress_enabled, no_color=settings.NO_COLOR),
    ]

    with ExitStack() as stack:
        if events:
            observers.append(stack.enter_context(EventLogObserver(events)))
        translator = stack.enter_context(_make_translator(settings))
        summary = run(settings, source_root, translator, observer=CompositeObserver(observers), jobs=jobs)

    typer.echo(
        f"Translation completed: {summary.succeeded} succeeded, "
        f"{summary.failed} failed, {summary.skipped} skipped"
    )


@app.command()
def chunk(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to preview"),
    max_chunk_size: int | None = typer.Option(
        None, "--max-chunk-size", min=1, help="Chunk bound in characters (default: MAX_CHUNK_SIZE)"
    ),
    doc_type: DocType | None = typer.Option(None, "--type", help="Override the type derived from the extension"),
    config_file: str | None = typer.Option(None, "--config", help="Config file"),
) -> None:
    """Preview how a document would be chunked, without translating it."""
    settings = _load_settings(config_file)
    size = max_chunk_size or settings.MAX_CHUNK_SIZE
    kind = doc_type or DocType.from_path(file)

    text = file.read_text(encoding="utf-8")
    chunks = split_document(text, kind, size)
    report = verify_chunks(text, chunks, size)

    table = Table(title=f"{file.name} ({kind.value}, max {size})", show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Chars", justify="right", style="magenta")
    table.add_column("Starts with", style="white")
    for index, piece in enumerate(chunks, start=1):
        first_line = piece.strip().split("\n", 1)[0] if piece.strip() else ""
        table.add_row(str(index), str(len(piece)), first_line[:60])

    console = Console(no_color=settings.NO_COLOR)
    console.print(table)
    console.print(
        f"{report['chunk_count']} chunks, {report['total_chars']} chars, coverage "
        f"{'ok' if report['coverage_ok'] else 'BROKEN'}"
    )
    if not report["ok"]:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
