import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..core.artifacts import new_run_id
from ..core.config import Settings, TranslationOptions
from ..core.logging import log
from ..core.models import DocumentJob, FileResult, RunSummary, TranslationOutcome
from ..obs.events import NullObserver, RunObserver
from ..preflight import run_preflight
from ..translate.client import Translator
from ..translate.document import FILE_FAILURE_MARKER, translate_document
from .walker import collect_documents


def _read(source: Path) -> str:
    raw = source.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        # Undecodable bytes become U+FFFD; the file is still translated and written
        log.warning("translate.file.not_utf8", source=str(source))
        return raw.decode("utf-8", errors="replace")


def _write(target: Path, content: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


def translate_file(
    job: DocumentJob,
    translator: Translator,
    options: TranslationOptions | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FileResult:
    """
    Translate one source file into its target path.

    Always returns a FileResult; nothing raised while handling this file
    escapes, so the caller can move on to the next one.
    """
    started = time.monotonic()
    log.info("translate.file.start", source=str(job.source), doc_type=job.doc_type.value)

    def _result(outcome: TranslationOutcome, **kwargs) -> FileResult:
        duration_ms = int((time.monotonic() - started) * 1000)
        return FileResult(job=job, outcome=outcome, duration_ms=duration_ms, **kwargs)

    content: Optional[str] = None
    try:
        content = _read(job.source)

        if not content.strip():
            log.warning("translate.file.empty", source=str(job.source))
            _write(job.target, "")
            return _result(TranslationOutcome.SKIPPED, source_chars=len(content), chunk_count=0)

        translation = translate_document(content, job.doc_type, translator, options, sleep=sleep)
        _write(job.target, translation.text)

        outcome = TranslationOutcome.SUCCESS if translation.succeeded else TranslationOutcome.FAILURE
        return _result(
            outcome,
            source_chars=len(content),
            output_chars=len(translation.text),
            chunk_count=translation.chunk_count,
            failed_chunks=len(translation.failed_chunks),
            error=None if translation.succeeded else "translation failed",
        )

    except Exception as e:
        log.error("translate.file.error", source=str(job.source), error=str(e))
        if content is not None:
            try:
                _write(job.target, FILE_FAILURE_MARKER + content)
            except OSError as write_error:
                log.error("translate.file.fallback_failed", target=str(job.target), error=str(write_error))
        return _result(
            TranslationOutcome.FAILURE,
            source_chars=len(content or ""),
            error=str(e),
        )


def translate_jobs(
    jobs: Iterable[DocumentJob],
    translator: Translator,
    options: TranslationOptions | None = None,
    observer: RunObserver | None = None,
    run_id: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSummary:
    """Translate jobs one after another; a failed file never stops the batch."""
    jobs = list(jobs)
    observer = observer or NullObserver()
    rid = run_id or new_run_id()
    started = time.monotonic()
    summary = RunSummary()

    observer.on_run_start(rid, len(jobs))
    try:
        for job in jobs:
            observer.on_file_start(job)
            result = translate_file(job, translator, options, sleep=sleep)
            summary.results.append(result)
            observer.on_file_complete(rid, result)
    finally:
        # Runs on interrupt too, so the progress display is always stopped
        summary.elapsed = time.monotonic() - started
        observer.on_run_complete(rid, summary)
    return summary


def plan_run(
    settings: Settings,
    source_root: Path,
    latest_only: bool = False,
    require_api_key: bool = True,
) -> List[DocumentJob]:
    """Preflight and scan source_root; raises PreflightError before any file is touched."""
    run_preflight(settings, source_root, require_api_key=require_api_key)

    return collect_documents(
        source_root,
        settings.TRANSLATION_TARGET_DIR,
        settings.TRANSLATION_EXTENSIONS,
        latest_only_hours=settings.LATEST_ONLY_HOURS if latest_only else None,
    )


def run(
    settings: Settings,
    source_root: Path,
    translator: Translator,
    observer: RunObserver | None = None,
    latest_only: bool = False,
    run_id: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
    jobs: Optional[List[DocumentJob]] = None,
) -> RunSummary:
    """
    Preflight, scan source_root, and translate everything found.

    Pass jobs from an earlier plan_run() to translate exactly that plan
    without scanning again.
    """
    if jobs is None:
        jobs = plan_run(settings, source_root, latest_only=latest_only)
    return translate_jobs(
        jobs,
        translator,
        settings.translation_options(),
        observer=observer,
        run_id=run_id,
        sleep=sleep,
    )
