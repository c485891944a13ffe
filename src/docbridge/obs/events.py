"""Per-file completion events and the observers that consume them."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol, Sequence, TextIO

from pydantic import BaseModel, Field

from ..core.logging import log
from ..core.models import DocumentJob, FileResult, RunSummary, TranslationOutcome


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class FileEvent(BaseModel):
    """Serialized record of one finished file."""

    ts: str = Field(default_factory=_utc_now, description="ISO 8601 timestamp with Z suffix")
    run_id: str
    source: str
    target: str
    doc_type: str
    outcome: TranslationOutcome
    source_chars: int = 0
    output_chars: int = 0
    chunks: int = 0
    failed_chunks: int = 0
    duration_ms: int = 0
    error: Optional[str] = None

    @classmethod
    def from_result(cls, run_id: str, result: FileResult) -> "FileEvent":
        return cls(
            run_id=run_id,
            source=str(result.job.relative_path),
            target=str(result.job.target),
            doc_type=result.job.doc_type.value,
            outcome=result.outcome,
            source_chars=result.source_chars,
            output_chars=result.output_chars,
            chunks=result.chunk_count,
            failed_chunks=result.failed_chunks,
            duration_ms=result.duration_ms,
            error=result.error,
        )


class RunObserver(Protocol):
    """Receives progress notifications from a translation run."""

    def on_run_start(self, run_id: str, total: int) -> None: ...

    def on_file_start(self, job: DocumentJob) -> None: ...

    def on_file_complete(self, run_id: str, result: FileResult) -> None: ...

    def on_run_complete(self, run_id: str, summary: RunSummary) -> None: ...


class NullObserver:
    def on_run_start(self, run_id: str, total: int) -> None:
        pass

    def on_file_start(self, job: DocumentJob) -> None:
        pass

    def on_file_complete(self, run_id: str, result: FileResult) -> None:
        pass

    def on_run_complete(self, run_id: str, summary: RunSummary) -> None:
        pass


class LoggingObserver(NullObserver):
    """Report run progress through structlog."""

    def on_run_start(self, run_id: str, total: int) -> None:
        log.info("translate.run.start", run_id=run_id, files=total)

    def on_file_complete(self, run_id: str, result: FileResult) -> None:
        fields = dict(
            run_id=run_id,
            source=str(result.job.relative_path),
            outcome=result.outcome.value,
            chunks=result.chunk_count,
            duration_ms=result.duration_ms,
        )
        if result.outcome == TranslationOutcome.FAILURE:
            log.error("translate.file.failed", error=result.error, failed_chunks=result.failed_chunks, **fields)
        elif result.outcome == TranslationOutcome.SKIPPED:
            log.warning("translate.file.skipped", **fields)
        else:
            log.info("translate.file.done", target=str(result.job.target), **fields)

    def on_run_complete(self, run_id: str, summary: RunSummary) -> None:
        log.info(
            "translate.run.done",
            run_id=run_id,
            succeeded=summary.succeeded,
            failed=summary.failed,
            skipped=summary.skipped,
            elapsed=round(summary.elapsed, 2),
        )


class EventLogObserver(NullObserver):
    """Append one JSON line per finished file to an NDJSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._file: Optional[TextIO] = None

    def __enter__(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file:
            self._file.close()
            self._file = None

    def on_file_complete(self, run_id: str, result: FileResult) -> None:
        if not self._file:
            return
        self._file.write(FileEvent.from_result(run_id, result).model_dump_json(exclude_none=True) + "\n")
        self._file.flush()


class CompositeObserver:
    """Fan notifications out to several observers, in order."""

    def __init__(self, observers: Sequence[RunObserver]):
        self.observers = list(observers)

    def on_run_start(self, run_id: str, total: int) -> None:
        for observer in self.observers:
            observer.on_run_start(run_id, total)

    def on_file_start(self, job: DocumentJob) -> None:
        for observer in self.observers:
            observer.on_file_start(job)

    def on_file_complete(self, run_id: str, result: FileResult) -> None:
        for observer in self.observers:
            observer.on_file_complete(run_id, result)

    def on_run_complete(self, run_id: str, summary: RunSummary) -> None:
        for observer in self.observers:
            observer.on_run_complete(run_id, summary)
