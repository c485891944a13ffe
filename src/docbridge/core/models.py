from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class DocType(str, Enum):
    """Document flavours; drives chunk boundaries and the prompt template."""

    MARKDOWN = "markdown"
    HTML = "html"
    PLAINTEXT = "plaintext"

    @classmethod
    def from_path(cls, path: Path | str) -> "DocType":
        suffix = Path(path).suffix.lower()
        if suffix in (".md", ".markdown"):
            return cls.MARKDOWN
        if suffix in (".html", ".htm"):
            return cls.HTML
        return cls.PLAINTEXT


class TranslationOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"  # empty source, empty target written


class DocumentTranslation(BaseModel):
    """Joined output of one document plus how the chunks fared."""

    text: str
    succeeded: bool
    chunk_count: int = 1
    failed_chunks: list[int] = []  # zero-based chunk indexes


class DocumentJob(BaseModel):
    """One source file and where its translation goes."""

    source: Path
    target: Path
    relative_path: Path
    doc_type: DocType


class FileResult(BaseModel):
    job: DocumentJob
    outcome: TranslationOutcome
    source_chars: int = 0
    output_chars: int = 0
    chunk_count: int = 0
    failed_chunks: int = 0
    duration_ms: int = 0
    error: str | None = None


class RunSummary(BaseModel):
    results: list[FileResult] = []
    elapsed: float = 0.0

    def count(self, outcome: TranslationOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def succeeded(self) -> int:
        return self.count(TranslationOutcome.SUCCESS)

    @property
    def failed(self) -> int:
        return self.count(TranslationOutcome.FAILURE)

    @property
    def skipped(self) -> int:
        return self.count(TranslationOutcome.SKIPPED)
