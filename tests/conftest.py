"""Global test configuration for docbridge tests."""

from pathlib import Path

import pytest

from docbridge.core.config import Settings
from docbridge.core.errors import TranslationError
from docbridge.core.models import DocType


class FakeTranslator:
    """In-memory translator: records calls and fails on request."""

    def __init__(self, fail_on=None, prefix="[ja] ", raise_exc=None):
        self.calls = []
        self.fail_on = set(fail_on or [])  # zero-based call indexes
        self.prefix = prefix
        self.raise_exc = raise_exc

    def translate(self, text: str, doc_type: DocType) -> str:
        index = len(self.calls)
        self.calls.append((text, doc_type))
        if self.raise_exc is not None:
            raise self.raise_exc
        if index in self.fail_on:
            raise TranslationError(f"simulated failure on call {index}")
        return self.prefix + text

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def no_sleep():
    """Sleep stand-in that records requested delays."""
    delays = []

    def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays  # type: ignore[attr-defined]
    return _sleep


@pytest.fixture
def settings(monkeypatch):
    """Settings isolated from the developer's environment and .env file."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, CLAUDE_API_KEY="test-key", CHUNK_DELAY_SECONDS=0.0)


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """A small documentation tree with a stale target subtree inside it."""
    root = tmp_path / "docs"
    (root / "guide" / "advanced").mkdir(parents=True)
    (root / "jp" / "guide").mkdir(parents=True)

    (root / "index.md").write_text("# Welcome\n\nHello docs.\n", encoding="utf-8")
    (root / "notes.txt").write_text("Plain notes.\n", encoding="utf-8")
    (root / "guide" / "intro.html").write_text("<p>Intro</p>\n", encoding="utf-8")
    (root / "guide" / "advanced" / "deep.md").write_text("## Deep\n\nDive.\n", encoding="utf-8")
    (root / "guide" / "empty.md").write_text("   \n\n", encoding="utf-8")
    (root / "guide" / "diagram.png").write_bytes(b"\x89PNG")
    (root / "jp" / "guide" / "old.md").write_text("# Stale\n", encoding="utf-8")
    return root


@pytest.fixture
def make_translator():
    """Factory for FakeTranslator instances with custom failure behavior."""
    return FakeTranslator
