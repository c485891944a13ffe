"""Checks that must pass before a translation run touches any file."""

from pathlib import Path

from .core.config import Settings
from .core.errors import PreflightError


def check_api_key(settings: Settings) -> None:
    if not settings.CLAUDE_API_KEY:
        raise PreflightError("CLAUDE_API_KEY is not set in the environment or .env file")


def check_source_root(source_root: Path) -> None:
    if not source_root.is_dir():
        raise PreflightError(f"Source directory {source_root} does not exist")


def run_preflight(settings: Settings, source_root: Path, require_api_key: bool = True) -> None:
    """Raise PreflightError on the first failed check.

    Dry runs never call the API, so they skip the key check.
    """
    if require_api_key:
        check_api_key(settings)
    check_source_root(source_root)
