"""Source tree scanning.

Walks the documentation root, skips the translation target subtree, and
pairs every translatable file with its mirrored target path.
"""

import time
from collections.abc import Iterator
from pathlib import Path

from ..core.logging import log
from ..core.models import DocType, DocumentJob


def _normalize_extensions(extensions: list[str]) -> set[str]:
    return {"." + ext.lower().lstrip(".") for ext in extensions}


def target_path_for(source: Path, source_root: Path, target_root: Path) -> Path:
    """Mirror source's position under source_root into target_root."""
    return target_root / source.relative_to(source_root)


def iter_documents(
    source_root: Path,
    target_dir: str,
    extensions: list[str],
    latest_only_hours: int | None = None,
    now: float | None = None,
) -> Iterator[DocumentJob]:
    """
    Yield one DocumentJob per translatable file under source_root.

    Args:
        source_root: Documentation root
        target_dir: Name of the target subtree inside source_root; any
            directory with this name is skipped
        extensions: Extensions to translate, with or without the dot
        latest_only_hours: Only files modified within this many hours
        now: Reference time for latest_only_hours (defaults to time.time())

    Yields:
        Jobs in sorted path order
    """
    source_root = Path(source_root)
    target_root = source_root / target_dir
    suffixes = _normalize_extensions(extensions)
    cutoff = None
    if latest_only_hours is not None:
        cutoff = (now if now is not None else time.time()) - latest_only_hours * 3600

    skipped_old = 0
    for file_path in sorted(source_root.rglob("*")):
        if not file_path.is_file():
            continue

        rel_path = file_path.relative_to(source_root)
        if target_dir in rel_path.parts[:-1]:
            continue

        if file_path.suffix.lower() not in suffixes:
            continue

        if cutoff is not None and file_path.stat().st_mtime < cutoff:
            skipped_old += 1
            continue

        yield DocumentJob(
            source=file_path,
            target=target_path_for(file_path, source_root, target_root),
            relative_path=rel_path,
            doc_type=DocType.from_path(file_path),
        )

    if skipped_old:
        log.info("walker.scan.skipped_old", count=skipped_old, hours=latest_only_hours)


def collect_documents(
    source_root: Path,
    target_dir: str,
    extensions: list[str],
    latest_only_hours: int | None = None,
) -> list[DocumentJob]:
    jobs = list(iter_documents(source_root, target_dir, extensions, latest_only_hours))
    log.info("walker.scan.complete", root=str(source_root), files_found=len(jobs))
    return jobs
