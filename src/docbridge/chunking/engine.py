"""
Chunking engine: heading sections, then greedy paragraph packing, then
forced cuts, so that every chunk fits under the size bound.
"""

from __future__ import annotations

from typing import List

from ..core.models import DocType
from .boundaries import force_split, split_by_headings, split_by_paragraphs

DEFAULT_MAX_CHUNK_SIZE = 8000


def pack_paragraphs(text: str, max_chunk_size: int) -> List[str]:
    """
    Greedily fill chunks with whole paragraphs.

    A paragraph that does not fit seals the current chunk. A paragraph that is
    larger than the bound on its own is force-split into several chunks.
    """
    chunks: List[str] = []
    current = ""

    for paragraph in split_by_paragraphs(text):
        if len(current) + len(paragraph) <= max_chunk_size:
            current += paragraph
            continue

        if current:
            chunks.append(current)
            current = ""

        if len(paragraph) <= max_chunk_size:
            current = paragraph
        else:
            chunks.extend(force_split(paragraph, max_chunk_size))

    if current:
        chunks.append(current)

    return chunks


def split_document(
    text: str,
    doc_type: DocType = DocType.MARKDOWN,
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
) -> List[str]:
    """
    Split a document into ordered chunks of at most max_chunk_size chars.

    Strategy order:
    1. Markdown heading sections (markdown only)
    2. Paragraph packing on blank lines
    3. Forced cut near the bound (sentence end, newline, hard cut)

    Args:
        text: Document text
        doc_type: Governs whether heading sections are used
        max_chunk_size: Upper bound on chunk length in characters

    Returns:
        Chunks whose concatenation equals text
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if not text:
        return []

    if doc_type == DocType.MARKDOWN:
        sections = split_by_headings(text)
    else:
        sections = [text]

    chunks: List[str] = []
    for section in sections:
        if len(section) <= max_chunk_size:
            chunks.append(section)
        else:
            chunks.extend(pack_paragraphs(section, max_chunk_size))

    return chunks
