"""
docbridge chunking package

Splits documents into translation-safe chunks under a character bound:
heading sections first, then paragraphs, then forced cuts near the bound.
"""

from .boundaries import find_cut, force_split, split_by_headings, split_by_paragraphs
from .engine import DEFAULT_MAX_CHUNK_SIZE, pack_paragraphs, split_document
from .verify import verify_chunks

__all__ = [
    "DEFAULT_MAX_CHUNK_SIZE",
    "find_cut",
    "force_split",
    "pack_paragraphs",
    "split_by_headings",
    "split_by_paragraphs",
    "split_document",
    "verify_chunks",
]
