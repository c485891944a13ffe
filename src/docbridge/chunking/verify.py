"""
Chunk verification: coverage, size bound and empty-chunk checks.
"""

import statistics
from typing import Dict, List


def verify_chunks(text: str, chunks: List[str], max_chunk_size: int) -> Dict:
    """
    Check a chunk list against the document it was cut from.

    Args:
        text: Original document text
        chunks: Chunks produced for text
        max_chunk_size: Bound the chunks were produced under

    Returns:
        Verification results dictionary
    """
    sizes = [len(chunk) for chunk in chunks]
    oversize = [i for i, size in enumerate(sizes) if size > max_chunk_size]
    empty = [i for i, size in enumerate(sizes) if size == 0]
    coverage_ok = "".join(chunks) == text

    return {
        "ok": coverage_ok and not oversize and not empty,
        "coverage_ok": coverage_ok,
        "chunk_count": len(chunks),
        "total_chars": sum(sizes),
        "source_chars": len(text),
        "max_chunk_size": max_chunk_size,
        "oversize_chunks": oversize,
        "empty_chunks": empty,
        "size_stats": {
            "min": min(sizes) if sizes else 0,
            "max": max(sizes) if sizes else 0,
            "median": statistics.median(sizes) if sizes else 0,
        },
    }
