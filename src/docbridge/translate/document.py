"""
Drive the translator over one document, chunk by chunk when it is large,
and stitch the results back together.
"""

from __future__ import annotations

import time
from typing import Callable, List

from ..chunking import split_document
from ..core.config import TranslationOptions
from ..core.errors import TranslationError
from ..core.logging import log
from ..core.models import DocType, DocumentTranslation
from .client import Translator

FILE_FAILURE_MARKER = "<!-- Translation failed for this file -->\n"
CHUNK_FAILURE_MARKER = "<!-- Translation failed for this chunk -->\n"
CHUNK_SEPARATOR = "\n\n"


def translate_document(
    text: str,
    doc_type: DocType,
    translator: Translator,
    options: TranslationOptions | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> DocumentTranslation:
    """
    Translate a whole document.

    Documents up to options.large_file_threshold chars go out in a single
    call. Larger ones are chunked; a failed chunk is replaced by its original
    text behind CHUNK_FAILURE_MARKER and the rest still get translated.

    Args:
        text: Source document text
        doc_type: Document type, selects chunking and prompt template
        translator: Translation backend
        options: Threshold, chunk size and inter-chunk delay
        sleep: Delay function, injectable for tests

    Returns:
        DocumentTranslation; succeeded is False if any call failed
    """
    options = options or TranslationOptions()

    if len(text) <= options.large_file_threshold:
        try:
            return DocumentTranslation(text=translator.translate(text, doc_type), succeeded=True)
        except TranslationError as e:
            log.warning("translate.document.failed", error=str(e), chars=len(text))
            return DocumentTranslation(
                text=FILE_FAILURE_MARKER + text,
                succeeded=False,
                failed_chunks=[0],
            )

    chunks = split_document(text, doc_type, options.max_chunk_size)
    log.info("translate.document.chunked", chunks=len(chunks), chars=len(text))
    return translate_chunks(chunks, doc_type, translator, options.chunk_delay, sleep)


def translate_chunks(
    chunks: List[str],
    doc_type: DocType,
    translator: Translator,
    delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> DocumentTranslation:
    """Translate chunks in order, pausing between calls, and join the results."""
    results: List[str] = []
    failed: List[int] = []

    for index, chunk in enumerate(chunks):
        log.info("translate.chunk.start", chunk=index + 1, of=len(chunks), chars=len(chunk))
        try:
            results.append(translator.translate(chunk, doc_type))
        except TranslationError as e:
            log.error("translate.chunk.failed", chunk=index + 1, error=str(e))
            results.append(CHUNK_FAILURE_MARKER + chunk)
            failed.append(index)

        if index < len(chunks) - 1 and delay > 0:
            sleep(delay)

    return DocumentTranslation(
        text=CHUNK_SEPARATOR.join(results),
        succeeded=not failed,
        chunk_count=len(chunks),
        failed_chunks=failed,
    )
