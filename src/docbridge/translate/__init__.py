"""
Translation step: prompt templates, the Claude client and the chunk-by-chunk
document translator.
"""

from .client import ClaudeTranslator, Translator
from .document import (
    CHUNK_FAILURE_MARKER,
    CHUNK_SEPARATOR,
    FILE_FAILURE_MARKER,
    translate_chunks,
    translate_document,
)
from .prompts import build_translation_prompt

__all__ = [
    "CHUNK_FAILURE_MARKER",
    "CHUNK_SEPARATOR",
    "FILE_FAILURE_MARKER",
    "ClaudeTranslator",
    "Translator",
    "build_translation_prompt",
    "translate_chunks",
    "translate_document",
]
