"""
Boundary detection and splitting strategies for chunking.

Every splitter here is lossless: joining its output with "" gives back the
input exactly. Separators stay attached to the piece they follow.
"""

import re
from typing import List

# 1-6 hashes, horizontal whitespace, then some text, at the start of a line
HEADING_RE = re.compile(r"^#{1,6}[ \t]+\S", re.MULTILINE)
PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
SENTENCE_END_RE = re.compile(r"[.!?]\s")

LOOKBACK_WINDOW = 200


def heading_offsets(text: str) -> List[int]:
    """Start offsets of all markdown heading lines."""
    return [m.start() for m in HEADING_RE.finditer(text)]


def split_by_headings(text: str) -> List[str]:
    """Split markdown text into sections, each starting at a heading.

    Text before the first heading is its own section when non-empty.
    """
    starts = heading_offsets(text)
    if not starts:
        return [text] if text else []

    bounds = [0] + starts + [len(text)]
    sections = []
    for start, end in zip(bounds, bounds[1:]):
        if end > start:
            sections.append(text[start:end])
    return sections


def split_by_paragraphs(text: str) -> List[str]:
    """Split on blank lines, keeping each separator on the preceding paragraph."""
    paragraphs = []
    pos = 0
    for match in PARAGRAPH_BREAK_RE.finditer(text):
        paragraphs.append(text[pos : match.end()])
        pos = match.end()
    if pos < len(text):
        paragraphs.append(text[pos:])
    return paragraphs


def find_cut(text: str, max_size: int) -> int:
    """Pick a cut offset in (0, max_size] for text longer than max_size.

    Preference: just after a sentence end, then just after a newline, both
    within LOOKBACK_WINDOW chars of the bound; otherwise the bound itself.
    """
    lo = max(0, max_size - LOOKBACK_WINDOW)
    window = text[lo:max_size]

    last_sentence = None
    for match in SENTENCE_END_RE.finditer(window):
        last_sentence = match
    if last_sentence is not None:
        return lo + last_sentence.end()

    newline = window.rfind("\n")
    if newline != -1:
        return lo + newline + 1

    return max_size


def force_split(text: str, max_size: int) -> List[str]:
    """Cut text into pieces of at most max_size chars, preferring sentence ends."""
    pieces = []
    rest = text
    while len(rest) > max_size:
        cut = find_cut(rest, max_size)
        pieces.append(rest[:cut])
        rest = rest[cut:]
    if rest:
        pieces.append(rest)
    return pieces
