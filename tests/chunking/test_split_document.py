"""Tests for the chunking engine contract."""

import pytest

from docbridge.chunking import split_document
from docbridge.chunking.engine import pack_paragraphs
from docbridge.core.models import DocType

pytestmark = pytest.mark.unit


def _sample_markdown(sections: int = 12, paragraphs: int = 6) -> str:
    parts = ["Preamble before any heading.\n\n"]
    for s in range(sections):
        parts.append(f"## Section {s}\n\n")
        for p in range(paragraphs):
            parts.append(
                f"Paragraph {p} of section {s}. It has a couple of sentences! "
                f"Does it end well? Yes it does.\n\n"
            )
    return "".join(parts)


class TestScenarios:
    """Worked examples of the chunking behavior."""

    def test_small_text_is_a_single_chunk(self):
        text = "Hello.\n\nWorld."
        assert split_document(text, DocType.PLAINTEXT, 100) == [text]
        assert split_document(text, DocType.MARKDOWN, 100) == [text]

    def test_markdown_headings_anchor_chunks(self):
        text = "# A\ntext1\n\n# B\ntext2"
        assert split_document(text, DocType.MARKDOWN, 8000) == ["# A\ntext1\n\n", "# B\ntext2"]

    def test_long_plaintext_without_blank_lines_is_force_split(self):
        sentence = "This sentence is filler text for the forced split path. "
        text = (sentence * 300)[:15000]
        assert "\n\n" not in text

        chunks = split_document(text, DocType.PLAINTEXT, 8000)

        assert len(chunks) >= 2
        assert all(len(c) <= 8000 for c in chunks)
        assert "".join(chunks) == text
        # Cut lands right after a sentence end, not mid-word
        assert chunks[0].endswith(". ")


class TestHeadingSplitting:
    """Heading sections come first for markdown."""

    def test_preamble_counts_as_a_section(self):
        text = "intro\n\n# One\nbody\n## Two\nbody\n### Three\nbody\n"
        chunks = split_document(text, DocType.MARKDOWN, 8000)
        assert len(chunks) == 4
        assert chunks[0] == "intro\n\n"
        assert chunks[1].startswith("# One")
        assert chunks[3].startswith("### Three")

    def test_seven_hashes_is_not_a_heading(self):
        text = "# Real\nbody\n####### not a heading\nmore"
        assert split_document(text, DocType.MARKDOWN, 8000) == [text]

    def test_hash_without_space_is_not_a_heading(self):
        text = "intro\n#hashtag line\n# Heading\nbody"
        chunks = split_document(text, DocType.MARKDOWN, 8000)
        assert chunks == ["intro\n#hashtag line\n", "# Heading\nbody"]

    def test_heading_must_start_the_line(self):
        text = "intro with # inline hash\n  # indented\nend"
        assert split_document(text, DocType.MARKDOWN, 8000) == [text]

    @pytest.mark.parametrize("doc_type", [DocType.HTML, DocType.PLAINTEXT])
    def test_non_markdown_ignores_headings(self, doc_type):
        text = "# A\ntext1\n\n# B\ntext2"
        assert split_document(text, doc_type, 8000) == [text]

    def test_small_sections_are_not_merged(self):
        text = "# A\na\n# B\nb\n# C\nc\n"
        assert len(split_document(text, DocType.MARKDOWN, 8000)) == 3

    def test_oversized_section_falls_back_to_paragraphs(self):
        body = "".join(f"Paragraph number {i} in the big section.\n\n" for i in range(40))
        text = "# Small\nshort\n\n# Big\n\n" + body
        chunks = split_document(text, DocType.MARKDOWN, 200)

        assert chunks[0] == "# Small\nshort\n\n"
        assert chunks[1].startswith("# Big")
        assert len(chunks) > 3
        assert all(len(c) <= 200 for c in chunks)
        assert "".join(chunks) == text


class TestParagraphPacking:
    """Greedy paragraph packing."""

    def test_paragraphs_pack_until_the_bound(self):
        paragraph = "x" * 40 + "\n\n"  # 42 chars
        text = paragraph * 5
        chunks = pack_paragraphs(text, 100)
        assert chunks == [paragraph * 2, paragraph * 2, paragraph]

    def test_exact_fit_stays_in_one_chunk(self):
        text = "a" * 48 + "\n\n" + "b" * 50
        assert pack_paragraphs(text, 100) == [text]

    def test_oversized_paragraph_is_isolated_and_cut(self):
        text = "short\n\n" + "y" * 250 + "\n\nafter"
        chunks = pack_paragraphs(text, 100)
        assert chunks[0] == "short\n\n"
        assert chunks[-1] == "after"
        assert all(len(c) <= 100 for c in chunks)
        assert "".join(chunks) == text

    def test_blank_lines_with_spaces_are_separators(self):
        text = "one\n   \n\t\ntwo"
        chunks = pack_paragraphs(text, 10)
        assert chunks == ["one\n   \n\t\n", "two"]


class TestEdgeCases:
    def test_empty_text_yields_no_chunks(self):
        assert split_document("", DocType.MARKDOWN, 100) == []

    def test_whitespace_only_text_is_one_chunk(self):
        assert split_document("  \n\n \t", DocType.MARKDOWN, 100) == ["  \n\n \t"]

    def test_non_positive_bound_is_rejected(self):
        with pytest.raises(ValueError):
            split_document("text", DocType.PLAINTEXT, 0)

    def test_no_empty_chunks(self):
        text = "\n\n\n\n# H\n\n\n\nbody\n\n\n\n"
        chunks = split_document(text, DocType.MARKDOWN, 5)
        assert all(chunks)
        assert "".join(chunks) == text


class TestContract:
    """Coverage, bound and order hold across inputs and sizes."""

    @pytest.mark.parametrize("max_size", [1, 7, 50, 333, 1000, 8000])
    @pytest.mark.parametrize("doc_type", list(DocType))
    def test_coverage_and_bound(self, max_size, doc_type):
        text = _sample_markdown()
        chunks = split_document(text, doc_type, max_size)

        assert "".join(chunks) == text
        assert all(0 < len(c) <= max_size for c in chunks)

    def test_order_is_preserved(self):
        text = _sample_markdown(sections=8)
        chunks = split_document(text, DocType.MARKDOWN, 120)

        positions = []
        offset = 0
        for c in chunks:
            positions.append(text.index(c, offset))
            offset += len(c)
        assert positions == sorted(positions)
        assert positions[0] == 0

    def test_heading_count_matches_section_count(self):
        text = _sample_markdown(sections=5, paragraphs=1)
        chunks = split_document(text, DocType.MARKDOWN, 8000)
        # 5 headings plus the preamble
        assert len(chunks) == 6
