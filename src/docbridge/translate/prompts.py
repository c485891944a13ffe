"""Instruction templates, one per document type."""

from ..core.models import DocType

_FORMAT_NAMES = {
    DocType.MARKDOWN: "Markdown",
    DocType.HTML: "HTML",
    DocType.PLAINTEXT: "plain text",
}

_PRESERVE_RULES = {
    DocType.MARKDOWN: "Preserve ALL Markdown formatting, code blocks, links, and syntax exactly as is",
    DocType.HTML: "Preserve ALL HTML tags, attributes, entities, scripts, and styles exactly as is",
    DocType.PLAINTEXT: "Preserve ALL line breaks, indentation, and spacing exactly as is",
}

TEMPLATE = """I need this {format_name} document translated to {language}.

IMPORTANT INSTRUCTIONS:
1. Translate ONLY the text content
2. {preserve_rule}
3. DO NOT add any introduction or commentary like "Here's the translation"
4. Start your response with the first translated character of the document
5. Format the output exactly like the input, just with {language} text
6. Preserve all code examples unchanged

Here's the document to translate:
"""


def build_instructions(doc_type: DocType, language: str) -> str:
    return TEMPLATE.format(
        format_name=_FORMAT_NAMES[doc_type],
        language=language,
        preserve_rule=_PRESERVE_RULES[doc_type],
    )


def build_translation_prompt(text: str, doc_type: DocType, language: str = "Japanese") -> str:
    """Instructions, a blank line, then the raw document text."""
    return build_instructions(doc_type, language) + "\n\n" + text
