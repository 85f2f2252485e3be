"""Heuristic check that markup looks like an SVG document."""

import re

XML_DECLARATION_RE = re.compile(r"^\s*<\?xml\s[^>]*\?>\s*", re.IGNORECASE)
DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>]*>", re.IGNORECASE)
PROCESSING_INSTRUCTION_RE = re.compile(r"^(?:\s*<\?.*?\?>)+", re.DOTALL)
SVG_OPEN_TAG_RE = re.compile(r"^\s*<svg\b[^>]*>", re.IGNORECASE)


def strip_xml_declaration(markup: str) -> str:
    """Remove a leading ``<?xml ...?>`` declaration and the whitespace around it."""
    return XML_DECLARATION_RE.sub("", markup, count=1)


def is_valid_svg(markup: str | None) -> bool:
    """Check whether markup is plausibly an SVG document.

    The XML declaration, any DOCTYPE and leading processing instructions such
    as ``<?xml-stylesheet ...?>`` are ignored; what remains must open with an
    ``<svg>`` tag. This is not schema validation.

    Args:
        markup: Raw markup.

    Returns:
        True if the markup starts with an svg element.
    """
    if not isinstance(markup, str):
        return False

    content = strip_xml_declaration(markup)
    content = DOCTYPE_RE.sub("", content)
    content = PROCESSING_INSTRUCTION_RE.sub("", content, count=1)
    return SVG_OPEN_TAG_RE.match(content) is not None
