"""Rules that rewrite the serialized markup instead of the tree.

Each of these serializes the document, applies one textual rewrite, checks
the result still looks like SVG and parses it back. Whitespace spanning tag
boundaries and empty-tag syntax cannot be edited on the tree, which is why
they work on text. ``rewrite_markup`` holds the shared round-trip.
"""

import logging
import re
from typing import Callable
from xml.etree import ElementTree as ET

from .document import Document
from .errors import ProcessingError
from .validator import DOCTYPE_RE, is_valid_svg

logger = logging.getLogger(__name__)

ATTRIBUTE_VALUE_RE = re.compile(r'(\S+)=\s*"([^"]*)"', re.ASCII)
STYLE_ATTRIBUTE_RE = re.compile(r'(?<![\w:-])style\s*=\s*"([^"]*)"')
WHITESPACE_RE = re.compile(r"\s+", re.ASCII)
STYLE_SEPARATOR_RE = re.compile(r"\s*([:;])\s*", re.ASCII)

# Zero-width and separator characters, literal or as numeric references,
# plus CR, LF, TAB and DEL written as numeric references
INVISIBLE_CHARACTERS_RE = re.compile(
    "[\u200b\u200c\u200d\u2028\u2029\u00ad\u007f]"
    r"|&#[xX]0*(?:200[bBcCdD]|202[89]|[aA][dD]|[aAdD9]|7[fF]);"
    r"|&#0*(?:820[345]|823[23]|173|10|13|9|127);"
)

# Comments are matched first so markup-like text inside them is skipped;
# text content never holds a raw "<"
TAG_RE = re.compile(r"<!--.*?-->|<[^<>]*>", re.DOTALL)
EMPTY_TAG_RE = re.compile(r"(<!--.*?-->)|<([a-zA-Z_][\w:.-]*)([^<>]*?)\s*></\2>", re.DOTALL)


def rewrite_markup(
    document: Document, transform: Callable[[str], str], rule_name: str
) -> str:
    """Run a textual rewrite over the document and parse the result back.

    The document keeps its previous content if any step fails.

    Args:
        document: Document to rewrite in place.
        transform: Pure string-to-string rewrite.
        rule_name: Reported in errors.

    Returns:
        The rewritten markup.

    Raises:
        ProcessingError: If the rewrite raises, returns something that is not
            SVG markup, or produces markup that does not parse.
    """
    markup = document.serialize()

    try:
        rewritten = transform(markup)
    except Exception as e:
        raise ProcessingError(f"Rewrite failed: {e}", rule=rule_name) from e

    if not isinstance(rewritten, str):
        raise ProcessingError("Rewrite did not return a string", rule=rule_name)
    if not is_valid_svg(rewritten):
        raise ProcessingError("Rewritten markup is not a valid SVG document", rule=rule_name)

    try:
        document.load(rewritten)
    except ET.ParseError as e:
        raise ProcessingError(f"Rewritten markup does not parse: {e}", rule=rule_name) from e

    logger.debug(
        "%s: %d -> %d characters", rule_name, len(markup), len(rewritten)
    )
    return rewritten


def _rewrite_tags(content: str, rewrite: Callable[[str], str]) -> str:
    """Apply a rewrite to each tag, leaving text and comments alone."""

    def _tag(match: re.Match) -> str:
        tag = match.group(0)
        if tag.startswith("<!--"):
            return tag
        return rewrite(tag)

    return TAG_RE.sub(_tag, content)


def collapse_attribute_whitespace(content: str) -> str:
    """Trim attribute values and collapse inner whitespace runs to one space."""

    def _collapse(match: re.Match) -> str:
        value = WHITESPACE_RE.sub(" ", match.group(2)).strip(" ")
        return f'{match.group(1)}="{value}"'

    return _rewrite_tags(content, lambda tag: ATTRIBUTE_VALUE_RE.sub(_collapse, tag))


def compact_style_attributes(content: str) -> str:
    """Drop spaces around ``:`` and ``;`` in style attributes and the final ``;``.

    Example:
        >>> compact_style_attributes('<a style=" fill : red ; stroke : black ;"/>')
        '<a style="fill:red;stroke:black"/>'
    """

    def _compact(match: re.Match) -> str:
        value = WHITESPACE_RE.sub(" ", match.group(1))
        value = STYLE_SEPARATOR_RE.sub(r"\1", value).strip(" ").rstrip(";")
        return f'style="{value}"'

    return _rewrite_tags(content, lambda tag: STYLE_ATTRIBUTE_RE.sub(_compact, tag))


def remove_doctype(content: str) -> str:
    return DOCTYPE_RE.sub("", content)


def remove_invisible_characters(content: str) -> str:
    return INVISIBLE_CHARACTERS_RE.sub("", content)


def convert_empty_tags(content: str) -> str:
    """Collapse ``<tag ...></tag>`` to ``<tag .../>``, skipping comments.

    Example:
        >>> convert_empty_tags('<rect x="1"></rect>')
        '<rect x="1"/>'
    """

    def _convert(match: re.Match) -> str:
        if match.group(1):
            return match.group(1)
        return f"<{match.group(2)}{match.group(3)}/>"

    return EMPTY_TAG_RE.sub(_convert, content)


class RemoveUnnecessaryWhitespace:
    """Normalize whitespace in attribute values and style declarations."""

    name = "remove_unnecessary_whitespace"

    def apply(self, document: Document) -> None:
        rewrite_markup(
            document,
            lambda content: compact_style_attributes(collapse_attribute_whitespace(content)),
            self.name,
        )


class RemoveDoctype:
    """Remove the document type declaration."""

    name = "remove_doctype"

    def apply(self, document: Document) -> None:
        rewrite_markup(document, remove_doctype, self.name)


class RemoveInvisibleCharacters:
    """Remove zero-width characters and encoded control characters."""

    name = "remove_invisible_characters"

    def apply(self, document: Document) -> None:
        rewrite_markup(document, remove_invisible_characters, self.name)


class ConvertEmptyTagsToSelfClosing:
    """Write empty elements as self-closing tags.

    Documents serialized by this package already self-close empty elements,
    so on a Document the rule leaves the markup as it is. ``convert_empty_tags``
    does the work on markup written by other tools.
    """

    name = "convert_empty_tags_to_self_closing"

    def apply(self, document: Document) -> None:
        rewrite_markup(document, convert_empty_tags, self.name)
