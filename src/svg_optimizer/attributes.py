"""Attribute cleanup rules: sorting, renaming and pruning."""

import logging
import re

from .document import Document
from .utils import SVG_NAMESPACES, get_local_name, get_namespace_uri, qualify

logger = logging.getLogger(__name__)

# Always written first, in this order
PRIORITY_ATTRIBUTES = ("id", "width", "height")

# Old name -> replacement
RENAMED_ATTRIBUTES = {
    "xlink:href": "href",
    "xlink:title": "title",
    "xml:lang": "lang",
}

DEPRECATED_ATTRIBUTES = (
    "baseProfile",
    "requiredFeatures",
    "version",
    "xlink:arcrole",
    "xlink:show",
    "xlink:type",
    "zoomAndPan",
)

DEFAULT_ATTRIBUTE_VALUES = {
    "fill": "none",
    "stroke": "none",
}

WHITESPACE_RE = re.compile(r"\s+")

ENABLE_BACKGROUND_RE = re.compile(
    r"^new\s0\s0\s([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)$"
)


def attribute_sort_key(name: str) -> str:
    """Sort key for an attribute: ``uri:local`` when namespaced, else the name."""
    uri = get_namespace_uri(name)
    if uri:
        return f"{uri}:{get_local_name(name)}"
    return name


def sorted_attributes(attrib: dict[str, str]) -> list[tuple[str, str]]:
    """Order attributes: id, width, height, then the rest by sort key.

    Example:
        >>> sorted_attributes({"y": "1", "height": "2", "x": "3", "id": "a"})
        [('id', 'a'), ('height', '2'), ('x', '3'), ('y', '1')]
    """
    priority = [name for name in PRIORITY_ATTRIBUTES if name in attrib]
    rest = sorted(
        (name for name in attrib if name not in PRIORITY_ATTRIBUTES),
        key=attribute_sort_key,
    )
    return [(name, attrib[name]) for name in priority + rest]


class SortAttributes:
    """Put attributes in a stable order, which helps compression."""

    name = "sort_attributes"

    def apply(self, document: Document) -> None:
        for elem in document.iter_elements():
            ordered = sorted_attributes(elem.attrib)
            elem.attrib.clear()
            for key, value in ordered:
                elem.set(key, value)


class RemoveDeprecatedAttributes:
    """Replace or drop attributes deprecated in SVG 2."""

    name = "remove_deprecated_attributes"

    def apply(self, document: Document) -> None:
        for old_name, new_name in RENAMED_ATTRIBUTES.items():
            qualified = qualify(old_name)
            for elem in document.iter_with_attribute(qualified):
                value = elem.attrib.pop(qualified)
                if elem.get(new_name) != value:
                    elem.set(new_name, value)

        # Only the root declaration; leftover xlink attributes get redeclared on write
        if document.namespaces.get("xlink") == SVG_NAMESPACES["xlink"]:
            del document.namespaces["xlink"]

        removed = 0
        for name in DEPRECATED_ATTRIBUTES:
            qualified = qualify(name)
            for elem in document.iter_with_attribute(qualified):
                del elem.attrib[qualified]
                removed += 1

        logger.debug("Removed %d deprecated attributes", removed)


class RemoveDefaultAttributes:
    """Remove ``fill="none"`` and ``stroke="none"``."""

    name = "remove_default_attributes"

    def apply(self, document: Document) -> None:
        for attribute, default in DEFAULT_ATTRIBUTE_VALUES.items():
            for elem in document.iter_with_attribute(attribute):
                if elem.attrib[attribute] == default:
                    del elem.attrib[attribute]


def is_empty_value(value: str) -> bool:
    """Check if an attribute value is empty once whitespace is removed."""
    return WHITESPACE_RE.sub("", value) == ""


class RemoveEmptyAttributes:
    """Remove attributes with blank values."""

    name = "remove_empty_attributes"

    def apply(self, document: Document) -> None:
        for elem in document.iter_elements():
            for key in [key for key, value in elem.attrib.items() if is_empty_value(value)]:
                del elem.attrib[key]


def is_redundant_enable_background(value: str, width: str | None, height: str | None) -> bool:
    """Check if ``enable-background`` only restates the element's own size.

    Example:
        >>> is_redundant_enable_background("new 0 0 100 50", "100", "50")
        True
        >>> is_redundant_enable_background("new 0 0 100 50", "100", "60")
        False
    """
    match = ENABLE_BACKGROUND_RE.match(value)
    if match is None:
        return False
    return match.group(1) == width and match.group(2) == height


class RemoveEnableBackgroundAttribute:
    """Remove ``enable-background`` when it matches the element's size."""

    name = "remove_enable_background_attribute"

    def apply(self, document: Document) -> None:
        for elem in document.iter_with_attribute("enable-background"):
            if is_redundant_enable_background(
                elem.attrib["enable-background"], elem.get("width"), elem.get("height")
            ):
                del elem.attrib["enable-background"]
