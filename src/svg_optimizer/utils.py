"""Utility functions for SVG names, namespaces and logging."""

import logging
import sys
from xml.etree import ElementTree as ET

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "xlink": "http://www.w3.org/1999/xlink",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

# Shape elements whose geometry attributes hold plain numbers
SHAPE_ELEMENTS = frozenset(
    [
        "rect",
        "circle",
        "ellipse",
        "line",
        "polyline",
        "polygon",
    ]
)

# Elements whose whitespace-only text is content, not indentation
TEXT_CONTENT_ELEMENTS = frozenset(
    [
        "text",
        "tspan",
        "textPath",
        "title",
        "desc",
        "style",
        "script",
    ]
)


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Args:
        tag: Full tag name, possibly with namespace.

    Returns:
        Local name without namespace prefix.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}rect")
        'rect'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def get_namespace_uri(tag: str) -> str | None:
    """Extract the namespace URI from a Clark-notation name.

    Example:
        >>> get_namespace_uri("{http://www.w3.org/1999/xlink}href")
        'http://www.w3.org/1999/xlink'
    """
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def qualify(name: str) -> str:
    """Turn a ``prefix:local`` name into Clark notation.

    Only the well-known prefixes in SVG_NAMESPACES are expanded; unprefixed
    names are returned as-is.

    Example:
        >>> qualify("xlink:href")
        '{http://www.w3.org/1999/xlink}href'
    """
    if ":" not in name:
        return name
    prefix, local = name.split(":", 1)
    uri = SVG_NAMESPACES.get(prefix)
    if uri is None:
        raise ValueError(f"Unknown namespace prefix: {prefix}")
    return f"{{{uri}}}{local}"


def is_element(node: ET.Element) -> bool:
    """Check if a node is an element (not a comment or processing instruction)."""
    return isinstance(node.tag, str)


def is_svg_element(node: ET.Element, local_name: str) -> bool:
    """Check if a node is the given SVG element.

    Elements in the SVG namespace and un-namespaced elements both match.
    """
    if not is_element(node):
        return False
    uri = get_namespace_uri(node.tag)
    if uri is not None and uri != SVG_NAMESPACES["svg"]:
        return False
    return get_local_name(node.tag) == local_name


def byte_length(content: str) -> int:
    """Length of a string in UTF-8 bytes."""
    return len(content.encode("utf-8"))


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging with a console handler on stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to honor verbosity changes
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    logger.addHandler(handler)
