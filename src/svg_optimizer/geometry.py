"""Coordinate and transform minification rules."""

import logging
import re
from decimal import Decimal

from .document import Document
from .utils import SHAPE_ELEMENTS

logger = logging.getLogger(__name__)

# Attributes holding plain numbers or number lists on shape elements
COORDINATE_ATTRIBUTES = frozenset(
    [
        "x",
        "y",
        "x1",
        "y1",
        "x2",
        "y2",
        "width",
        "height",
        "cx",
        "cy",
        "rx",
        "ry",
        "r",
        "points",
        "d",
    ]
)

# Decimal numbers and exponents; exponents are matched so their digits are
# never read as the integer part of a following number
NUMBER_RE = re.compile(r"(?P<integer>\d*)\.(?P<fraction>\d*)|(?P<exponent>[eE][+-]?\d+)")

PERCENTAGE_RE = re.compile(r"(\d*\.?\d+)%")

# Sub-transforms that leave the coordinate system unchanged
IDENTITY_TRANSFORM_RES = [
    re.compile(r"\btranslate\(\s*0\s*(?:(?:\s*,\s*|\s+)0\s*)?\)"),
    re.compile(r"\bscale\(\s*1\s*(?:(?:\s*,\s*|\s+)1\s*)?\)"),
    re.compile(r"\brotate\(\s*0\s*\)"),
    re.compile(r"\bskewX\(\s*0\s*\)"),
    re.compile(r"\bskewY\(\s*0\s*\)"),
]

WHITESPACE_RE = re.compile(r"\s+")
COMMA_RE = re.compile(r"\s*,\s*")


def _minify_number(match: re.Match) -> str:
    if match.group("exponent"):
        return match.group(0)

    integer = match.group("integer")
    fraction = match.group("fraction").rstrip("0")
    if fraction:
        return f"{integer}.{fraction}"
    if integer:
        return integer
    if match.group("fraction"):
        return "0"
    # A lone "." is not a number
    return match.group(0)


def minify_coordinates(value: str) -> str:
    """Drop redundant zeros and decimal points from numbers in a value.

    Path data may pack numbers together (``10.0.5`` is 10.0 followed by .5).
    A space is inserted wherever the shortened numbers would otherwise run
    together, so the parsed values never change.

    Example:
        >>> minify_coordinates("M10.500 20.000 L3.")
        'M10.5 20 L3'
        >>> minify_coordinates("M10.0.5")
        'M10 .5'
    """
    if not value:
        return value

    parts: list[str] = []
    position = 0
    previous = ""
    for match in NUMBER_RE.finditer(value):
        gap = value[position : match.start()]
        number = _minify_number(match)
        if not gap and previous[-1:].isdigit():
            previous_is_integer = "." not in previous and not previous[0].isalpha()
            if number[0].isdigit() or (number[0] == "." and previous_is_integer):
                number = " " + number
        parts.append(gap)
        parts.append(number)
        previous = number
        position = match.end()
    parts.append(value[position:])
    return "".join(parts)


def _percentage_to_number(match: re.Match) -> str:
    number = (Decimal(match.group(1)) / 100).normalize()
    return format(number, "f")


def minify_transform(value: str) -> str:
    """Simplify a transform attribute value.

    Percentages become decimals, identity sub-transforms are dropped and
    whitespace and commas are normalized.

    Args:
        value: Raw transform value.

    Returns:
        Cleaned value; empty when nothing but identities was left.
    """
    value = PERCENTAGE_RE.sub(_percentage_to_number, value)
    for identity_re in IDENTITY_TRANSFORM_RES:
        value = identity_re.sub("", value)
    value = WHITESPACE_RE.sub(" ", value)
    value = COMMA_RE.sub(",", value)
    return value.strip()


class MinifySvgCoordinates:
    """Strip trailing zeros from path data and shape geometry."""

    name = "minify_svg_coordinates"

    def apply(self, document: Document) -> None:
        changed = 0

        for path in document.iter_elements("path"):
            if "d" in path.attrib:
                minified = minify_coordinates(path.attrib["d"])
                changed += minified != path.attrib["d"]
                path.set("d", minified)

        for shape_name in sorted(SHAPE_ELEMENTS):
            for shape in document.iter_elements(shape_name):
                for key, value in list(shape.attrib.items()):
                    if key in COORDINATE_ATTRIBUTES:
                        minified = minify_coordinates(value)
                        changed += minified != value
                        shape.set(key, minified)

        logger.debug("Minified %d coordinate attributes", changed)


class MinifyTransformations:
    """Remove identity transforms and tidy transform syntax."""

    name = "minify_transformations"

    def apply(self, document: Document) -> None:
        for elem in document.iter_with_attribute("transform"):
            transform = minify_transform(elem.attrib["transform"])
            if transform in ("", "0"):
                del elem.attrib["transform"]
            else:
                elem.set("transform", transform)
