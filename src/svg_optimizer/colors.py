"""Color canonicalization rule."""

import logging
import re

from .document import Document

logger = logging.getLogger(__name__)

RGB_RE = re.compile(r"^rgb\s*\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
HEX_RE = re.compile(r"^#(?:[a-fA-F0-9]{3}|[a-fA-F0-9]{6})$")

COLOR_ATTRIBUTES = ("fill", "stroke", "color")

MAX_CHANNEL = 255


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format channels as lowercase hex, using the 3-digit form when possible.

    Example:
        >>> rgb_to_hex(255, 170, 0)
        '#fa0'
        >>> rgb_to_hex(255, 0, 1)
        '#ff0001'
    """
    hex_color = f"#{r:02x}{g:02x}{b:02x}"
    if (
        hex_color[1] == hex_color[2]
        and hex_color[3] == hex_color[4]
        and hex_color[5] == hex_color[6]
    ):
        return f"#{hex_color[1]}{hex_color[3]}{hex_color[5]}"
    return hex_color


def convert_color(value: str) -> str:
    """Rewrite an ``rgb()`` or hex color to its shortest lowercase hex form.

    Values that are neither (named colors, ``rgba()``, out-of-range channels)
    are returned unchanged.
    """
    trimmed = value.strip()

    match = RGB_RE.match(trimmed)
    if match:
        channels = [int(channel) for channel in match.groups()]
        if any(channel > MAX_CHANNEL for channel in channels):
            return value
        return rgb_to_hex(*channels)

    if HEX_RE.match(trimmed):
        return trimmed.lower()

    return value


class ConvertColorsToHex:
    """Convert rgb() colors to hex and lowercase hex colors."""

    name = "convert_colors_to_hex"

    def apply(self, document: Document) -> None:
        changed = 0
        for attribute in COLOR_ATTRIBUTES:
            for elem in document.iter_with_attribute(attribute):
                value = elem.attrib[attribute]
                converted = convert_color(value)
                if converted != value:
                    elem.set(attribute, converted)
                    changed += 1

        logger.debug("Converted %d color values", changed)
