"""Tests for svg_optimizer.validator module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_optimizer.validator import is_valid_svg, strip_xml_declaration


class TestIsValidSvg:
    """Tests for is_valid_svg function."""

    @pytest.mark.parametrize(
        "markup",
        [
            "<svg/>",
            '<svg xmlns="http://www.w3.org/2000/svg"></svg>',
            '<?xml version="1.0"?>\n<svg width="10"/>',
            "<!DOCTYPE svg><svg/>",
            '<?xml version="1.0"?><!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
            '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n<svg/>',
            "  \n<SVG/>",
            '<?xml-stylesheet href="a.css"?><svg/>',
            '<?xml version="1.0"?>\n<?xml-stylesheet href="a.css"?>\n<?app x?><svg/>',
        ],
    )
    def test_valid(self, markup):
        assert is_valid_svg(markup)

    @pytest.mark.parametrize(
        "markup",
        [
            "",
            "   ",
            "<html/>",
            "<svgfoo/>",
            "hello <svg/>",
            '<?xml version="1.0"?>',
            '<?xml-stylesheet href="a.css"?>',
        ],
    )
    def test_invalid(self, markup):
        assert not is_valid_svg(markup)

    def test_non_string(self):
        assert not is_valid_svg(None)
        assert not is_valid_svg(b"<svg/>")


class TestStripXmlDeclaration:
    """Tests for strip_xml_declaration function."""

    def test_strips_declaration(self):
        assert strip_xml_declaration('<?xml version="1.0"?>\n<svg/>') == "<svg/>"

    def test_no_declaration(self):
        assert strip_xml_declaration("<svg/>") == "<svg/>"

    def test_stylesheet_instruction_kept(self):
        markup = '<?xml-stylesheet href="a.css"?><svg/>'
        assert strip_xml_declaration(markup) == markup

    def test_only_leading(self):
        markup = '<svg><?xml-stylesheet href="a.css"?></svg>'
        assert strip_xml_declaration(markup) == markup
