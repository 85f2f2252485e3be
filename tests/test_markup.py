"""Tests for svg_optimizer.markup module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_optimizer.document import Document
from svg_optimizer.errors import ProcessingError
from svg_optimizer.markup import (
    ConvertEmptyTagsToSelfClosing,
    RemoveDoctype,
    RemoveInvisibleCharacters,
    RemoveUnnecessaryWhitespace,
    collapse_attribute_whitespace,
    compact_style_attributes,
    convert_empty_tags,
    remove_doctype,
    remove_invisible_characters,
    rewrite_markup,
)

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'

SVG11_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)


class TestRewriteMarkup:
    """Tests for rewrite_markup function."""

    @pytest.fixture
    def doc(self):
        return Document.from_string(f'<svg {SVG_NS}><rect id="a"/></svg>')

    def test_applies_rewrite(self, doc):
        rewrite_markup(doc, lambda s: s.replace('id="a"', 'id="b"'), "rename")
        assert doc.iter_elements("rect")[0].get("id") == "b"

    def test_unparseable_output(self, doc):
        before = str(doc)

        with pytest.raises(ProcessingError, match="does not parse") as exc_info:
            rewrite_markup(doc, lambda s: s.replace("</svg>", ""), "broken")

        assert exc_info.value.rule == "broken"
        assert str(exc_info.value).startswith("broken: ")
        assert str(doc) == before

    def test_unterminated_tag(self, doc):
        before = str(doc)

        with pytest.raises(ProcessingError):
            rewrite_markup(doc, lambda s: s.replace("<rect", "<rect <"), "broken")

        assert str(doc) == before

    def test_not_svg_output(self, doc):
        with pytest.raises(ProcessingError, match="not a valid SVG"):
            rewrite_markup(doc, lambda s: "<html/>", "broken")

    def test_non_string_output(self, doc):
        with pytest.raises(ProcessingError, match="did not return a string"):
            rewrite_markup(doc, lambda s: None, "broken")

    def test_rewrite_raises(self, doc):
        with pytest.raises(ProcessingError, match="Rewrite failed") as exc_info:
            rewrite_markup(doc, lambda s: 1 / 0, "broken")

        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


class TestWhitespace:
    """Tests for attribute and style whitespace normalization."""

    def test_collapse_attribute_whitespace(self):
        result = collapse_attribute_whitespace('<rect class="  a   b  " d="M 1\t2"/>')
        assert result == '<rect class="a b" d="M 1 2"/>'

    def test_compact_style(self):
        result = compact_style_attributes('<a style=" fill : red ; stroke : black ;"/>')
        assert result == '<a style="fill:red;stroke:black"/>'

    def test_compact_style_keeps_inner_spaces(self):
        result = compact_style_attributes('<a style="font-family: Open Sans; font-size: 12px"/>')
        assert result == '<a style="font-family:Open Sans;font-size:12px"/>'

    def test_other_attributes_not_compacted(self):
        markup = '<a data-style="a : b"/>'
        assert compact_style_attributes(markup) == markup

    @pytest.mark.parametrize(
        "markup",
        [
            '<svg><text>a="  b  "</text></svg>',
            '<svg><!-- a="  b  " --></svg>',
            '<svg><text>style=" a : b "</text></svg>',
        ],
    )
    def test_text_and_comments_untouched(self, markup):
        assert collapse_attribute_whitespace(markup) == markup
        assert compact_style_attributes(markup) == markup

    def test_rule_keeps_text_content(self):
        markup = f'<svg {SVG_NS}><text>a="  b  "</text><!-- c="  d  " --></svg>'
        doc = Document.from_string(markup)
        RemoveUnnecessaryWhitespace().apply(doc)
        assert str(doc) == markup

    def test_rule(self):
        doc = Document.from_string(
            f'<svg {SVG_NS}><rect style=" fill : red ; " class=" a  b "/></svg>'
        )
        RemoveUnnecessaryWhitespace().apply(doc)

        rect = doc.iter_elements("rect")[0]
        assert rect.get("style") == "fill:red"
        assert rect.get("class") == "a b"


class TestRemoveDoctype:
    """Tests for doctype removal."""

    def test_function(self):
        assert remove_doctype(f"{SVG11_DOCTYPE}<svg/>") == "<svg/>"

    def test_rule(self):
        doc = Document.from_string(f"{SVG11_DOCTYPE}<svg {SVG_NS}/>")
        RemoveDoctype().apply(doc)

        assert doc.doctype is None
        assert "DOCTYPE" not in doc.serialize()


class TestRemoveInvisibleCharacters:
    """Tests for invisible character removal."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("a\u200bb", "ab"),
            ("a\u200c\u200db", "ab"),
            ("a\u2028b\u2029", "ab"),
            ("soft\u00adhyphen", "softhyphen"),
            ("a&#x200B;b", "ab"),
            ("a&#8203;b", "ab"),
            ("a&#10;b&#x9;c", "abc"),
            ("a&#100;b", "a&#100;b"),
            ("plain text", "plain text"),
        ],
    )
    def test_function(self, value, expected):
        assert remove_invisible_characters(value) == expected

    def test_rule(self):
        doc = Document.from_string(f"<svg {SVG_NS}><text>a\u200bb</text></svg>")
        RemoveInvisibleCharacters().apply(doc)
        assert doc.iter_elements("text")[0].text == "ab"


class TestConvertEmptyTags:
    """Tests for empty tag conversion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ('<rect x="1"></rect>', '<rect x="1"/>'),
            ("<g></g>", "<g/>"),
            ("<g ></g>", "<g/>"),
            ("<svg:g></svg:g>", "<svg:g/>"),
            ("<g><rect></rect></g>", "<g><rect/></g>"),
            ("<text> </text>", "<text> </text>"),
            ("<g></rect>", "<g></rect>"),
            ("<!-- <a></a> -->", "<!-- <a></a> -->"),
            ("<!-- <a></a> --><b></b>", "<!-- <a></a> --><b/>"),
        ],
    )
    def test_function(self, value, expected):
        assert convert_empty_tags(value) == expected

    def test_rule(self):
        markup = f"<svg {SVG_NS}><g><rect/></g><text> </text></svg>"
        doc = Document.from_string(markup)
        ConvertEmptyTagsToSelfClosing().apply(doc)
        assert str(doc) == markup
