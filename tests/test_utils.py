"""Tests for svg_optimizer.utils module."""

import logging
import pytest
from pathlib import Path
from xml.etree import ElementTree as ET

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_optimizer.utils import (
    SVG_NAMESPACES,
    byte_length,
    get_local_name,
    get_namespace_uri,
    is_element,
    is_svg_element,
    qualify,
    setup_logging,
)


class TestGetLocalName:
    """Tests for get_local_name function."""

    def test_with_namespace(self):
        assert get_local_name("{http://www.w3.org/2000/svg}rect") == "rect"

    def test_without_namespace(self):
        assert get_local_name("rect") == "rect"

    def test_empty_namespace(self):
        assert get_local_name("{}rect") == "rect"


class TestGetNamespaceUri:
    """Tests for get_namespace_uri function."""

    def test_with_namespace(self):
        assert get_namespace_uri("{http://www.w3.org/1999/xlink}href") == SVG_NAMESPACES["xlink"]

    def test_without_namespace(self):
        assert get_namespace_uri("href") is None


class TestQualify:
    """Tests for qualify function."""

    def test_xlink(self):
        assert qualify("xlink:href") == "{http://www.w3.org/1999/xlink}href"

    def test_xml(self):
        assert qualify("xml:lang") == "{http://www.w3.org/XML/1998/namespace}lang"

    def test_unprefixed(self):
        assert qualify("version") == "version"

    def test_unknown_prefix(self):
        with pytest.raises(ValueError, match="Unknown namespace prefix"):
            qualify("foo:bar")


class TestIsSvgElement:
    """Tests for is_element and is_svg_element functions."""

    def test_namespaced(self):
        elem = ET.Element(f"{{{SVG_NAMESPACES['svg']}}}g")
        assert is_svg_element(elem, "g")

    def test_without_namespace(self):
        assert is_svg_element(ET.Element("g"), "g")

    def test_other_namespace(self):
        elem = ET.Element("{http://purl.org/dc/elements/1.1/}title")
        assert not is_svg_element(elem, "title")

    def test_different_name(self):
        assert not is_svg_element(ET.Element("rect"), "g")

    def test_comment(self):
        comment = ET.Comment("g")
        assert not is_element(comment)
        assert not is_svg_element(comment, "g")


class TestByteLength:
    """Tests for byte_length function."""

    def test_ascii(self):
        assert byte_length("<svg/>") == 6

    def test_multibyte(self):
        assert byte_length("é") == 2
        assert byte_length("\u200b") == 3


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_verbose(self):
        setup_logging(verbose=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_quiet(self):
        setup_logging(verbose=False)
        setup_logging(verbose=False)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
