"""In-memory SVG document tree.

The tree is made of ``xml.etree.ElementTree`` elements. ElementTree on its
own drops comments, namespace prefixes, the document type declaration and
processing instructions ahead of the root, so parsing goes through a small
parser target that keeps them, and serialization writes them back.
"""

import logging
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from .utils import (
    SVG_NAMESPACES,
    TEXT_CONTENT_ELEMENTS,
    get_local_name,
    get_namespace_uri,
    is_element,
    is_svg_element,
)
from .validator import strip_xml_declaration

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters XML treats as whitespace (str.strip() would also eat U+2028 etc.)
XML_WHITESPACE = " \t\r\n"

TEXT_ENTITIES = {"\r": "&#13;"}
ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


class _TreeTarget:
    """Parser target that records namespace declarations and the prolog."""

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self._started = False
        self.namespaces: dict[str, str] = {}
        self.doctype_declaration: str | None = None
        self.processing_instructions: list[str] = []

    def start(self, tag, attrib):
        self._started = True
        return self._builder.start(tag, attrib)

    def end(self, tag):
        return self._builder.end(tag)

    def data(self, data):
        self._builder.data(data)

    def comment(self, text):
        return self._builder.comment(text)

    def pi(self, target, text=None):
        node = self._builder.pi(target, text)
        # The builder only attaches instructions found inside the root
        if not self._started:
            self.processing_instructions.append(node.text)
        return node

    def start_ns(self, prefix, uri):
        # First binding of a prefix wins; nested rebindings are rare in SVG
        self.namespaces.setdefault(prefix, uri)

    def doctype(self, name, pubid, system):
        if pubid:
            self.doctype_declaration = f'<!DOCTYPE {name} PUBLIC "{pubid}" "{system}">'
        elif system:
            self.doctype_declaration = f'<!DOCTYPE {name} SYSTEM "{system}">'
        else:
            self.doctype_declaration = f"<!DOCTYPE {name}>"

    def close(self):
        return self._builder.close()


def _strip_indentation(element: ET.Element, preserve: bool = False) -> None:
    """Drop whitespace-only text used for indentation.

    Text inside text content elements (text, tspan, style, ...) is kept.
    """
    if is_element(element) and get_local_name(element.tag) in TEXT_CONTENT_ELEMENTS:
        preserve = True

    if (
        not preserve
        and is_element(element)
        and element.text is not None
        and not element.text.strip(XML_WHITESPACE)
    ):
        element.text = None

    for child in element:
        _strip_indentation(child, preserve)
        if not preserve and child.tail is not None and not child.tail.strip(XML_WHITESPACE):
            child.tail = None


def _append_text(parent: ET.Element, index: int, text: str) -> None:
    """Append text just before position ``index`` among parent's children."""
    if index == 0:
        parent.text = (parent.text or "") + text
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + text


class Document:
    """Mutable SVG document tree.

    Attributes:
        root: Root element of the tree.
        namespaces: Prefix to URI declarations found while parsing. The empty
            prefix is the default namespace.
        doctype: Document type declaration, or None.
        processing_instructions: Contents of the processing instructions
            ahead of the root, such as ``xml-stylesheet href="a.css"``.
    """

    def __init__(
        self,
        root: ET.Element,
        namespaces: dict[str, str] | None = None,
        doctype: str | None = None,
        processing_instructions: list[str] | None = None,
    ) -> None:
        self.root = root
        self.namespaces = dict(namespaces or {})
        self.doctype = doctype
        self.processing_instructions = list(processing_instructions or [])

    @classmethod
    def from_string(cls, markup: str) -> "Document":
        """Parse markup into a new document.

        Raises:
            ET.ParseError: If the markup is not well-formed XML.
        """
        document = cls(ET.Element("svg"))
        document.load(markup)
        return document

    def load(self, markup: str) -> None:
        """Replace the document content with freshly parsed markup.

        The document is left untouched if parsing fails.

        Raises:
            ET.ParseError: If the markup is not well-formed XML.
        """
        target = _TreeTarget()
        parser = ET.XMLParser(target=target)
        parser.feed(strip_xml_declaration(markup))
        root = parser.close()
        _strip_indentation(root)

        self.root = root
        self.namespaces = target.namespaces
        self.doctype = target.doctype_declaration
        self.processing_instructions = target.processing_instructions
        logger.debug(
            "Parsed document: %d nodes, %d namespace declarations",
            sum(1 for _ in root.iter()),
            len(self.namespaces),
        )

    # --- queries -------------------------------------------------------------

    def iter_elements(self, local_name: str | None = None) -> list[ET.Element]:
        """Elements in document order, optionally filtered by SVG tag name.

        The result is a snapshot, so the tree may be mutated while walking it.
        """
        return [
            elem
            for elem in self.root.iter()
            if is_element(elem) and (local_name is None or is_svg_element(elem, local_name))
        ]

    def iter_with_attribute(self, name: str) -> list[ET.Element]:
        """Elements carrying the attribute ``name`` (Clark notation), in document order."""
        return [elem for elem in self.iter_elements() if name in elem.attrib]

    def iter_comments(self) -> list[ET.Element]:
        """Comment nodes in document order."""
        return [node for node in self.root.iter() if node.tag is ET.Comment]

    def parent_map(self) -> dict[ET.Element, ET.Element]:
        """Map every node to its parent element."""
        return {child: parent for parent in self.root.iter() for child in parent}

    def parent_of(self, node: ET.Element) -> ET.Element | None:
        """Find the parent of a node, or None for the root or a detached node."""
        for parent in self.root.iter():
            for child in parent:
                if child is node:
                    return parent
        return None

    # --- mutation ------------------------------------------------------------

    def remove(self, node: ET.Element, parent: ET.Element | None = None) -> None:
        """Detach a node, keeping the text that followed it."""
        if parent is None:
            parent = self.parent_of(node)
        if parent is None:
            raise ValueError("Cannot remove the root element")

        index = list(parent).index(node)
        if node.tail:
            _append_text(parent, index, node.tail)
        parent.remove(node)

    def replace_with_children(
        self, node: ET.Element, parent: ET.Element | None = None
    ) -> list[ET.Element]:
        """Move a node's children to its position and drop the node.

        Args:
            node: Element to unwrap.
            parent: Its parent, if already known.

        Returns:
            The moved children in their original order.
        """
        if parent is None:
            parent = self.parent_of(node)
        if parent is None:
            raise ValueError("Cannot unwrap the root element")

        index = list(parent).index(node)
        children = list(node)
        tail = node.tail

        if node.text:
            _append_text(parent, index, node.text)
        parent.remove(node)
        for offset, child in enumerate(children):
            parent.insert(index + offset, child)
        if tail:
            _append_text(parent, index + len(children), tail)

        return children

    # --- serialization -------------------------------------------------------

    def serialize(self, xml_declaration: bool = True) -> str:
        """Serialize the document to markup.

        Args:
            xml_declaration: Prepend ``<?xml version="1.0" encoding="UTF-8"?>``.

        Returns:
            The markup string.
        """
        writer = _Writer(self.namespaces)
        writer.collect(self.root)

        parts: list[str] = []
        if xml_declaration:
            parts.append(XML_DECLARATION)
        for instruction in self.processing_instructions:
            parts.append(f"<?{instruction}?>")
        if self.doctype:
            parts.append(self.doctype)
        writer.write(self.root, parts)
        return "".join(parts)

    def __str__(self) -> str:
        return self.serialize(xml_declaration=False)


class _Writer:
    """Serializes an element tree using the document's namespace prefixes."""

    def __init__(self, namespaces: dict[str, str]) -> None:
        # uri -> prefix for elements ("" is the default namespace)
        self.element_prefixes: dict[str, str] = {}
        # uri -> prefix for attributes (never "")
        self.attribute_prefixes: dict[str, str] = {SVG_NAMESPACES["xml"]: "xml"}
        self.declarations: dict[str, str] = {}
        for prefix, uri in namespaces.items():
            self._declare(prefix, uri)

    def _declare(self, prefix: str, uri: str) -> None:
        if prefix == "xml" or prefix in self.declarations:
            return
        self.declarations[prefix] = uri
        self.element_prefixes.setdefault(uri, prefix)
        if prefix:
            self.attribute_prefixes.setdefault(uri, prefix)

    def _new_prefix(self, uri: str) -> str:
        for prefix, known_uri in SVG_NAMESPACES.items():
            if known_uri == uri and prefix not in self.declarations:
                return prefix
        index = 0
        while f"ns{index}" in self.declarations:
            index += 1
        return f"ns{index}"

    def collect(self, root: ET.Element) -> None:
        """Make sure every namespace used in the tree has a prefix."""
        for elem in root.iter():
            if not is_element(elem):
                continue
            uri = get_namespace_uri(elem.tag)
            if uri is not None and uri not in self.element_prefixes:
                self._declare(self._new_prefix(uri), uri)
            for name in elem.attrib:
                uri = get_namespace_uri(name)
                if uri is not None and uri not in self.attribute_prefixes:
                    self._declare(self._new_prefix(uri), uri)

    def _element_name(self, tag: str) -> str:
        uri = get_namespace_uri(tag)
        if uri is None:
            return tag
        prefix = self.element_prefixes[uri]
        if prefix:
            return f"{prefix}:{get_local_name(tag)}"
        return get_local_name(tag)

    def _attribute_name(self, name: str) -> str:
        uri = get_namespace_uri(name)
        if uri is None:
            return name
        return f"{self.attribute_prefixes[uri]}:{get_local_name(name)}"

    def write(
        self,
        elem: ET.Element,
        parts: list[str],
        default_uri: str | None = None,
        is_root: bool = True,
    ) -> None:
        if elem.tag is ET.Comment:
            parts.append(f"<!--{elem.text or ''}-->")
        elif elem.tag is ET.ProcessingInstruction:
            parts.append(f"<?{elem.text or ''}?>")
        else:
            self._write_element(elem, parts, default_uri, is_root)

        if elem.tail and not is_root:
            parts.append(escape(elem.tail, TEXT_ENTITIES))

    def _write_element(
        self, elem: ET.Element, parts: list[str], default_uri: str | None, is_root: bool
    ) -> None:
        name = self._element_name(elem.tag)
        parts.append(f"<{name}")

        if is_root:
            for prefix, uri in self.declarations.items():
                attr = f"xmlns:{prefix}" if prefix else "xmlns"
                parts.append(f' {attr}="{escape(uri, ATTRIBUTE_ENTITIES)}"')
            default_uri = self.declarations.get("")

        # Unprefixed elements must sit in the matching default namespace
        uri = get_namespace_uri(elem.tag)
        if uri is None or self.element_prefixes.get(uri) == "":
            if uri != default_uri:
                parts.append(f' xmlns="{escape(uri or "", ATTRIBUTE_ENTITIES)}"')
                default_uri = uri

        for key, value in elem.attrib.items():
            parts.append(f' {self._attribute_name(key)}="{escape(value, ATTRIBUTE_ENTITIES)}"')

        if not elem.text and len(elem) == 0:
            parts.append("/>")
            return

        parts.append(">")
        if elem.text:
            parts.append(escape(elem.text, TEXT_ENTITIES))
        for child in elem:
            self.write(child, parts, default_uri, is_root=False)
        parts.append(f"</{name}>")
