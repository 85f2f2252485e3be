"""Rules that restructure or prune the element tree."""

import logging

from .document import Document
from .utils import is_element

logger = logging.getLogger(__name__)


class FlattenGroups:
    """Unwrap every ``<g>``, cascading its attributes onto its children.

    Groups are visited parents first, from a snapshot taken before any
    change. A nested group therefore receives its ancestors' attributes
    before it is unwrapped itself, and one pass collapses any depth.
    Attributes already set on a child are never overwritten.
    """

    name = "flatten_groups"

    def apply(self, document: Document) -> None:
        groups = document.iter_elements("g")
        parents = document.parent_map()

        flattened = 0
        for group in groups:
            parent = parents.get(group)
            if parent is None:
                continue

            for child in group:
                if not is_element(child):
                    continue
                for key, value in group.attrib.items():
                    if key not in child.attrib:
                        child.set(key, value)

            for child in document.replace_with_children(group, parent):
                parents[child] = parent
            flattened += 1

        logger.debug("Flattened %d groups", flattened)


class RemoveComments:
    """Remove all comments."""

    name = "remove_comments"

    def apply(self, document: Document) -> None:
        parents = document.parent_map()
        for comment in document.iter_comments():
            document.remove(comment, parents[comment])


def remove_elements(document: Document, local_name: str) -> int:
    """Remove every SVG element with the given tag name, subtree included.

    Returns:
        Number of elements removed.
    """
    parents = document.parent_map()
    removed: set = set()
    for elem in document.iter_elements(local_name):
        if elem not in parents:
            continue

        # Skip elements that already went away with a removed ancestor
        ancestor = parents[elem]
        while ancestor not in removed and ancestor in parents:
            ancestor = parents[ancestor]
        if ancestor in removed:
            continue

        document.remove(elem, parents[elem])
        removed.add(elem)
    return len(removed)


class RemoveMetadata:
    """Remove ``<metadata>`` elements."""

    name = "remove_metadata"

    def apply(self, document: Document) -> None:
        removed = remove_elements(document, "metadata")
        logger.debug("Removed %d metadata elements", removed)


class RemoveTitleAndDesc:
    """Remove ``<title>`` and ``<desc>`` elements."""

    name = "remove_title_and_desc"

    def apply(self, document: Document) -> None:
        removed = remove_elements(document, "title") + remove_elements(document, "desc")
        logger.debug("Removed %d title/desc elements", removed)
