"""Rule capability and the registry of available rules."""

from typing import Protocol, runtime_checkable

from .attributes import (
    RemoveDefaultAttributes,
    RemoveDeprecatedAttributes,
    RemoveEmptyAttributes,
    RemoveEnableBackgroundAttribute,
    SortAttributes,
)
from .colors import ConvertColorsToHex
from .document import Document
from .geometry import MinifySvgCoordinates, MinifyTransformations
from .markup import (
    ConvertEmptyTagsToSelfClosing,
    RemoveDoctype,
    RemoveInvisibleCharacters,
    RemoveUnnecessaryWhitespace,
)
from .structure import FlattenGroups, RemoveComments, RemoveMetadata, RemoveTitleAndDesc


@runtime_checkable
class Rule(Protocol):
    """A rewrite applied to a document in place.

    Rules hold no state between calls. A rule must leave the document
    parseable; text-level rules go through ``markup.rewrite_markup``.
    """

    name: str

    def apply(self, document: Document) -> None: ...


# Default execution order.
# Text-level rules run first and together so each later rule sees trimmed
# values; attribute sorting runs after every rule that adds attributes.
RULE_CLASSES: dict[str, type] = {
    cls.name: cls
    for cls in (
        RemoveDoctype,
        RemoveInvisibleCharacters,
        RemoveUnnecessaryWhitespace,
        FlattenGroups,
        MinifySvgCoordinates,
        MinifyTransformations,
        ConvertColorsToHex,
        RemoveDeprecatedAttributes,
        RemoveDefaultAttributes,
        RemoveEnableBackgroundAttribute,
        RemoveEmptyAttributes,
        RemoveComments,
        RemoveMetadata,
        RemoveTitleAndDesc,
        SortAttributes,
        ConvertEmptyTagsToSelfClosing,
    )
}

RULE_NAMES: tuple[str, ...] = tuple(RULE_CLASSES)
DEFAULT_RULE_ORDER = RULE_NAMES


def create_rule(name: str) -> Rule:
    """Instantiate a rule by name.

    Raises:
        KeyError: If no rule has that name.
    """
    return RULE_CLASSES[name]()


def create_rules(names) -> list[Rule]:
    """Instantiate rules in the given order."""
    return [create_rule(name) for name in names]
