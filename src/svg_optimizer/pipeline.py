"""SVG optimization pipeline.

The pipeline validates the input, parses it once, runs each configured rule
over the document in order and serializes the result::

    optimizer = Optimizer.from_config(RuleConfig())
    result = optimizer.optimize(markup)
    result.content, result.metadata

A failing rule aborts the whole run. There is no partial output.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence
from xml.etree import ElementTree as ET

from .config import RuleConfig
from .document import Document
from .errors import OptimizerError, ProcessingError, ValidationError
from .metadata import MetaData
from .rules import Rule, create_rules
from .sources import ContentSource
from .utils import byte_length
from .validator import is_valid_svg, strip_xml_declaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizationResult:
    """Optimized markup plus size statistics."""

    content: str
    metadata: MetaData
    rules_applied: tuple[str, ...] = field(default_factory=tuple)

    def __iter__(self):
        # Unpacks as (content, metadata)
        yield self.content
        yield self.metadata


@dataclass(frozen=True)
class Optimizer:
    """Ordered, immutable list of rules applied to SVG markup."""

    rules: tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    @classmethod
    def from_config(cls, config: RuleConfig | None = None) -> "Optimizer":
        """Create an optimizer running the rules enabled in ``config``."""
        if config is None:
            config = RuleConfig()
        return cls(rules=tuple(create_rules(config.enabled_rules())))

    @classmethod
    def from_names(cls, names: Sequence[str]) -> "Optimizer":
        """Create an optimizer running the named rules in the given order."""
        return cls(rules=tuple(create_rules(names)))

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def apply_rules(self, document: Document) -> None:
        """Run every rule over the document in order.

        Raises:
            ProcessingError: If a rule fails. Errors that are not optimizer
                errors are wrapped and name the failing rule.
        """
        for rule in self.rules:
            logger.debug("Applying rule: %s", rule.name)
            try:
                rule.apply(document)
            except OptimizerError:
                raise
            except Exception as e:
                raise ProcessingError(str(e) or type(e).__name__, rule=rule.name) from e

    def optimize(self, markup: str) -> OptimizationResult:
        """Optimize SVG markup.

        Args:
            markup: Raw SVG markup.

        Returns:
            OptimizationResult with the optimized markup and metadata.

        Raises:
            ValidationError: If the input is not an SVG document.
            ProcessingError: If a rule fails.
        """
        if not is_valid_svg(markup):
            raise ValidationError("The content does not appear to be a valid SVG document.")

        try:
            document = Document.from_string(markup)
        except ET.ParseError as e:
            raise ValidationError(f"The content is not well-formed XML: {e}") from e

        self.apply_rules(document)

        content = strip_xml_declaration(document.serialize()).strip()
        metadata = MetaData(byte_length(markup), byte_length(content))
        logger.debug(
            "Optimized %d -> %d bytes (%.2f%%)",
            metadata.original_size,
            metadata.optimized_size,
            metadata.saved_percentage,
        )
        return OptimizationResult(content, metadata, self.rule_names)


def optimize_source(
    source: ContentSource,
    optimizer: Optimizer | None = None,
    write: bool = True,
) -> OptimizationResult:
    """Optimize the content of a source and optionally write it back.

    Args:
        source: Where the markup comes from and goes to.
        optimizer: Optimizer to use (default: all rules).
        write: Whether to write the optimized markup to the source.

    Returns:
        OptimizationResult for the source's content.
    """
    if optimizer is None:
        optimizer = Optimizer.from_config()

    result = optimizer.optimize(source.get_input_content())
    if write:
        source.write_output(result.content)
    return result
