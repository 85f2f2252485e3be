"""Fluent construction of an Optimizer.

Example::

    optimizer = (
        OptimizerBuilder()
        .remove_comments()
        .flatten_groups()
        .convert_colors_to_hex()
        .build()
    )

Rules run in the order they were added. Adding a rule twice keeps the
first position.
"""

from .config import RuleConfig
from .pipeline import Optimizer
from .rules import RULE_NAMES, create_rules


class OptimizerBuilder:
    """Collects rule names and builds an immutable Optimizer."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def add_rule(self, name: str) -> "OptimizerBuilder":
        """Add a rule by name.

        Raises:
            KeyError: If no rule has that name.
        """
        if name not in RULE_NAMES:
            raise KeyError(f"Unknown rule: {name}")
        if name not in self._names:
            self._names.append(name)
        return self

    def with_rules(self, config: RuleConfig) -> "OptimizerBuilder":
        """Add every rule enabled in ``config``, in its order."""
        for name in config.enabled_rules():
            self.add_rule(name)
        return self

    def with_default_rules(self) -> "OptimizerBuilder":
        return self.with_rules(RuleConfig())

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def build(self) -> Optimizer:
        return Optimizer(rules=tuple(create_rules(self._names)))

    # One method per rule

    def remove_doctype(self) -> "OptimizerBuilder":
        return self.add_rule("remove_doctype")

    def remove_invisible_characters(self) -> "OptimizerBuilder":
        return self.add_rule("remove_invisible_characters")

    def remove_unnecessary_whitespace(self) -> "OptimizerBuilder":
        return self.add_rule("remove_unnecessary_whitespace")

    def flatten_groups(self) -> "OptimizerBuilder":
        return self.add_rule("flatten_groups")

    def minify_svg_coordinates(self) -> "OptimizerBuilder":
        return self.add_rule("minify_svg_coordinates")

    def minify_transformations(self) -> "OptimizerBuilder":
        return self.add_rule("minify_transformations")

    def convert_colors_to_hex(self) -> "OptimizerBuilder":
        return self.add_rule("convert_colors_to_hex")

    def remove_deprecated_attributes(self) -> "OptimizerBuilder":
        return self.add_rule("remove_deprecated_attributes")

    def remove_default_attributes(self) -> "OptimizerBuilder":
        return self.add_rule("remove_default_attributes")

    def remove_enable_background_attribute(self) -> "OptimizerBuilder":
        return self.add_rule("remove_enable_background_attribute")

    def remove_empty_attributes(self) -> "OptimizerBuilder":
        return self.add_rule("remove_empty_attributes")

    def remove_comments(self) -> "OptimizerBuilder":
        return self.add_rule("remove_comments")

    def remove_metadata(self) -> "OptimizerBuilder":
        return self.add_rule("remove_metadata")

    def remove_title_and_desc(self) -> "OptimizerBuilder":
        return self.add_rule("remove_title_and_desc")

    def sort_attributes(self) -> "OptimizerBuilder":
        return self.add_rule("sort_attributes")

    def convert_empty_tags_to_self_closing(self) -> "OptimizerBuilder":
        return self.add_rule("convert_empty_tags_to_self_closing")
