"""Rule selection: which rules run and in what order.

A rule file is YAML (JSON works too) mapping rule names to booleans, either
at the top level or under ``rules``. An optional ``order`` list changes the
execution order::

    rules:
      flatten_groups: false
      sort_attributes: true
    order:
      - convert_colors_to_hex
      - minify_svg_coordinates

Rules left out of the file keep their default (enabled). Rules left out of
``order`` run afterwards in the default order. camelCase names such as
``convertColorsToHex`` are accepted as well.
"""

import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from .errors import ConfigurationError
from .rules import DEFAULT_RULE_ORDER, RULE_NAMES

CAMEL_CASE_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class RuleConfig:
    """Enabled flags for all sixteen rules, plus the execution order."""

    remove_doctype: bool = True
    remove_invisible_characters: bool = True
    remove_unnecessary_whitespace: bool = True
    flatten_groups: bool = True
    minify_svg_coordinates: bool = True
    minify_transformations: bool = True
    convert_colors_to_hex: bool = True
    remove_deprecated_attributes: bool = True
    remove_default_attributes: bool = True
    remove_enable_background_attribute: bool = True
    remove_empty_attributes: bool = True
    remove_comments: bool = True
    remove_metadata: bool = True
    remove_title_and_desc: bool = True
    sort_attributes: bool = True
    convert_empty_tags_to_self_closing: bool = True
    order: tuple[str, ...] = field(default=DEFAULT_RULE_ORDER)

    def __post_init__(self) -> None:
        unknown = [name for name in self.order if name not in RULE_NAMES]
        if unknown:
            raise ConfigurationError(f"Unknown rule in order: {', '.join(unknown)}")
        if len(set(self.order)) != len(self.order):
            raise ConfigurationError("Rule order lists a rule more than once")

        # Rules missing from a partial order run afterwards in default order
        missing = tuple(name for name in DEFAULT_RULE_ORDER if name not in self.order)
        if missing:
            object.__setattr__(self, "order", tuple(self.order) + missing)

    @classmethod
    def none(cls) -> "RuleConfig":
        """Configuration with every rule disabled."""
        return cls(**{name: False for name in RULE_NAMES})

    @classmethod
    def only(cls, *names: str) -> "RuleConfig":
        """Configuration with only the named rules enabled, in the given order.

        Raises:
            ConfigurationError: If a name is not a known rule.
        """
        for name in names:
            if name not in RULE_NAMES:
                raise ConfigurationError(f"Unknown rule: {name}")
        return replace(cls.none(), order=tuple(names), **{name: True for name in names})

    def is_enabled(self, name: str) -> bool:
        return bool(getattr(self, name))

    def enabled_rules(self) -> list[str]:
        """Names of enabled rules in execution order."""
        return [name for name in self.order if self.is_enabled(name)]

    def to_dict(self) -> dict:
        """Convert to a dictionary in rule file format."""
        return {
            "rules": {f.name: getattr(self, f.name) for f in fields(self) if f.name != "order"},
            "order": list(self.order),
        }


def normalize_rule_name(name: str) -> str:
    """Map ``convertColorsToHex`` style names to ``convert_colors_to_hex``.

    Example:
        >>> normalize_rule_name("removeTitleAndDesc")
        'remove_title_and_desc'
    """
    return CAMEL_CASE_RE.sub("_", name.strip()).lower()


def parse_rule_config(data: dict | None) -> RuleConfig:
    """Build a RuleConfig from loaded rule file data.

    Args:
        data: Parsed YAML/JSON content. None means all defaults.

    Returns:
        Parsed RuleConfig.

    Raises:
        ConfigurationError: If the format is invalid.
    """
    if data is None:
        return RuleConfig()
    if not isinstance(data, dict):
        raise ConfigurationError("Rule file must be a YAML dictionary")

    if "rules" in data or "order" in data:
        unexpected = set(data) - {"rules", "order"}
        if unexpected:
            raise ConfigurationError(
                f"Unexpected keys in rule file: {', '.join(sorted(unexpected))}"
            )
        rules_data = data.get("rules") or {}
        order_data = data.get("order")
    else:
        rules_data = data
        order_data = None

    if not isinstance(rules_data, dict):
        raise ConfigurationError("'rules' must be a dictionary of rule names to booleans")

    flags: dict[str, bool] = {}
    for raw_name, enabled in rules_data.items():
        name = normalize_rule_name(str(raw_name))
        if name not in RULE_NAMES:
            raise ConfigurationError(f"Unknown rule: {raw_name}")
        if not isinstance(enabled, bool):
            raise ConfigurationError(f"Rule '{raw_name}' must be true or false, got {enabled!r}")
        flags[name] = enabled

    if order_data is None:
        return RuleConfig(**flags)

    if not isinstance(order_data, list):
        raise ConfigurationError("'order' must be a list of rule names")
    order = tuple(normalize_rule_name(str(name)) for name in order_data)
    return RuleConfig(order=order, **flags)


def load_rule_file(rule_path: Path) -> RuleConfig:
    """Parse a YAML (or JSON) rule file.

    Args:
        rule_path: Path to the rule file.

    Returns:
        Parsed RuleConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ConfigurationError: If the rule format is invalid.
    """
    with open(rule_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_rule_config(data)
