"""SVG Optimizer - Rule-based size reduction for SVG markup."""

__version__ = "0.1.0"

from .builder import OptimizerBuilder
from .command import (
    CommandReport,
    FileResult,
    format_command_report,
    run_command,
)
from .config import (
    RuleConfig,
    load_rule_file,
    parse_rule_config,
)
from .document import Document
from .errors import (
    ConfigurationError,
    OptimizerError,
    ProcessingError,
    ValidationError,
)
from .metadata import MetaData, format_metadata
from .pipeline import (
    OptimizationResult,
    Optimizer,
    optimize_source,
)
from .rules import DEFAULT_RULE_ORDER, RULE_NAMES, Rule, create_rule
from .sources import ContentSource, FileSource, StringSource
from .validator import is_valid_svg

__all__ = [
    # Pipeline
    "OptimizationResult",
    "Optimizer",
    "OptimizerBuilder",
    "optimize_source",
    # Rules
    "DEFAULT_RULE_ORDER",
    "RULE_NAMES",
    "Rule",
    "create_rule",
    # Configuration
    "RuleConfig",
    "load_rule_file",
    "parse_rule_config",
    # Document and sources
    "ContentSource",
    "Document",
    "FileSource",
    "StringSource",
    "is_valid_svg",
    # Reports
    "CommandReport",
    "FileResult",
    "MetaData",
    "format_command_report",
    "format_metadata",
    "run_command",
    # Errors
    "ConfigurationError",
    "OptimizerError",
    "ProcessingError",
    "ValidationError",
]
