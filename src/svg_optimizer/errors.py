"""Exceptions raised by the optimizer."""


class OptimizerError(Exception):
    """Base class for all optimizer errors."""


class ValidationError(OptimizerError):
    """Markup is not a plausible SVG document."""


class ProcessingError(OptimizerError):
    """A rule failed to rewrite the document.

    Attributes:
        rule: Name of the rule that failed, if known.
    """

    def __init__(self, message: str, rule: str | None = None) -> None:
        super().__init__(message)
        self.rule = rule

    def __str__(self) -> str:
        message = super().__str__()
        if self.rule:
            return f"{self.rule}: {message}"
        return message


class ConfigurationError(OptimizerError, ValueError):
    """Invalid rule configuration or metadata input."""
