"""Size statistics for an optimization run."""

from dataclasses import dataclass

from .errors import ConfigurationError

PERCENTAGE_FACTOR = 100
PERCENTAGE_PRECISION = 2


@dataclass(frozen=True)
class MetaData:
    """Byte sizes before and after optimization.

    Sizes are UTF-8 byte counts, not character counts.
    """

    original_size: int
    optimized_size: int

    def __post_init__(self) -> None:
        # An empty input can only yield an empty output
        if self.original_size < 0 or (self.original_size == 0 and self.optimized_size != 0):
            raise ConfigurationError(
                f"Original size must be greater than 0. Given: {self.original_size}"
            )
        if self.optimized_size < 0:
            raise ConfigurationError(
                f"Optimized size must not be negative. Given: {self.optimized_size}"
            )

    @property
    def saved_bytes(self) -> int:
        """Bytes saved; negative if the output grew."""
        return self.original_size - self.optimized_size

    @property
    def saved_percentage(self) -> float:
        """Saved bytes as a percentage of the original size, rounded to 2 places."""
        if self.original_size == 0:
            return 0.0
        percentage = self.saved_bytes / self.original_size * PERCENTAGE_FACTOR
        return round(percentage, PERCENTAGE_PRECISION)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "original_size": self.original_size,
            "optimized_size": self.optimized_size,
            "saved_bytes": self.saved_bytes,
            "saved_percentage": self.saved_percentage,
        }


def format_metadata(metadata: MetaData) -> str:
    """Format size statistics as text.

    Args:
        metadata: Statistics to format.

    Returns:
        Formatted text.
    """
    lines = [
        f"Original size:  {metadata.original_size} bytes",
        f"Optimized size: {metadata.optimized_size} bytes",
        f"Saved:          {metadata.saved_bytes} bytes ({metadata.saved_percentage:.2f}%)",
    ]
    return "\n".join(lines)
