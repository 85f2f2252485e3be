"""Content sources supplying markup to the optimizer and receiving its output."""

from pathlib import Path
from typing import Protocol


class ContentSource(Protocol):
    """Supplies raw markup and accepts the optimized result."""

    def get_input_content(self) -> str: ...

    def write_output(self, content: str) -> None: ...


class FileSource:
    """Reads markup from a file and writes the result to a file.

    Args:
        path: Input file.
        output_path: Output file (default: overwrite the input).
    """

    def __init__(self, path: Path, output_path: Path | None = None) -> None:
        self.path = Path(path)
        self.output_path = Path(output_path) if output_path is not None else self.path

    def get_input_content(self) -> str:
        """Read the input file as UTF-8.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        if not self.path.is_file():
            raise FileNotFoundError(f"Input file does not exist: {self.path}")
        # utf-8-sig drops a byte order mark; newline="" keeps CRLF as-is
        with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
            return f.read()

    def write_output(self, content: str) -> None:
        """Write content, creating parent directories as needed."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class StringSource:
    """Keeps markup in memory; the last written output is in ``output``."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.output: str | None = None

    def get_input_content(self) -> str:
        return self.content

    def write_output(self, content: str) -> None:
        self.output = content
