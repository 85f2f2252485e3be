"""Batch optimization of SVG files and directories."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, TextIO

from .config import RuleConfig
from .errors import OptimizerError
from .metadata import MetaData
from .pipeline import Optimizer, optimize_source
from .sources import FileSource

logger = logging.getLogger(__name__)

SVG_SUFFIX = ".svg"


@dataclass
class FileResult:
    """Outcome for a single file."""

    path: Path
    metadata: MetaData | None = None
    error: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.error is None


@dataclass
class CommandReport:
    """Outcome for a whole batch."""

    results: list[FileResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def processed(self) -> list[FileResult]:
        return [result for result in self.results if result.is_ok]

    @property
    def failed(self) -> list[FileResult]:
        return [result for result in self.results if not result.is_ok]

    @property
    def has_errors(self) -> bool:
        return bool(self.failed)

    @property
    def total_original_size(self) -> int:
        return sum(result.metadata.original_size for result in self.processed)

    @property
    def total_optimized_size(self) -> int:
        return sum(result.metadata.optimized_size for result in self.processed)

    @property
    def total_saved_bytes(self) -> int:
        return self.total_original_size - self.total_optimized_size

    @property
    def total_saved_percentage(self) -> float:
        if self.total_original_size == 0:
            return 0.0
        return self.total_saved_bytes / self.total_original_size * 100


def iter_svg_files(path: Path) -> Iterator[Path]:
    """Yield SVG files under a path (recursively for directories), sorted.

    A file path is yielded as-is whatever its suffix; the caller decides.
    """
    if path.is_dir():
        yield from sorted(p for p in path.rglob(f"*{SVG_SUFFIX}") if p.is_file())
    else:
        yield path


def optimize_file(path: Path, optimizer: Optimizer, dry_run: bool = False) -> FileResult:
    """Optimize one file in place, capturing errors in the result."""
    if path.suffix.lower() != SVG_SUFFIX:
        return FileResult(path=path, error="not a valid SVG file")

    try:
        result = optimize_source(FileSource(path), optimizer, write=not dry_run)
    except (OptimizerError, OSError, UnicodeDecodeError) as e:
        logger.debug("Failed to optimize %s", path, exc_info=True)
        return FileResult(path=path, error=str(e))

    return FileResult(path=path, metadata=result.metadata)


def run_command(
    paths: list[Path],
    config: RuleConfig | None = None,
    dry_run: bool = False,
    quiet: bool = False,
    out: TextIO | None = None,
) -> CommandReport:
    """Optimize every SVG file in ``paths``.

    Failures are reported per file and do not stop the batch.

    Args:
        paths: Files and directories to process.
        config: Rule selection (default: all rules).
        dry_run: Only compute savings, do not write files.
        quiet: Suppress all output except errors.
        out: Stream for progress output (default: stdout).

    Returns:
        CommandReport for the batch.
    """
    if out is None:
        out = sys.stdout

    optimizer = Optimizer.from_config(config)
    report = CommandReport(dry_run=dry_run)

    for path in paths:
        for file_path in iter_svg_files(Path(path)):
            result = optimize_file(file_path, optimizer, dry_run=dry_run)
            report.results.append(result)

            if result.is_ok:
                if not quiet:
                    print(f"{file_path} ({result.metadata.saved_percentage:.2f}%)", file=out)
            else:
                print(f'Error processing "{file_path}": {result.error}', file=sys.stderr)

    if not quiet:
        print("", file=out)
        print(format_command_report(report), file=out)

    return report


def format_command_report(report: CommandReport) -> str:
    """Format the batch summary as text.

    Args:
        report: Batch report.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    lines.append(f"Total files processed: {len(report.processed)}")
    lines.append(f"Total size reduction: {report.total_saved_bytes} bytes")
    lines.append(f"Total reduction percentage: {report.total_saved_percentage:.2f}%")

    if report.failed:
        lines.append(f"Failed files: {len(report.failed)}")
    if report.dry_run:
        lines.append("Dry run: no files were modified.")

    return "\n".join(lines)
