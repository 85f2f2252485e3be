"""Tests for svg_optimizer.command module."""

import io
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_optimizer.command import (
    CommandReport,
    FileResult,
    format_command_report,
    iter_svg_files,
    run_command,
)
from svg_optimizer.config import RuleConfig
from svg_optimizer.metadata import MetaData

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'

ICON = f'<svg {SVG_NS}>\n  <!-- icon -->\n  <rect fill="rgb(255,0,0)"/>\n</svg>\n'
OPTIMIZED_ICON = f'<svg {SVG_NS}><rect fill="#f00"/></svg>'


@pytest.fixture
def svg_tree(tmp_path):
    """Directory with two SVG files, one nested, and a non-SVG file."""
    (tmp_path / "a.svg").write_text(ICON, encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.svg").write_text(ICON, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not svg", encoding="utf-8")
    return tmp_path


class TestIterSvgFiles:
    """Tests for iter_svg_files function."""

    def test_directory_recursive(self, svg_tree):
        files = list(iter_svg_files(svg_tree))
        assert files == [svg_tree / "a.svg", svg_tree / "sub" / "b.svg"]

    def test_single_file(self, svg_tree):
        assert list(iter_svg_files(svg_tree / "notes.txt")) == [svg_tree / "notes.txt"]


class TestRunCommand:
    """Tests for run_command function."""

    def test_optimizes_in_place(self, svg_tree):
        out = io.StringIO()

        report = run_command([svg_tree], out=out)

        assert len(report.processed) == 2
        assert not report.has_errors
        assert (svg_tree / "a.svg").read_text(encoding="utf-8") == OPTIMIZED_ICON
        assert (svg_tree / "sub" / "b.svg").read_text(encoding="utf-8") == OPTIMIZED_ICON
        assert (svg_tree / "notes.txt").read_text(encoding="utf-8") == "not svg"

        output = out.getvalue()
        assert f"{svg_tree / 'a.svg'} (" in output
        assert "Total files processed: 2" in output

    def test_dry_run(self, svg_tree):
        report = run_command([svg_tree], dry_run=True, out=io.StringIO())

        assert report.total_saved_bytes > 0
        assert (svg_tree / "a.svg").read_text(encoding="utf-8") == ICON

    def test_config(self, svg_tree):
        run_command(
            [svg_tree / "a.svg"],
            config=RuleConfig.only("remove_comments"),
            out=io.StringIO(),
        )
        assert (svg_tree / "a.svg").read_text(encoding="utf-8") == (
            f'<svg {SVG_NS}><rect fill="rgb(255,0,0)"/></svg>'
        )

    def test_quiet(self, svg_tree):
        out = io.StringIO()
        run_command([svg_tree], quiet=True, out=out)
        assert out.getvalue() == ""

    def test_invalid_file_continues(self, svg_tree, capsys):
        (svg_tree / "broken.svg").write_text("<html/>", encoding="utf-8")

        report = run_command([svg_tree], out=io.StringIO())

        assert report.has_errors
        assert len(report.processed) == 2
        assert [r.path.name for r in report.failed] == ["broken.svg"]
        assert (svg_tree / "broken.svg").read_text(encoding="utf-8") == "<html/>"
        assert f'Error processing "{svg_tree / "broken.svg"}"' in capsys.readouterr().err

    def test_non_svg_path(self, svg_tree):
        report = run_command([svg_tree / "notes.txt"], out=io.StringIO())

        assert report.has_errors
        assert report.failed[0].error == "not a valid SVG file"


class TestCommandReport:
    """Tests for CommandReport and format_command_report."""

    def test_totals(self):
        report = CommandReport(
            results=[
                FileResult(Path("a.svg"), metadata=MetaData(100, 50)),
                FileResult(Path("b.svg"), metadata=MetaData(300, 150)),
                FileResult(Path("c.svg"), error="boom"),
            ]
        )

        assert report.total_original_size == 400
        assert report.total_optimized_size == 200
        assert report.total_saved_bytes == 200
        assert report.total_saved_percentage == 50.0
        assert report.has_errors

    def test_empty(self):
        report = CommandReport()
        assert report.total_saved_percentage == 0.0
        assert not report.has_errors

    def test_format(self):
        report = CommandReport(
            results=[
                FileResult(Path("a.svg"), metadata=MetaData(100, 75)),
                FileResult(Path("c.svg"), error="boom"),
            ],
            dry_run=True,
        )

        text = format_command_report(report)

        assert "Total files processed: 1" in text
        assert "Total size reduction: 25 bytes" in text
        assert "Total reduction percentage: 25.00%" in text
        assert "Failed files: 1" in text
        assert "Dry run" in text
