"""Tests for the CLI frontend."""

import argparse
from unittest.mock import patch
from io import StringIO

from fractal.core.config import FractalConfig
from fractal.core.grid import Grid
from fractal.frontends.cli import CLIFractal, create_parser, validate_config, main


class TestCLIFractal:
    """Test cases for the CLI runner."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_default(self, mock_stdout):
        """Test running with the bundled rule book."""
        cli = CLIFractal()
        population, stats = cli.run(FractalConfig())

        assert population == 12
        assert stats["generation"] == 2
        assert "duration_seconds" in stats

        output = mock_stdout.getvalue()
        assert "[1] Ones = 4" in output
        assert "[2] Ones = 12" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_verbose_show_grid(self, mock_stdout):
        """Test verbose output and grid display."""
        cli = CLIFractal()
        cli.run(FractalConfig(steps=1), verbose=True, show_grid=True)

        output = mock_stdout.getvalue()
        assert "Loaded 2 rules" in output
        assert "Initial grid:" in output
        assert ".#.\n..#\n###" in output
        assert "Final grid:" in output
        assert "#..#\n....\n....\n#..#" in output

    def test_format_grid_large(self):
        """Test grid formatting for large grids."""
        cli = CLIFractal()
        formatted = cli._format_grid(Grid.empty(60), max_size=50)
        assert "too large to display" in formatted


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_create_parser(self):
        """Test parser creation and defaults."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)

        args = parser.parse_args([])
        assert args.steps == 2
        assert args.rulebook is None
        assert args.seed == ".#./..#/###"
        assert args.verbose is False
        assert args.show_grid is False

    def test_parse_positional_args(self):
        """Test step count and rule-book path."""
        args = create_parser().parse_args(["5", "rules.txt"])
        assert args.steps == 5
        assert args.rulebook == "rules.txt"

    def test_parse_short_args(self):
        """Test short option forms."""
        args = create_parser().parse_args(["3", "-s", "#./..", "-v", "-g"])
        assert args.steps == 3
        assert args.seed == "#./.."
        assert args.verbose is True
        assert args.show_grid is True


class TestValidation:
    """Test configuration validation."""

    def test_validate_valid(self):
        """Test validation with valid configuration."""
        assert validate_config(FractalConfig()) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_invalid(self, mock_stdout):
        """Test validation output for invalid configuration."""
        assert validate_config(FractalConfig(steps=-3)) is False
        output = mock_stdout.getvalue()
        assert "Error: Invalid arguments:" in output
        assert "Steps must be non-negative" in output


class TestMainFunction:
    """Test the main entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_default(self, mock_stdout):
        """Test a default run."""
        assert main([]) == 0
        output = mock_stdout.getvalue()
        assert output.rstrip().endswith("Ones = 12")

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_reads_sys_argv(self, mock_stdout):
        """Test that arguments come from sys.argv when not passed."""
        with patch("sys.argv", ["fractal-cli", "1"]):
            assert main() == 0
        assert "[1] Ones = 4" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        """Test that a bad seed fails validation."""
        assert main(["1", "--seed", "#./."]) == 1
        assert "Invalid seed pattern" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_missing_rulebook(self, mock_stdout, tmp_path):
        """Test a missing rule-book file."""
        assert main(["1", str(tmp_path / "missing.txt")]) == 1
        assert "Rule book not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_malformed_rulebook(self, mock_stdout, tmp_path):
        """Test that a malformed rule book aborts before any step."""
        path = tmp_path / "rules.txt"
        path.write_text("../.# ##./#../...\n", encoding="utf-8")

        assert main(["2", str(path)]) == 1
        output = mock_stdout.getvalue()
        assert "Error: Line 1" in output
        assert "Ones" not in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_unresolved_pattern(self, mock_stdout):
        """Test that a block without a rule fails the run."""
        assert main(["3"]) == 1
        output = mock_stdout.getvalue()
        assert "[2] Ones = 12" in output
        assert "Error: No rule matches pattern" in output
