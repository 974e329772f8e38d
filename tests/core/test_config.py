"""Tests for run configuration."""

from fractal.core.config import DEFAULT_RULEBOOK_PATH, DEFAULT_SEED, FractalConfig
from fractal.core.grid import Grid


class TestFractalConfig:
    """Test cases for FractalConfig."""

    def test_defaults(self):
        """Test default values."""
        config = FractalConfig()
        assert config.steps == 2
        assert config.seed == DEFAULT_SEED
        assert config.rulebook is None
        assert config.rulebook_path == DEFAULT_RULEBOOK_PATH
        assert config.validate() == []

    def test_bundled_rulebook(self):
        """Test that the bundled example rule book loads."""
        book = FractalConfig().load_rulebook()
        assert len(book) == 2

    def test_seed_grid(self):
        """Test seed parsing."""
        assert FractalConfig(seed="#./..").seed_grid() == Grid.parse("#./..")

    def test_custom_rulebook_path(self, tmp_path):
        """Test pointing at a user rule book."""
        path = tmp_path / "rules.txt"
        path.write_text("../.. => .../.../...\n", encoding="utf-8")
        config = FractalConfig(rulebook=str(path))
        assert config.rulebook_path == path
        assert len(config.load_rulebook()) == 1

    def test_validate_errors(self, tmp_path):
        """Test that every problem is reported."""
        config = FractalConfig(steps=-1, rulebook=str(tmp_path / "missing.txt"), seed="#./.")
        errors = config.validate()
        assert len(errors) == 3
        assert any("Steps" in e for e in errors)
        assert any("seed" in e for e in errors)
        assert any("not found" in e for e in errors)
