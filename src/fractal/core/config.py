"""Run configuration and built-in defaults."""

from typing import List, Optional
from dataclasses import dataclass
from pathlib import Path

from .grid import Grid, PatternError
from .rulebook import RuleBook

DEFAULT_SEED = ".#./..#/###"
DEFAULT_STEPS = 2
DEFAULT_RULEBOOK_PATH = Path(__file__).parent / "data" / "example.txt"


@dataclass
class FractalConfig:
    """Configuration for a fractal run."""
    steps: int = DEFAULT_STEPS
    rulebook: Optional[str] = None
    seed: str = DEFAULT_SEED

    @property
    def rulebook_path(self) -> Path:
        """Rule-book file to load, falling back to the bundled example."""
        return Path(self.rulebook) if self.rulebook else DEFAULT_RULEBOOK_PATH

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of error messages, empty when the configuration is valid
        """
        errors = []

        if self.steps < 0:
            errors.append("Steps must be non-negative")

        try:
            Grid.parse(self.seed)
        except PatternError as e:
            errors.append(f"Invalid seed pattern: {e}")

        if not self.rulebook_path.is_file():
            errors.append(f"Rule book not found: {self.rulebook_path}")

        return errors

    def seed_grid(self) -> Grid:
        """Parse the seed pattern."""
        return Grid.parse(self.seed)

    def load_rulebook(self) -> RuleBook:
        """Read and parse the configured rule book."""
        return RuleBook.from_file(self.rulebook_path)
