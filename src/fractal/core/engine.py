"""Fractal iteration engine."""

from typing import Callable, Dict, List, Optional

from .grid import Grid, compose
from .rulebook import RuleBook


class InvariantError(RuntimeError):
    """Raised when resolved blocks cannot be reassembled into a square grid."""


class FractalEngine:
    """Grows a grid by repeatedly rewriting its blocks through a rule book.

    Each step:
    - Splits the grid into 2x2 blocks if its size is even, 3x3 otherwise
    - Replaces every block with its rule-book output
    - Reassembles the outputs in the same row-major order
    """

    def __init__(self, rulebook: RuleBook, seed: Grid) -> None:
        """Initialize the engine.

        Args:
            rulebook: Rules to apply; shared, never modified
            seed: Starting grid
        """
        self.rulebook = rulebook
        self._seed = seed
        self._image = seed
        self._generation = 0
        self._population_history: List[int] = [seed.population]

    @property
    def image(self) -> Grid:
        """Current grid."""
        return self._image

    @property
    def generation(self) -> int:
        """Number of steps applied so far."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of on cells."""
        return self._image.population

    @property
    def ones(self) -> int:
        """Alias of :attr:`population`."""
        return self.population

    @property
    def population_history(self) -> list:
        """On-cell counts, starting with the seed."""
        return list(self._population_history)

    @staticmethod
    def block_size(size: int) -> int:
        """Block side length used to split a grid of ``size``."""
        return 2 if size % 2 == 0 else 3

    def step(self) -> None:
        """Advance the fractal by one step.

        Raises:
            UnresolvedPatternError: If a block has no matching rule
            InvariantError: If the grid cannot be split into blocks or the
                resolved blocks do not form a square grid
        """
        try:
            blocks = self._image.split(self.block_size(self._image.size))
        except ValueError as e:
            raise InvariantError(f"Cannot split grid at generation {self._generation}: {e}") from e

        resolved = [self.rulebook.resolve(block) for block in blocks]

        try:
            image = compose(resolved)
        except ValueError as e:
            raise InvariantError(f"Inconsistent rule book at generation {self._generation + 1}: {e}") from e

        self._image = image
        self._generation += 1
        self._population_history.append(self.population)

    def run(self, steps: int, callback: Optional[Callable[[int, int], None]] = None) -> int:
        """Apply ``steps`` steps.

        Args:
            steps: Number of steps to run
            callback: Called with (generation, population) after each step

        Returns:
            Population after the last step

        Raises:
            ValueError: If steps is negative
        """
        if steps < 0:
            raise ValueError(f"Steps must be non-negative, got {steps}")

        for _ in range(steps):
            self.step()
            if callback:
                callback(self._generation, self.population)

        return self.population

    def reset(self) -> None:
        """Return to the seed grid."""
        self._image = self._seed
        self._generation = 0
        self._population_history = [self._seed.population]

    def get_statistics(self) -> Dict:
        """Get run statistics.

        Returns:
            Dictionary with generation, size, population and density
        """
        size = self._image.size
        return {
            "generation": self._generation,
            "size": size,
            "population": self.population,
            "population_history": self.population_history,
            "population_density": self.population / (size * size),
        }
