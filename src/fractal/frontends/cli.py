"""Command-line interface for the fractal art generator."""

import argparse
import sys
import time
from typing import Optional, Tuple

from ..core.config import DEFAULT_SEED, DEFAULT_STEPS, FractalConfig
from ..core.engine import FractalEngine
from ..core.grid import Grid


class CLIFractal:
    """Command-line interface for running fractal expansions."""

    def run(
        self,
        config: FractalConfig,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, dict]:
        """Run a fractal expansion, printing the on-cell count after each step.

        Args:
            config: Run configuration
            verbose: Print progress updates
            show_grid: Show initial and final grids

        Returns:
            Tuple of (final_population, statistics)
        """
        if verbose:
            print(f"Loading rule book from {config.rulebook_path}")

        rulebook = config.load_rulebook()
        engine = FractalEngine(rulebook, config.seed_grid())

        if verbose:
            print(f"Loaded {len(rulebook)} rules ({len(rulebook.classes)} symmetry variants)")
            print(f"Seed: {config.seed} ({engine.population} on)")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(engine.image))
            print()

        start_time = time.time()
        final_population = engine.run(config.steps, callback=self._report_step)
        duration = time.time() - start_time

        if show_grid:
            print("\nFinal grid:")
            print(self._format_grid(engine.image))
            print()

        stats = engine.get_statistics()
        stats["duration_seconds"] = duration
        return final_population, stats

    @staticmethod
    def _report_step(generation: int, population: int) -> None:
        print(f"[{generation}] Ones = {population}")

    def _format_grid(self, grid: Grid, max_size: int = 50) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.size > max_size:
            return f"Grid too large to display ({grid.size}x{grid.size})"

        return str(grid)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Grow a fractal by repeatedly rewriting grid blocks with a rule book",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two steps with the bundled example rule book
  fractal-cli

  # Five steps with your own rules
  fractal-cli 5 rules.txt

  # Show the grid before and after
  fractal-cli 3 rules.txt --show-grid --verbose
        """,
    )

    parser.add_argument(
        "steps",
        nargs="?",
        type=int,
        default=DEFAULT_STEPS,
        help=f"Number of steps to run (default: {DEFAULT_STEPS})",
    )

    parser.add_argument(
        "rulebook",
        nargs="?",
        default=None,
        help="Rule-book file (default: bundled example)",
    )

    parser.add_argument(
        "-s",
        "--seed",
        type=str,
        default=DEFAULT_SEED,
        help=f"Starting pattern (default: {DEFAULT_SEED})",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grids (small grids only)",
    )

    return parser


def validate_config(config: FractalConfig) -> bool:
    """Validate a run configuration, printing any problems.

    Returns:
        True if the configuration is valid
    """
    errors = config.validate()

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = FractalConfig(steps=args.steps, rulebook=args.rulebook, seed=args.seed)
    if not validate_config(config):
        return 1

    cli = CLIFractal()

    try:
        final_population, stats = cli.run(config, verbose=args.verbose, show_grid=args.show_grid)
    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print(f"Ones = {final_population}")

    if args.verbose:
        print(f"Final size: {stats['size']}x{stats['size']}")
        print(f"Population density: {stats['population_density']:.2%}")
        print(f"Duration: {stats['duration_seconds']:.3f} seconds")

    return 0


if __name__ == "__main__":
    sys.exit(main())
