#!/usr/bin/env python3
"""
Example usage of the fractal package.
"""

from fractal import Grid, RuleBook, FractalEngine


RULES = """\
../.# => ##./#../...
.#./..#/### => #..#/..../..../#..#
"""


def main():
    """Demonstrate programmatic usage of the fractal package."""
    book = RuleBook.parse(RULES)
    engine = FractalEngine(book, Grid.parse(".#./..#/###"))

    print("Initial state:")
    print(engine.image)
    print(f"Ones: {engine.population}")
    print()

    for _ in range(2):
        engine.step()
        print(f"Step {engine.generation}:")
        print(engine.image)
        print(f"Ones: {engine.population}")
        print()

    stats = engine.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
