"""User interface frontends for the fractal generator."""

from .cli import CLIFractal

__all__ = ["CLIFractal"]
