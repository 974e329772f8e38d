"""Fractal art generator built on pattern-substitution rule books."""

__version__ = "0.1.0"

from .core.grid import Grid
from .core.rulebook import RuleBook
from .core.engine import FractalEngine

__all__ = ["Grid", "RuleBook", "FractalEngine"]
