"""Core fractal logic."""

from .grid import Grid, PatternError, compose
from .rulebook import RuleBook, RuleBookError, UnresolvedPatternError
from .engine import FractalEngine, InvariantError
from .config import FractalConfig

__all__ = [
    "Grid",
    "PatternError",
    "compose",
    "RuleBook",
    "RuleBookError",
    "UnresolvedPatternError",
    "FractalEngine",
    "InvariantError",
    "FractalConfig",
]
