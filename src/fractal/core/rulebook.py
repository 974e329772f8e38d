"""Substitution rules with a symmetry-expanded lookup index."""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple, Union
from pathlib import Path

from .grid import Grid, PatternError

RULE_SEPARATOR = " => "


class RuleBookError(ValueError):
    """Raised when rule-book text is malformed."""


class UnresolvedPatternError(KeyError):
    """Raised when no rule matches a block under any rotation or mirroring."""

    def __init__(self, pattern: Grid) -> None:
        super().__init__(pattern)
        self.pattern = pattern

    def __str__(self) -> str:
        return f"No rule matches pattern '{self.pattern.render()}'"


def parse_rule(line: str) -> Tuple[Grid, Grid]:
    """Parse a single ``<input> => <output>`` line.

    Raises:
        RuleBookError: If the separator is missing, either side is not a
            valid pattern, or the output is not larger than the input
    """
    source, sep, target = line.partition(RULE_SEPARATOR)
    if not sep:
        raise RuleBookError(f"Missing '{RULE_SEPARATOR.strip()}' separator in rule '{line}'")

    try:
        source_grid = Grid.parse(source)
        target_grid = Grid.parse(target)
    except PatternError as e:
        raise RuleBookError(f"Invalid pattern in rule '{line}': {e}") from e

    if target_grid.size <= source_grid.size:
        raise RuleBookError(
            f"Rule '{line}' must expand its pattern: output size {target_grid.size} "
            f"is not larger than input size {source_grid.size}"
        )

    return source_grid, target_grid


class RuleBook:
    """Maps input patterns to their replacements, under rotation and mirroring.

    Two indices are built once at construction:

    - ``entries``: canonical input pattern -> output pattern
    - ``classes``: every symmetry variant of an input -> its canonical input

    Resolving a block is then two dictionary lookups. The book is read-only
    after construction and can be shared between engines.
    """

    def __init__(self, rules: Iterable[Tuple[Grid, Grid]]) -> None:
        """Initialize the book from (input, output) grid pairs.

        Raises:
            RuleBookError: If no rules are given
        """
        entries: Dict[Grid, Grid] = {}
        classes: Dict[Grid, Grid] = {}

        for source, target in rules:
            entries[source] = target
            for variant in source.symmetries():
                classes[variant] = source

        if not entries:
            raise RuleBookError("Rule book contains no rules")

        self._entries = MappingProxyType(entries)
        self._classes = MappingProxyType(classes)

    @classmethod
    def parse(cls, text: str) -> "RuleBook":
        """Parse rule-book text, one rule per line.

        A single trailing newline is accepted; any other blank line is an
        error.

        Raises:
            RuleBookError: With the 1-based line number of the first bad rule
        """
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        rules: List[Tuple[Grid, Grid]] = []
        for number, line in enumerate(lines, start=1):
            try:
                rules.append(parse_rule(line))
            except RuleBookError as e:
                raise RuleBookError(f"Line {number}: {e}") from e

        return cls(rules)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RuleBook":
        """Load and parse a rule-book file."""
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    @property
    def entries(self) -> Mapping[Grid, Grid]:
        """Canonical input -> output mapping."""
        return self._entries

    @property
    def classes(self) -> Mapping[Grid, Grid]:
        """Symmetry variant -> canonical input mapping."""
        return self._classes

    def resolve(self, pattern: Grid) -> Grid:
        """Return the replacement for ``pattern``.

        Raises:
            UnresolvedPatternError: If no variant of the pattern has a rule
        """
        canonical = self._classes.get(pattern)
        if canonical is None:
            raise UnresolvedPatternError(pattern)
        return self._entries[canonical]

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._classes

    def __len__(self) -> int:
        return len(self._entries)
