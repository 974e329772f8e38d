"""Square boolean grid used as both the fractal image and its pattern blocks."""

from typing import Iterator, List, Sequence, Tuple
import math
import numpy as np

ON = "#"
OFF = "."
ROW_SEPARATOR = "/"


class PatternError(ValueError):
    """Raised when a pattern description cannot be parsed into a Grid."""


class Grid:
    """Immutable square grid of on/off cells.

    Cells are stored in a read-only numpy boolean array of shape
    ``(size, size)`` indexed as ``[row, col]``. Equality and hashing are
    structural, so frozen grids can be used as dictionary keys.

    The only mutable grids are the ones returned by :meth:`empty`, which
    exist to be filled with :meth:`blit` and then :meth:`freeze`-d.
    """

    def __init__(self, cells: np.ndarray, frozen: bool = True) -> None:
        """Initialize a grid from a square 2D array.

        Args:
            cells: Square 2D array-like of truthy/falsy values
            frozen: Whether the grid is read-only (default: True)

        Raises:
            ValueError: If the array is not a non-empty square matrix
        """
        arr = np.array(cells, dtype=bool)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] == 0:
            raise ValueError(f"Grid cells must be a non-empty square matrix, got shape {arr.shape}")

        self._cells = arr
        self._cells.flags.writeable = not frozen

    @classmethod
    def empty(cls, size: int) -> "Grid":
        """Create a writable all-off grid, the target for :meth:`blit`."""
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        return cls(np.zeros((size, size), dtype=bool), frozen=False)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> "Grid":
        """Create a grid from nested row lists."""
        return cls(np.array(rows, dtype=bool))

    @classmethod
    def parse(cls, text: str) -> "Grid":
        """Parse a pattern such as ``.#./..#/###``.

        Args:
            text: Rows of ``#`` (on) and ``.`` (off) separated by ``/``

        Returns:
            New frozen Grid

        Raises:
            PatternError: If the text is empty, contains other characters,
                or does not describe a square
        """
        if not text:
            raise PatternError("Empty pattern")

        rows = text.split(ROW_SEPARATOR)
        size = len(rows)
        for index, row in enumerate(rows):
            if len(row) != size:
                raise PatternError(
                    f"Pattern '{text}' is not square: row {index} has {len(row)} cells, expected {size}"
                )
            invalid = set(row) - {ON, OFF}
            if invalid:
                raise PatternError(f"Pattern '{text}' contains invalid characters: {''.join(sorted(invalid))}")

        return cls(np.array([[c == ON for c in row] for row in rows], dtype=bool))

    @property
    def cells(self) -> np.ndarray:
        """Get the cell array."""
        return self._cells

    @property
    def flat(self) -> np.ndarray:
        """Row-major flat view of the cells."""
        return self._cells.reshape(-1)

    @property
    def size(self) -> int:
        """Side length of the grid."""
        return self._cells.shape[0]

    @property
    def frozen(self) -> bool:
        """Whether the grid is read-only."""
        return not self._cells.flags.writeable

    @property
    def population(self) -> int:
        """Get the number of on cells."""
        return int(np.count_nonzero(self._cells))

    def count_on(self) -> int:
        """Count on cells (alias of :attr:`population`)."""
        return self.population

    def freeze(self) -> "Grid":
        """Make the grid read-only and return it."""
        self._cells.flags.writeable = False
        return self

    def cell(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for size {self.size}")
        return bool(self._cells[row, col])

    def coords(self) -> Iterator[Tuple[int, int]]:
        """Yield every (row, col) in row-major order."""
        for index in range(self.size * self.size):
            yield divmod(index, self.size)

    def flip_horizontal(self) -> "Grid":
        """Mirror across the vertical axis (reverse each row)."""
        return Grid(self._cells[:, ::-1])

    def flip_vertical(self) -> "Grid":
        """Mirror across the horizontal axis (reverse row order)."""
        return Grid(self._cells[::-1, :])

    def rotate(self, amount: int) -> "Grid":
        """Rotate clockwise by ``amount`` quarter turns.

        One quarter turn moves the cell at ``(size - 1 - c, r)`` to ``(r, c)``.
        """
        amount = amount % 4
        if amount == 0:
            return Grid(self._cells)
        # np.rot90 turns counter-clockwise for positive k
        return Grid(np.rot90(self._cells, k=-amount))

    def symmetries(self) -> List["Grid"]:
        """Return the 8 dihedral variants: each rotation of the grid and of its mirror."""
        mirrored = self.flip_horizontal()
        return [g.rotate(k) for g in (self, mirrored) for k in range(4)]

    def slice(self, rows: range, cols: range) -> "Grid":
        """Extract a square sub-grid.

        Args:
            rows: Contiguous range of row indices
            cols: Contiguous range of column indices

        Raises:
            ValueError: If the ranges have different lengths or are not contiguous
            IndexError: If the ranges fall outside the grid
        """
        if len(rows) != len(cols):
            raise ValueError(f"Slice must be square, got {len(rows)}x{len(cols)}")
        if rows.step != 1 or cols.step != 1:
            raise ValueError(f"Slice ranges must be contiguous, got steps {rows.step} and {cols.step}")
        for axis in (rows, cols):
            if len(axis) and not (0 <= axis[0] and axis[-1] < self.size):
                raise IndexError(f"Slice {axis} out of bounds for size {self.size}")

        return Grid(self._cells[rows.start : rows.stop, cols.start : cols.stop])

    def split(self, step: int) -> List["Grid"]:
        """Partition into ``step`` x ``step`` blocks in row-major block order.

        Raises:
            ValueError: If ``step`` does not evenly divide the size
        """
        if step <= 0 or self.size % step != 0:
            raise ValueError(f"Cannot split grid of size {self.size} into blocks of {step}")

        blocks = self.size // step
        return [
            self.slice(range(i * step, (i + 1) * step), range(j * step, (j + 1) * step))
            for i in range(blocks)
            for j in range(blocks)
        ]

    def blit(self, coord: Tuple[int, int], block: "Grid") -> None:
        """Copy ``block`` into this grid with its top-left corner at ``coord``.

        Raises:
            IndexError: If the block does not fit
            ValueError: If this grid is frozen
        """
        row, col = coord
        if row < 0 or col < 0 or row + block.size > self.size or col + block.size > self.size:
            raise IndexError(f"Block of size {block.size} at ({row}, {col}) does not fit in size {self.size}")

        self._cells[row : row + block.size, col : col + block.size] = block.cells

    def render(self) -> str:
        """Render as a ``/``-separated pattern (inverse of :meth:`parse`)."""
        return ROW_SEPARATOR.join(self._row_strings())

    def to_list(self) -> list:
        """Convert grid to nested list of bools."""
        return self._cells.tolist()

    def _row_strings(self) -> List[str]:
        return ["".join(ON if v else OFF for v in row) for row in self._cells]

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        if not self.frozen:
            raise TypeError("unhashable writable Grid; call freeze() first")
        return hash((self.size, self._cells.tobytes()))

    def __str__(self) -> str:
        """Multi-line representation with one row per line."""
        return "\n".join(self._row_strings())

    def __repr__(self) -> str:
        return f"Grid.parse({self.render()!r})"


def compose(blocks: Sequence[Grid]) -> Grid:
    """Assemble row-major blocks into one grid (inverse of :meth:`Grid.split`).

    Args:
        blocks: Equal-size blocks whose count is a perfect square

    Returns:
        New frozen Grid

    Raises:
        ValueError: If there are no blocks, the count is not a perfect
            square, or block sizes differ
    """
    if not blocks:
        raise ValueError("Cannot compose an empty list of blocks")

    per_side = math.isqrt(len(blocks))
    if per_side * per_side != len(blocks):
        raise ValueError(f"Block count {len(blocks)} is not a perfect square")

    block_size = blocks[0].size
    if any(b.size != block_size for b in blocks):
        sizes = sorted({b.size for b in blocks})
        raise ValueError(f"Blocks have mismatched sizes: {sizes}")

    result = Grid.empty(per_side * block_size)
    for index, block in enumerate(blocks):
        result.blit((index // per_side * block_size, index % per_side * block_size), block)
    return result.freeze()
