"""
Containers for matrices of polynomials and per-entry bounds.

No arithmetic is defined here; these only hold values with a fixed shape.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple

from .errors import DimensionMismatch
from .poly import Polynomial


class Matrix:
    """Immutable rows x cols grid of entries."""

    __slots__ = ("_rows", "_cols", "_entries")

    def __init__(self, rows: int, cols: int, entries: Sequence[Any]):
        entries = tuple(entries)
        if rows < 0 or cols < 0:
            raise DimensionMismatch(f"Negative matrix shape ({rows}, {cols})")
        if len(entries) != rows * cols:
            raise DimensionMismatch(
                f"{rows}x{cols} matrix needs {rows * cols} entries, got {len(entries)}"
            )
        self._rows = rows
        self._cols = cols
        self._entries = entries

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Matrix":
        rows = [list(r) for r in rows]
        n_cols = len(rows[0]) if rows else 0
        for i, r in enumerate(rows):
            if len(r) != n_cols:
                raise DimensionMismatch(
                    f"Row {i} has {len(r)} entries, expected {n_cols}"
                )
        return cls(len(rows), n_cols, [x for r in rows for x in r])

    @classmethod
    def column(cls, entries: Sequence[Any]) -> "Matrix":
        entries = list(entries)
        return cls(len(entries), 1, entries)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    def __getitem__(self, idx: Tuple[int, int]) -> Any:
        i, j = idx
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise IndexError(f"Index ({i}, {j}) outside {self._rows}x{self._cols}")
        return self._entries[i * self._cols + j]

    def __iter__(self) -> Iterator[Any]:
        """Row-major iteration over entries."""
        return iter(self._entries)

    def to_rows(self) -> List[List[Any]]:
        c = self._cols
        return [list(self._entries[i * c:(i + 1) * c]) for i in range(self._rows)]

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._entries == other._entries

    def __hash__(self):
        return hash((self.shape, self._entries))

    def __repr__(self):
        return f"Matrix({self._rows}x{self._cols})"


@dataclass(frozen=True)
class Bounds:
    """Per-coefficient magnitude bounds for one entry of S."""
    values: Tuple[int, ...]

    def __post_init__(self):
        values = tuple(int(v) for v in self.values)
        if any(v < 0 for v in values):
            raise DimensionMismatch("Bounds must be non-negative")
        object.__setattr__(self, "values", values)

    def admits(self, poly: Polynomial) -> bool:
        """True if every centered coefficient is within its bound."""
        coeffs = poly.centered_coeffs()
        if len(coeffs) > len(self.values):
            return False
        return all(abs(c) <= b for c, b in zip(coeffs, self.values))

    def __len__(self):
        return len(self.values)
