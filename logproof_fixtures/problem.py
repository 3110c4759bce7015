"""
Lattice problem instances of the form A S = T in Z_q[X]/f.

Useful for demonstrating full knowledge proofs before zero knowledge
ones.  The descriptor holds values for which the relation is claimed;
it checks shapes and rings, not the relation itself.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .errors import DimensionMismatch
from .linear_algebra import Bounds, Matrix
from .poly import Polynomial


@dataclass(frozen=True)
class LatticeProblem:
    """All information for a problem A S = T in Z_q[X]/f."""
    a: Matrix       # public A
    s: Matrix       # private message and encryption components S
    t: Matrix       # result of A * S
    f: Polynomial   # polynomial divisor
    b: Matrix       # bounds on elements in S

    def __post_init__(self):
        if self.a.cols != self.s.rows:
            raise DimensionMismatch(
                f"A is {self.a.rows}x{self.a.cols} but S has {self.s.rows} rows"
            )
        if self.t.shape != (self.a.rows, self.s.cols):
            raise DimensionMismatch(
                f"T is {self.t.rows}x{self.t.cols}, A*S is "
                f"{self.a.rows}x{self.s.cols}"
            )
        if self.b.shape != self.s.shape:
            raise DimensionMismatch(
                f"B is {self.b.rows}x{self.b.cols}, S is {self.s.rows}x{self.s.cols}"
            )
        if self.f.is_zero():
            raise DimensionMismatch("Reduction polynomial f is zero")

        for name in ("a", "s", "t"):
            for entry in getattr(self, name):
                if not isinstance(entry, Polynomial):
                    raise DimensionMismatch(f"{name} holds a non-polynomial entry")
                if not entry.is_zero() and entry.ring != self.f.ring:
                    raise DimensionMismatch(
                        f"{name} entry is over {entry.ring.name}, "
                        f"f is over {self.f.ring.name}"
                    )
        for entry in self.b:
            if not isinstance(entry, Bounds):
                raise DimensionMismatch("b holds a non-Bounds entry")

    @property
    def ring(self):
        return self.f.ring

    def secret_within_bounds(self) -> bool:
        """True if every entry of S satisfies its Bounds."""
        return all(bound.admits(poly) for poly, bound in zip(self.s, self.b))

    def summary(self) -> Dict[str, Any]:
        return {
            "ring": self.ring.name,
            "modulus": str(self.ring.modulus),
            "a_shape": list(self.a.shape),
            "s_shape": list(self.s.shape),
            "t_shape": list(self.t.shape),
            "f_degree": self.f.degree,
        }
