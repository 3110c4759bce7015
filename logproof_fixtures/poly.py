"""
Dense polynomials over a ``Ring``.

Coefficients are stored lowest degree first.  A polynomial never carries
a trailing zero coefficient; the zero polynomial is the empty tuple.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

from .errors import PreconditionViolation
from .rings import Ring, Zq

T = TypeVar("T")


def strip_trailing_value(v: Sequence[T], trim_value: T) -> List[T]:
    """Drop the trailing run of `trim_value` from `v` (returns a new list)."""
    out = list(v)
    while out and out[-1] == trim_value:
        out.pop()
    return out


@dataclass(frozen=True)
class Polynomial:
    coeffs: Tuple[Zq, ...] = ()

    def __post_init__(self):
        coeffs = tuple(self.coeffs)
        object.__setattr__(self, "coeffs", coeffs)
        if coeffs and coeffs[-1].is_zero():
            raise PreconditionViolation(
                "Polynomial has a zero leading coefficient; strip it first"
            )
        if len({c.ring for c in coeffs}) > 1:
            raise PreconditionViolation("Polynomial mixes coefficient rings")

    @property
    def degree(self) -> int:
        """-1 for the zero polynomial."""
        return len(self.coeffs) - 1

    @property
    def ring(self):
        """Coefficient ring, or None for the zero polynomial."""
        return self.coeffs[0].ring if self.coeffs else None

    def is_zero(self) -> bool:
        return not self.coeffs

    def centered_coeffs(self) -> List[int]:
        return [c.centered() for c in self.coeffs]

    def __len__(self):
        return len(self.coeffs)


def make_poly(coeffs: Sequence[int], ring: Ring) -> Polynomial:
    """Build a polynomial from small signed integers, trimming zeros."""
    values = [ring.from_int(c) for c in coeffs]
    return Polynomial(tuple(strip_trailing_value(values, ring.zero())))


def monomial_plus_one(degree: int, ring: Ring) -> Polynomial:
    """X^degree + 1, the usual cyclotomic reduction polynomial."""
    if degree < 1:
        raise PreconditionViolation(f"Degree must be >= 1, got {degree}")
    return make_poly([1] + [0] * (degree - 1) + [1], ring)
