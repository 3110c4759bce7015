"""
Views over the encryption backend's polynomial buffers.

The native backend hands us two flattened ``uint64`` views of the same
polynomial array:

  RNS:            [poly][modulus][degree]  one residue word per entry
  multiprecision: [poly][degree][limb]     x mod Q as coeff_modulus_size words

These classes hold such buffers with validated shape metadata, and can
also build them from plain integer coefficients for tests.
"""

from typing import List, Sequence

import numpy as np

from .bigint import int_to_words
from .errors import DimensionMismatch, PreconditionViolation


class Modulus:
    """One RNS modulus of the coefficient modulus chain."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        value = int(value)
        if value < 2:
            raise PreconditionViolation(f"Modulus must be >= 2, got {value}")
        self._value = value

    def value(self) -> int:
        return self._value

    def __eq__(self, other):
        return isinstance(other, Modulus) and other._value == self._value

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return f"Modulus({self._value})"


def moduli(values: Sequence[int]) -> List[Modulus]:
    return [Modulus(v) for v in values]


class PolynomialArray:
    """Flattened RNS and multiprecision encodings of a batch of polynomials."""

    def __init__(self, num_polynomials: int, poly_modulus_degree: int,
                 coeff_modulus_size: int, rns, multiprecision):
        if min(num_polynomials, poly_modulus_degree, coeff_modulus_size) < 1:
            raise DimensionMismatch(
                f"Invalid shape ({num_polynomials}, {poly_modulus_degree}, "
                f"{coeff_modulus_size})"
            )
        self._num_polynomials = int(num_polynomials)
        self._degree = int(poly_modulus_degree)
        self._size = int(coeff_modulus_size)

        expected = self._num_polynomials * self._degree * self._size
        self._rns = self._as_buffer(rns, expected, "RNS")
        self._multiprecision = self._as_buffer(multiprecision, expected,
                                               "multiprecision")

    @staticmethod
    def _as_buffer(words, expected: int, label: str) -> np.ndarray:
        arr = np.array(words, dtype=np.uint64).reshape(-1)
        if arr.size != expected:
            raise DimensionMismatch(
                f"{label} buffer has {arr.size} words, shape implies {expected}"
            )
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_coefficients(cls, polys: Sequence[Sequence[int]],
                          coeff_modulus: Sequence[Modulus],
                          poly_modulus_degree: int = 0) -> "PolynomialArray":
        """Encode signed integer polynomials under a modulus chain.

        Polynomials are zero-padded to `poly_modulus_degree` (default: the
        longest input).
        """
        primes = [m.value() for m in coeff_modulus]
        size = len(primes)
        Q = 1
        for p in primes:
            Q *= p

        degree = poly_modulus_degree or max((len(p) for p in polys), default=1)
        degree = max(degree, 1)
        n = len(polys)

        rns = np.zeros((n, size, degree), dtype=np.uint64)
        mp = np.zeros((n, degree, size), dtype=np.uint64)
        for i, poly in enumerate(polys):
            if len(poly) > degree:
                raise DimensionMismatch(
                    f"Polynomial {i} has {len(poly)} coefficients, degree is {degree}"
                )
            for j, c in enumerate(poly):
                c = int(c)
                for k, p in enumerate(primes):
                    rns[i, k, j] = c % p
                mp[i, j, :] = np.array(int_to_words(c % Q, size), dtype=np.uint64)

        return cls(n, degree, size, rns, mp)

    def num_polynomials(self) -> int:
        return self._num_polynomials

    def poly_modulus_degree(self) -> int:
        return self._degree

    def coeff_modulus_size(self) -> int:
        return self._size

    def as_rns_u64s(self) -> np.ndarray:
        return self._rns

    def as_multiprecision_u64s(self) -> np.ndarray:
        return self._multiprecision

    def __repr__(self):
        return (f"PolynomialArray(n={self._num_polynomials}, "
                f"degree={self._degree}, limbs={self._size})")
