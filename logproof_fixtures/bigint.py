"""
Fixed-limb multiprecision integers.

A ``Uint`` is an unsigned integer held as exactly N little-endian 64-bit
limbs in a numpy ``uint64`` array.  Arithmetic is done by lifting to a
Python int (exact, arbitrary precision) and packing back.
"""

from typing import Iterable, Tuple

import numpy as np

from .errors import PreconditionViolation, ZeroModulus

LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1


def words_to_int(words: Iterable[int]) -> int:
    """Little-endian limbs -> Python int."""
    x = 0
    for i, w in enumerate(words):
        x |= int(w) << (LIMB_BITS * i)
    return x


def int_to_words(x: int, n_limbs: int) -> list:
    """Python int -> exactly n_limbs little-endian limbs.

    Raises PreconditionViolation if x is negative or needs more limbs.
    """
    if x < 0:
        raise PreconditionViolation(f"Negative value {x} has no unsigned limbs")
    if x >> (LIMB_BITS * n_limbs):
        raise PreconditionViolation(
            f"Value needs {limbs_for_bits(x.bit_length())} limbs, "
            f"only {n_limbs} available"
        )
    return [(x >> (LIMB_BITS * i)) & LIMB_MASK for i in range(n_limbs)]


def limbs_for_bits(bits: int) -> int:
    """Number of 64-bit limbs needed to hold `bits` bits (at least 1)."""
    return max(1, -(-bits // LIMB_BITS))


class Uint:
    """Unsigned integer with a fixed number of 64-bit limbs."""

    __slots__ = ("_limbs",)

    def __init__(self, limbs):
        arr = np.array(limbs, dtype=np.uint64)
        if arr.ndim != 1 or arr.size == 0:
            raise PreconditionViolation("Uint needs a non-empty 1-D limb array")
        arr.setflags(write=False)
        self._limbs = arr

    @classmethod
    def from_words(cls, words) -> "Uint":
        return cls(words)

    @classmethod
    def from_int(cls, x: int, n_limbs: int) -> "Uint":
        return cls(int_to_words(x, n_limbs))

    @classmethod
    def zero(cls, n_limbs: int) -> "Uint":
        return cls(np.zeros(n_limbs, dtype=np.uint64))

    @property
    def n_limbs(self) -> int:
        return int(self._limbs.size)

    def as_limbs(self) -> Tuple[int, ...]:
        return tuple(int(w) for w in self._limbs)

    def is_zero(self) -> bool:
        return not self._limbs.any()

    def to_int(self) -> int:
        return words_to_int(self._limbs)

    def div_rem(self, divisor: "Uint") -> Tuple["Uint", "Uint"]:
        """(self // divisor, self % divisor), both with self's limb count."""
        d = divisor.to_int()
        if d == 0:
            raise ZeroModulus("Division by zero Uint")
        q, r = divmod(self.to_int(), d)
        return Uint.from_int(q, self.n_limbs), Uint.from_int(r, self.n_limbs)

    def __eq__(self, other):
        if not isinstance(other, Uint):
            return NotImplemented
        return (self.n_limbs == other.n_limbs
                and bool(np.array_equal(self._limbs, other._limbs)))

    def __hash__(self):
        return hash(self.as_limbs())

    def __repr__(self):
        return f"Uint<{self.n_limbs}>(0x{self.to_int():x})"
