"""
Quotient rings Z_q and their elements.

A ``Ring`` carries the modulus q and the limb count N used when its
elements are viewed as fixed-width integers.  ``Zq`` elements only support
equality and conversion; ring arithmetic belongs to the proof layer.
"""

from dataclasses import dataclass
from typing import Iterable

from .bigint import LIMB_BITS, Uint, limbs_for_bits
from .errors import OutOfRangeConversion, PreconditionViolation

# Order of the Ristretto255 scalar field.
RISTRETTO_ORDER = 2**252 + 27742317777372353535851937790883648493


@dataclass(frozen=True)
class Ring:
    """Z_q with a fixed N-limb integer view."""
    name: str
    modulus: int
    limbs: int

    def __post_init__(self):
        if self.modulus < 2:
            raise PreconditionViolation(f"Ring modulus must be >= 2, got {self.modulus}")
        if self.modulus >> (LIMB_BITS * self.limbs):
            raise PreconditionViolation(
                f"Modulus of {self.name} does not fit in {self.limbs} limbs"
            )

    @classmethod
    def from_coeff_modulus(cls, moduli: Iterable[int], name: str = "") -> "Ring":
        """The ring Z_Q with Q the product of an RNS modulus chain."""
        Q = 1
        for m in moduli:
            Q *= int(m)
        return cls(name or f"Z_{Q}", Q, limbs_for_bits(Q.bit_length()))

    def zero(self) -> "Zq":
        return Zq(0, self)

    def from_int(self, x: int) -> "Zq":
        """Total conversion: any signed integer, reduced mod q."""
        return Zq(int(x) % self.modulus, self)

    def try_from_uint(self, u: Uint) -> "Zq":
        """Fallible conversion from an N-limb integer."""
        if u.n_limbs != self.limbs:
            raise OutOfRangeConversion(
                f"{self.name} expects {self.limbs} limbs, got {u.n_limbs}"
            )
        x = u.to_int()
        if x >= self.modulus:
            raise OutOfRangeConversion(
                f"0x{x:x} is not a residue of {self.name} (q = 0x{self.modulus:x})"
            )
        return Zq(x, self)


@dataclass(frozen=True)
class Zq:
    """Element of Z_q, stored as its canonical residue in [0, q)."""
    value: int
    ring: Ring

    def __post_init__(self):
        if not 0 <= self.value < self.ring.modulus:
            raise OutOfRangeConversion(
                f"{self.value} is not a residue of {self.ring.name}"
            )

    def is_zero(self) -> bool:
        return self.value == 0

    def into_bigint(self) -> Uint:
        return Uint.from_int(self.value, self.ring.limbs)

    def centered(self) -> int:
        """Signed representative in (-q/2, q/2]."""
        q = self.ring.modulus
        return self.value - q if self.value > q // 2 else self.value

    def __repr__(self):
        return f"Zq({self.value}, {self.ring.name})"


RISTRETTO = Ring("ristretto", RISTRETTO_ORDER, 4)


def ZqRistretto(x: int) -> Zq:
    """Element of the Ristretto scalar field."""
    return RISTRETTO.from_int(x)
