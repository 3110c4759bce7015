"""
Error kinds raised while converting backend encodings.

Every conversion either completes or raises one of these; no partial
results are ever returned.
"""


class LogProofError(Exception):
    """Base class for all conversion failures."""


class OutOfRangeConversion(LogProofError, ValueError):
    """A multiprecision coefficient is not a valid residue of the ring."""


class ZeroModulus(LogProofError, ZeroDivisionError):
    """Plaintext modulus (or another divisor) is zero."""


class PreconditionViolation(LogProofError, ValueError):
    """Caller contract broken: value not small, discarded limb nonzero,
    quotient wider than the target limb count, ..."""


class DimensionMismatch(LogProofError, ValueError):
    """Buffer length or matrix shape disagrees with declared dimensions."""
