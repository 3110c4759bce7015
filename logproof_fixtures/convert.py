"""
Conversions from backend encodings to ring-typed polynomials.

Two paths, chosen by what the caller knows about coefficient magnitude:

  small:          read only the first RNS limb and take the centered
                  representative in (-m/2, m/2].  Valid when every
                  coefficient is known to satisfy |x| < m/2.
  multiprecision: read the full x mod Q words and convert them into the
                  target ring, failing if x is not a residue there.

Plus the BFV scaling factor Delta = floor(q / t).

All functions are pure.  With strict=True (default) the caller
preconditions are checked and violations raise PreconditionViolation
instead of producing a silently wrong value.
"""

from typing import List, Sequence

import numpy as np

from .backend import Modulus, PolynomialArray
from .bigint import Uint
from .errors import DimensionMismatch, PreconditionViolation, ZeroModulus
from .poly import Polynomial, make_poly, strip_trailing_value
from .rings import Ring, Zq


# ---------------------------------------------------------------------------
# Small-coefficient path
# ---------------------------------------------------------------------------

def _rns_view(coeff_modulus: Sequence[Modulus],
              poly_array: PolynomialArray) -> np.ndarray:
    """RNS buffer as [poly][modulus][degree]."""
    size = poly_array.coeff_modulus_size()
    if len(coeff_modulus) != size:
        raise DimensionMismatch(
            f"{len(coeff_modulus)} moduli given, array has {size} RNS limbs"
        )
    return poly_array.as_rns_u64s().reshape(
        poly_array.num_polynomials(), size, poly_array.poly_modulus_degree()
    )


def convert_to_smallint(
    coeff_modulus: Sequence[Modulus],
    poly_array: PolynomialArray,
    strict: bool = True,
) -> List[List[int]]:
    """Decode small coefficients into signed integers.

    Only the first modulus m is used: each word c becomes c - m when
    c > m // 2, else c.  Python ints are unbounded so c - m never
    underflows.

    Precondition: every true coefficient x satisfies |x| < m/2.  With
    strict=True this is checked against the remaining RNS limbs (the
    decoded value must agree with every stored residue); a single-modulus
    chain cannot be checked beyond c < m.

    Returns:
        [num_polynomials][poly_modulus_degree] nested list of ints.
    """
    view = _rns_view(coeff_modulus, poly_array)
    m = coeff_modulus[0].value()

    # object dtype lifts to Python ints, no wraparound
    first = view[:, 0, :].astype(object)
    decoded = np.where(first > m // 2, first - m, first)

    if strict:
        if np.any(first >= m):
            raise PreconditionViolation(
                f"RNS word not reduced modulo first modulus {m}"
            )
        for k in range(1, len(coeff_modulus)):
            mk = coeff_modulus[k].value()
            if np.any(decoded % mk != view[:, k, :].astype(object)):
                raise PreconditionViolation(
                    f"Coefficient is not small: decoded value disagrees with "
                    f"residue modulo {mk}"
                )

    return decoded.tolist()


def convert_to_small_coeffs(
    coeff_modulus: Sequence[Modulus],
    poly_array: PolynomialArray,
    strict: bool = True,
) -> List[List[int]]:
    """Like convert_to_smallint, with trailing zero coefficients removed."""
    return [
        strip_trailing_value(v, 0)
        for v in convert_to_smallint(coeff_modulus, poly_array, strict=strict)
    ]


def convert_to_polynomial_by_small_coeffs(
    coeff_modulus: Sequence[Modulus],
    poly_array: PolynomialArray,
    ring: Ring,
    strict: bool = True,
) -> List[Polynomial]:
    """One polynomial over `ring` per input polynomial, small path."""
    return [
        make_poly(v, ring)
        for v in convert_to_small_coeffs(coeff_modulus, poly_array, strict=strict)
    ]


# ---------------------------------------------------------------------------
# Multiprecision path
# ---------------------------------------------------------------------------

def _fit_limbs(words: np.ndarray, n_limbs: int, strict: bool) -> np.ndarray:
    """Resize [count][chunk] limb rows to [count][n_limbs].

    The backend may pad each value with more words than the ring needs;
    those extra words must be zero.
    """
    chunk = words.shape[1]
    if chunk > n_limbs:
        if strict:
            bad = np.flatnonzero(words[:, n_limbs:].any(axis=1))
            if bad.size:
                raise PreconditionViolation(
                    f"Coefficient {int(bad[0])} has nonzero limbs beyond "
                    f"the ring's {n_limbs}"
                )
        return words[:, :n_limbs]
    if chunk < n_limbs:
        return np.pad(words, ((0, 0), (0, n_limbs - chunk)))
    return words


def convert_to_polynomial(
    poly_array: PolynomialArray,
    ring: Ring,
    strict: bool = True,
) -> List[Polynomial]:
    """Convert every coefficient regardless of magnitude.

    Raises:
        OutOfRangeConversion: a coefficient is >= ring.modulus.
        PreconditionViolation: (strict) a discarded padding limb is nonzero.
    """
    chunk = poly_array.coeff_modulus_size()
    degree = poly_array.poly_modulus_degree()

    words = poly_array.as_multiprecision_u64s().reshape(-1, chunk)
    words = _fit_limbs(words, ring.limbs, strict)
    bigints = [Uint.from_words(w) for w in words]

    zero = Uint.zero(ring.limbs)
    polys = []
    for start in range(0, len(bigints), degree):
        trimmed = strip_trailing_value(bigints[start:start + degree], zero)
        polys.append(Polynomial(tuple(ring.try_from_uint(u) for u in trimmed)))
    return polys


# ---------------------------------------------------------------------------
# Scheme parameters
# ---------------------------------------------------------------------------

def bfv_delta(coeff_modulus: Zq, plaintext_modulus: int, limbs: int,
              strict: bool = True) -> Uint:
    """BFV scaling factor Delta = floor(q / t) as a `limbs`-limb integer.

    q is carried as a ring element, so the division is plain integer
    division on its canonical residue, not a ring operation.

    The quotient is computed at the ring's full width and its low `limbs`
    words are returned.  Callers must choose `limbs` wide enough for
    Delta; with strict=True a wider quotient raises PreconditionViolation,
    with strict=False it is silently truncated.
    """
    t = int(plaintext_modulus)
    if t == 0:
        raise ZeroModulus("Plaintext modulus is zero")
    if t < 0:
        raise PreconditionViolation(f"Plaintext modulus must be positive, got {t}")
    if limbs < 1:
        raise PreconditionViolation(f"Need at least one limb, got {limbs}")

    q = coeff_modulus.into_bigint()
    delta, _ = q.div_rem(Uint.from_int(t, q.n_limbs))

    words = list(delta.as_limbs())
    if strict and any(words[limbs:]):
        raise PreconditionViolation(
            f"Delta = 0x{delta.to_int():x} does not fit in {limbs} limbs"
        )
    words = words[:limbs] + [0] * (limbs - len(words))
    return Uint.from_words(words)
