"""
logproof-fixtures: lattice problem instances from FHE backend buffers.

Builds problems of the form A S = T in Z_q[X]/f for testing proofs of
knowledge, starting from the encryption backend's encodings:

  RNS words (small coefficients)  -> convert_to_polynomial_by_small_coeffs
  multiprecision words (any size) -> convert_to_polynomial
  q, t                            -> bfv_delta  (Delta = floor(q/t))
"""

__version__ = "0.1.0"

from .errors import (
    LogProofError, OutOfRangeConversion, ZeroModulus,
    PreconditionViolation, DimensionMismatch,
)
from .bigint import Uint
from .rings import Ring, Zq, RISTRETTO, RISTRETTO_ORDER, ZqRistretto
from .poly import Polynomial, make_poly, monomial_plus_one, strip_trailing_value
from .linear_algebra import Matrix, Bounds
from .backend import Modulus, PolynomialArray, moduli
from .convert import (
    convert_to_smallint, convert_to_small_coeffs,
    convert_to_polynomial_by_small_coeffs, convert_to_polynomial,
    bfv_delta,
)
from .problem import LatticeProblem
from .config import ProblemConfig, load_config
from .logging import ConversionLogger, ConversionManifest, create_manifest
from .builder import ProblemBuilder

__all__ = [
    "LogProofError", "OutOfRangeConversion", "ZeroModulus",
    "PreconditionViolation", "DimensionMismatch",
    "Uint",
    "Ring", "Zq", "RISTRETTO", "RISTRETTO_ORDER", "ZqRistretto",
    "Polynomial", "make_poly", "monomial_plus_one", "strip_trailing_value",
    "Matrix", "Bounds",
    "Modulus", "PolynomialArray", "moduli",
    "convert_to_smallint", "convert_to_small_coeffs",
    "convert_to_polynomial_by_small_coeffs", "convert_to_polynomial",
    "bfv_delta",
    "LatticeProblem",
    "ProblemConfig", "load_config",
    "ConversionLogger", "ConversionManifest", "create_manifest",
    "ProblemBuilder",
]
