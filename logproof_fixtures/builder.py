"""
Glue between backend buffers and LatticeProblem instances.

Usage:
    builder = ProblemBuilder(load_config("configs/bfv_1024.yaml"))
    s_polys = builder.small_polynomials(secret_array)
    problem = builder.build(a, Matrix.column(s_polys), t, b)
"""

import time
import warnings
from typing import List, Optional

from .backend import PolynomialArray
from .bigint import Uint
from .config import ProblemConfig
from .convert import (
    bfv_delta, convert_to_polynomial, convert_to_polynomial_by_small_coeffs,
)
from .errors import PreconditionViolation
from .linear_algebra import Matrix
from .logging import ConversionLogger
from .poly import Polynomial, monomial_plus_one
from .problem import LatticeProblem
from .rings import RISTRETTO, ZqRistretto


class ProblemBuilder:
    """Converts backend arrays under one config and assembles problems."""

    def __init__(self, config: Optional[ProblemConfig] = None,
                 logger: Optional[ConversionLogger] = None):
        self.config = config or ProblemConfig()
        self.ring = self.config.target_ring()
        self.logger = logger
        self._moduli = self.config.moduli()

        if not self.config.strict:
            warnings.warn(
                f"Config '{self.config.name}' disables precondition checks; "
                "non-small coefficients and truncated limbs go undetected.",
                RuntimeWarning,
            )

    def _log(self, kind: str, array: PolynomialArray, t_start: float):
        if self.logger is None:
            return
        self.logger.log_conversion({
            "kind": kind,
            "config": self.config.name,
            "ring": self.ring.name,
            "num_polynomials": array.num_polynomials(),
            "poly_modulus_degree": array.poly_modulus_degree(),
            "coeff_modulus_size": array.coeff_modulus_size(),
            "wall_time_sec": time.time() - t_start,
        })

    def small_polynomials(self, array: PolynomialArray) -> List[Polynomial]:
        """Small-coefficient path (secrets, errors, messages)."""
        t_start = time.time()
        polys = convert_to_polynomial_by_small_coeffs(
            self._moduli, array, self.ring, strict=self.config.strict,
        )
        self._log("small", array, t_start)
        return polys

    def polynomials(self, array: PolynomialArray) -> List[Polynomial]:
        """Multiprecision path (ciphertexts, public keys)."""
        t_start = time.time()
        polys = convert_to_polynomial(array, self.ring, strict=self.config.strict)
        self._log("multiprecision", array, t_start)
        return polys

    def delta(self) -> Uint:
        """Delta = floor(q/t) for the configured modulus chain.

        q is carried in the Ristretto scalar field, as the proof layer does.
        """
        q = self.config.q()
        if q >= RISTRETTO.modulus:
            raise PreconditionViolation(
                f"q = {q} does not fit in the Ristretto scalar field"
            )
        return bfv_delta(ZqRistretto(q),self.config.plain_modulus, self.config.delta_limbs,
                         strict=self.config.strict)

    def reduction_polynomial(self) -> Polynomial:
        """f = X^n + 1 for the configured degree."""
        return monomial_plus_one(self.config.poly_modulus_degree, self.ring)

    def build(self, a: Matrix, s: Matrix, t: Matrix, b: Matrix) -> LatticeProblem:
        problem = LatticeProblem(a=a, s=s, t=t, f=self.reduction_polynomial(), b=b)
        if self.logger is not None:
            record = problem.summary()
            record["config"] = self.config.name
            record["secret_within_bounds"] = problem.secret_within_bounds()
            self.logger.log_problem(record)
        return problem
