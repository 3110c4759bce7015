#!/usr/bin/env python3
"""
Validation script for logproof-fixtures conversions.

Runs a sequence of checks against one backend configuration:
1. Config loading
2. Small-coefficient RNS round trip
3. Multiprecision reconstruction over the target ring
4. BFV Delta = floor(q/t)
5. LatticeProblem assembly

Usage:
    python scripts/validate_fixtures.py
    python scripts/validate_fixtures.py --config configs/bfv_4096.yaml
"""

import argparse
import random
import sys
import time
import traceback
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from logproof_fixtures import (
    Bounds, ConversionLogger, Matrix, PolynomialArray, ProblemBuilder,
    convert_to_smallint, create_manifest, load_config,
)

DEFAULT_CONFIG = str(
    Path(__file__).resolve().parent.parent / "configs" / "bfv_1024.yaml"
)


def section(name: str):
    print(f"\n{'='*60}")
    print(f"  {name}")
    print(f"{'='*60}")


def check(name: str, passed: bool, detail: str = ""):
    status = "PASS" if passed else "FAIL"
    print(f"  [{status}] {name}" + (f" -- {detail}" if detail else ""))
    return passed


def main():
    parser = argparse.ArgumentParser(description="Validate backend conversions")
    parser.add_argument("--config", default=DEFAULT_CONFIG)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    results = []
    rng = random.Random(args.seed)

    section("1. Config")
    config = load_config(args.config)
    moduli = config.moduli()
    n = config.poly_modulus_degree
    results.append(check("load", True,
                         f"{config.name}: n={n}, {len(moduli)} moduli, ring={config.ring}"))

    logger = None
    if config.log_dir:
        run_id = time.strftime("%Y%m%d_%H%M%S")
        create_manifest(run_id, config.to_dict()).save(
            Path(config.log_dir) / "manifest.json")
        logger = ConversionLogger(Path(config.log_dir))

    builder = ProblemBuilder(config, logger=logger)

    try:
        section("2. Small-coefficient round trip")
        secret = [[rng.choice([-1, 0, 1]) for _ in range(n)] for _ in range(2)]
        s_arr = PolynomialArray.from_coefficients(secret, moduli)
        decoded = convert_to_smallint(moduli, s_arr, strict=config.strict)
        results.append(check("decode", decoded == secret))
        s_polys = builder.small_polynomials(s_arr)
        results.append(check("trim", all(
            p.centered_coeffs() == v[:len(p)] and not any(v[len(p):])
            for p, v in zip(s_polys, secret))))

        section("3. Multiprecision reconstruction")
        q = config.q()
        wide = [[rng.randint(0, q - 1) for _ in range(n)]]
        a_arr = PolynomialArray.from_coefficients(wide, moduli)
        a_polys = builder.polynomials(a_arr)
        results.append(check("values", [c.value for c in a_polys[0].coeffs]
                             == wide[0][:len(a_polys[0])]))

        section("4. BFV Delta")
        delta = builder.delta()
        results.append(check("floor(q/t)", delta.to_int() == q // config.plain_modulus,
                             f"Delta = {delta.to_int()}"))

        section("5. LatticeProblem")
        t_polys = builder.polynomials(a_arr)
        problem = builder.build(
            Matrix.from_rows([[a_polys[0], a_polys[0]]]),
            Matrix.column(s_polys),
            Matrix.column(t_polys),
            Matrix.column([Bounds((1,) * n)] * 2),
        )
        results.append(check("assemble", problem.secret_within_bounds(),
                             f"f degree {problem.f.degree}"))
    except Exception:
        traceback.print_exc()
        results.append(check("unexpected error", False))
    finally:
        if logger is not None:
            logger.close()

    passed = sum(results)
    print(f"\n{passed}/{len(results)} checks passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
