"""
Unit tests for backend-buffer conversions.

Encodes known signed coefficients with PolynomialArray.from_coefficients,
then checks both decoding paths and the BFV Delta calculation against
Python big-int reference values.
"""

import unittest
import random
import sys
import os

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from logproof_fixtures.backend import Modulus, PolynomialArray, moduli
from logproof_fixtures.bigint import Uint
from logproof_fixtures.convert import (
    convert_to_smallint, convert_to_small_coeffs,
    convert_to_polynomial_by_small_coeffs, convert_to_polynomial, bfv_delta,
)
from logproof_fixtures.errors import (
    DimensionMismatch, OutOfRangeConversion, PreconditionViolation, ZeroModulus,
)
from logproof_fixtures.poly import Polynomial, strip_trailing_value
from logproof_fixtures.rings import RISTRETTO, Ring, ZqRistretto

# Moduli of a three-limb 4096-degree chain
CHAIN = [68719403009, 68719230977, 137438822401]


class TestStripTrailingValue(unittest.TestCase):

    def test_removes_trailing_run(self):
        self.assertEqual(strip_trailing_value([1, 0, 2, 0, 0], 0), [1, 0, 2])

    def test_all_trim_value(self):
        self.assertEqual(strip_trailing_value([0, 0, 0], 0), [])

    def test_empty(self):
        self.assertEqual(strip_trailing_value([], 0), [])

    def test_no_trailing(self):
        self.assertEqual(strip_trailing_value([0, 0, 5], 0), [0, 0, 5])

    def test_input_not_mutated(self):
        v = [3, 7, 7]
        strip_trailing_value(v, 7)
        self.assertEqual(v, [3, 7, 7])

    def test_idempotent_and_prefix(self):
        rng = random.Random(42)
        for _ in range(200):
            v = [rng.choice([0, 0, 1, 2]) for _ in range(rng.randint(0, 12))]
            z = rng.choice([0, 1, 2])
            once = strip_trailing_value(v, z)
            self.assertEqual(strip_trailing_value(once, z), once)
            self.assertTrue(not once or once[-1] != z)
            self.assertEqual(v[:len(once)], once)
            self.assertTrue(all(x == z for x in v[len(once):]))

    def test_uint_elements(self):
        z = Uint.zero(2)
        v = [Uint.from_int(5, 2), z, Uint.from_int(1 << 70, 2), z, z]
        self.assertEqual(strip_trailing_value(v, z), v[:3])


class TestConvertToSmallint(unittest.TestCase):

    def test_centered_range_single_modulus(self):
        m = 97
        words = list(range(m))
        array = PolynomialArray(1, m, 1, words, words)
        decoded = convert_to_smallint([Modulus(m)], array)[0]
        for c, d in zip(words, decoded):
            self.assertEqual((d - c) % m, 0)
            self.assertTrue(-m / 2 < d <= m / 2, f"{d} out of range for c={c}")

    def test_even_modulus_boundary(self):
        m = 100
        array = PolynomialArray(1, 3, 1, [50, 51, 99], [50, 51, 99])
        self.assertEqual(convert_to_smallint([Modulus(m)], array), [[50, -49, -1]])

    def test_round_trip(self):
        rng = random.Random(7)
        coeff_modulus = moduli(CHAIN)
        bound = CHAIN[0] // 2
        polys = [[rng.randint(-bound + 1, bound) for _ in range(16)] for _ in range(4)]
        array = PolynomialArray.from_coefficients(polys, coeff_modulus)
        self.assertEqual(convert_to_smallint(coeff_modulus, array), polys)

    def test_shape(self):
        array = PolynomialArray.from_coefficients([[1], [2, 3]], moduli(CHAIN), 8)
        out = convert_to_smallint(moduli(CHAIN), array)
        self.assertEqual(len(out), 2)
        self.assertTrue(all(len(row) == 8 for row in out))

    def test_returns_python_ints(self):
        array = PolynomialArray.from_coefficients([[-5, 5]], moduli([2**61 - 1]))
        out = convert_to_smallint(moduli([2**61 - 1]), array)
        self.assertEqual(out, [[-5, 5]])
        self.assertIs(type(out[0][0]), int)

    def test_large_modulus_no_underflow(self):
        m = 2**64 - 59  # largest 64-bit prime
        array = PolynomialArray.from_coefficients([[-1, -(m // 2) + 1]], moduli([m]))
        self.assertEqual(convert_to_smallint(moduli([m]), array),
                         [[-1, -(m // 2) + 1]])

    def test_not_small_detected(self):
        coeff_modulus = moduli(CHAIN)
        big = CHAIN[0]  # |x| >= m0 / 2
        array = PolynomialArray.from_coefficients([[1, big]], coeff_modulus)
        with self.assertRaises(PreconditionViolation):
            convert_to_smallint(coeff_modulus, array)

    def test_not_small_unchecked_wraps(self):
        coeff_modulus = moduli(CHAIN)
        array = PolynomialArray.from_coefficients([[CHAIN[0] + 3]], coeff_modulus)
        self.assertEqual(convert_to_smallint(coeff_modulus, array, strict=False),
                         [[3]])

    def test_unreduced_word_detected(self):
        array = PolynomialArray(1, 2, 1, [5, 200], [5, 200])
        with self.assertRaises(PreconditionViolation):
            convert_to_smallint([Modulus(101)], array)

    def test_modulus_count_mismatch(self):
        array = PolynomialArray.from_coefficients([[1, 2]], moduli(CHAIN))
        with self.assertRaises(DimensionMismatch):
            convert_to_smallint(moduli(CHAIN[:2]), array)


class TestSmallCoeffPolynomials(unittest.TestCase):

    def setUp(self):
        self.coeff_modulus = moduli(CHAIN)

    def test_trailing_zeros_trimmed(self):
        array = PolynomialArray.from_coefficients(
            [[1, -1, 0, 2, 0, 0, 0, 0]], self.coeff_modulus)
        self.assertEqual(convert_to_small_coeffs(self.coeff_modulus, array),
                         [[1, -1, 0, 2]])

    def test_all_zero_polynomial(self):
        array = PolynomialArray.from_coefficients(
            [[0, 0, 0, 0], [0, 1, 0, 0]], self.coeff_modulus)
        self.assertEqual(convert_to_small_coeffs(self.coeff_modulus, array),
                         [[], [0, 1]])

    def test_ring_polynomials(self):
        array = PolynomialArray.from_coefficients(
            [[3, -2, 0, 0], [0, 0, 0, 0]], self.coeff_modulus)
        polys = convert_to_polynomial_by_small_coeffs(
            self.coeff_modulus, array, RISTRETTO)
        self.assertEqual(polys[0].coeffs,
                         (ZqRistretto(3), ZqRistretto(RISTRETTO.modulus - 2)))
        self.assertEqual(polys[0].centered_coeffs(), [3, -2])
        self.assertTrue(polys[1].is_zero())
        self.assertEqual(polys[1].degree, -1)


class TestConvertToPolynomial(unittest.TestCase):

    def test_matches_integers_mod_q(self):
        rng = random.Random(99)
        coeff_modulus = moduli(CHAIN)
        ring = Ring.from_coeff_modulus(CHAIN)
        Q = ring.modulus
        polys = [[rng.randint(0, Q - 1) for _ in range(8)] for _ in range(3)]
        polys[1][-1] = 0
        polys[1][-2] = 0
        array = PolynomialArray.from_coefficients(polys, coeff_modulus)

        out = convert_to_polynomial(array, ring)
        self.assertEqual(len(out), 3)
        self.assertEqual([c.value for c in out[0].coeffs], polys[0])
        self.assertEqual([c.value for c in out[1].coeffs], polys[1][:6])

    def test_negative_coefficients_wrap_to_q(self):
        coeff_modulus = moduli(CHAIN)
        ring = Ring.from_coeff_modulus(CHAIN)
        array = PolynomialArray.from_coefficients([[-1, 2]], coeff_modulus)
        out = convert_to_polynomial(array, ring)
        self.assertEqual([c.value for c in out[0].coeffs], [ring.modulus - 1, 2])

    def test_extra_limbs_discarded(self):
        # chunk of 3 words, ring needs 2
        ring = Ring.from_coeff_modulus(CHAIN)
        self.assertEqual(ring.limbs, 2)
        x = (7 << 64) | 11
        mp = [11, 7, 0, 0, 0, 0]
        array = PolynomialArray(1, 2, 3, [0] * 6, mp)
        out = convert_to_polynomial(array, ring)
        self.assertEqual(out[0].coeffs[0].value, x)
        self.assertEqual(len(out[0]), 1)

    def test_nonzero_discarded_limb_rejected(self):
        ring = Ring("two_limb", 2**127 - 1, 2)
        mp = [11, 7, 1, 0, 0, 0]
        array = PolynomialArray(1, 2, 3, [0] * 6, mp)
        with self.assertRaises(PreconditionViolation):
            convert_to_polynomial(array, ring)
        # unchecked path silently drops the high word
        out = convert_to_polynomial(array, ring, strict=False)
        self.assertEqual(out[0].coeffs[0].value, (7 << 64) | 11)

    def test_narrow_chunk_zero_extended(self):
        array = PolynomialArray.from_coefficients([[5, 0, 9, 0]], moduli([97]))
        out = convert_to_polynomial(array, RISTRETTO)
        self.assertEqual(out[0].coeffs, (ZqRistretto(5), ZqRistretto(0),
                                         ZqRistretto(9)))

    def test_out_of_range_propagates(self):
        ring = Ring("z13", 13, 1)
        array = PolynomialArray(1, 3, 1, [0, 0, 0], [4, 13, 0])
        with self.assertRaises(OutOfRangeConversion):
            convert_to_polynomial(array, ring)

    def test_all_zero(self):
        array = PolynomialArray(2, 2, 1, [0] * 4, [0, 0, 0, 3])
        out = convert_to_polynomial(array, RISTRETTO)
        self.assertEqual(out[0], Polynomial(()))
        self.assertEqual(out[1].coeffs, (ZqRistretto(0), ZqRistretto(3)))


class TestBfvDelta(unittest.TestCase):

    def test_small_exact(self):
        delta = bfv_delta(ZqRistretto(100), 7, 1)
        self.assertEqual(delta, Uint.from_int(14, 1))

    def test_zero_plaintext_modulus(self):
        with self.assertRaises(ZeroModulus):
            bfv_delta(ZqRistretto(100), 0, 1)

    def test_zero_modulus_is_zero_division(self):
        with self.assertRaises(ZeroDivisionError):
            bfv_delta(ZqRistretto(100), 0, 4)

    def test_multi_limb_quotient(self):
        q = 1
        for m in CHAIN:
            q *= m
        t = 1032193
        delta = bfv_delta(ZqRistretto(q), t, 2)
        self.assertEqual(delta.n_limbs, 2)
        self.assertEqual(delta.to_int(), q // t)

    def test_full_width(self):
        q = RISTRETTO.modulus - 1
        delta = bfv_delta(ZqRistretto(q), 3, 4)
        self.assertEqual(delta.to_int(), q // 3)

    def test_too_narrow_rejected(self):
        q = 1 << 100
        with self.assertRaises(PreconditionViolation):
            bfv_delta(ZqRistretto(q), 2, 1)

    def test_too_narrow_unchecked_truncates(self):
        q = (5 << 64) | 8
        delta = bfv_delta(ZqRistretto(q), 2, 1, strict=False)
        self.assertEqual(delta.to_int(), ((5 << 64) | 8) // 2 & ((1 << 64) - 1))


class TestPolynomialArray(unittest.TestCase):

    def test_buffer_length_validated(self):
        with self.assertRaises(DimensionMismatch):
            PolynomialArray(2, 4, 1, [0] * 7, [0] * 8)

    def test_layouts(self):
        array = PolynomialArray.from_coefficients([[1, -1]], moduli([7, 11]))
        rns = array.as_rns_u64s().reshape(1, 2, 2)
        np.testing.assert_array_equal(rns[0, 0], [1, 6])
        np.testing.assert_array_equal(rns[0, 1], [1, 10])
        mp = array.as_multiprecision_u64s().reshape(2, 2)
        np.testing.assert_array_equal(mp[0], [1, 0])
        np.testing.assert_array_equal(mp[1], [76, 0])

    def test_buffers_read_only(self):
        array = PolynomialArray.from_coefficients([[1]], moduli([7]))
        with self.assertRaises(ValueError):
            array.as_rns_u64s()[0] = 3


if __name__ == "__main__":
    unittest.main()
