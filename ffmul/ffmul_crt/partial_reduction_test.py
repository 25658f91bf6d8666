"""Tests for partially reduced products and sums."""

import random

from ffmul.ffmul_crt import base_converter
from ffmul.ffmul_crt import modulus_selector
from ffmul.ffmul_crt import partial_reduction
from ffmul.ffmul_lib import curves
import parameterized

from absl.testing import absltest


class PartialReductionExampleTest(absltest.TestCase):

  def test_radix_power_residues(self):
    self.assertEqual(
        partial_reduction.radix_power_residues(10, 5, 3), [1, 0, 0]
    )
    # 100 mod 13 = 9, and 9 mod 5 = 4.
    self.assertEqual(
        partial_reduction.radix_power_residues(
            10, 5, 3, intermediate_modulus=13
        ),
        [1, 0, 4],
    )

  def test_product_specific_example(self):
    # 23 * 14 with radix 10 mod 7; residues of 10^k are 1, 3, 2.
    # 1 * (3 * 4) + 3 * (3 * 1 + 2 * 4) + 2 * (2 * 1) = 49.
    product = partial_reduction.partially_reduced_product(
        10, 7, (3, 2), (4, 1)
    )
    self.assertEqual(product, 49)

  def test_sum_specific_example(self):
    total = partial_reduction.partially_reduced_sum(10, 7, (3, 2))
    self.assertEqual(total, 9)

  def test_double_reduction_specific_example(self):
    # Residues (10^k mod 13) mod 5 are 1, 0, 4.
    # 1 * (3 * 4) + 0 + 4 * (2 * 1) = 20.
    product = partial_reduction.partially_reduced_product(
        10, 5, (3, 2), (4, 1), intermediate_modulus=13
    )
    self.assertEqual(product, 20)
    total = partial_reduction.partially_reduced_sum(
        10, 5, (3, 2), intermediate_modulus=13
    )
    self.assertEqual(total, 3)

  def test_empty_limbs(self):
    self.assertEqual(
        partial_reduction.partially_reduced_product(16, 7, (), ()), 0
    )
    self.assertEqual(partial_reduction.partially_reduced_sum(16, 7, ()), 0)


@parameterized.parameterized_class([
    {"radix": 2**16, "num_limbs": 17, "modulus": curves.P256_BASE_INT},
    {"radix": 2**32, "num_limbs": 9, "modulus": curves.P256_BASE_INT},
    {"radix": 2**64, "num_limbs": 4, "modulus": curves.ED25519_BASE_INT},
    {"radix": 2**32, "num_limbs": 12, "modulus": curves.BLS12_377_BASE_INT},
])
class PartialReductionCongruenceTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    self.rng = random.Random(self.num_limbs)

  def _random_limbs(self) -> tuple[int, ...]:
    value = self.rng.randrange(self.modulus)
    return base_converter.to_padded_limbs(value, self.radix, self.num_limbs)

  def test_product_is_congruent_to_integer_product(self):
    for _ in range(8):
      x = self._random_limbs()
      y = self._random_limbs()
      product = partial_reduction.partially_reduced_product(
          self.radix, self.modulus, x, y
      )
      expected = (
          base_converter.from_limbs(x, self.radix)
          * base_converter.from_limbs(y, self.radix)
      ) % self.modulus
      self.assertGreaterEqual(product, 0)
      self.assertEqual(product % self.modulus, expected)

  def test_sum_is_congruent_to_value(self):
    for _ in range(8):
      v = self._random_limbs()
      total = partial_reduction.partially_reduced_sum(
          self.radix, self.modulus, v
      )
      self.assertEqual(
          total % self.modulus,
          base_converter.from_limbs(v, self.radix) % self.modulus,
      )

  def test_double_reduction_matches_target_reduction(self):
    for m in modulus_selector.DEFAULT_PRIME_POOL[:3]:
      x = self._random_limbs()
      y = self._random_limbs()
      product_q = partial_reduction.partially_reduced_product(
          self.radix, self.modulus, x, y
      )
      product_m = partial_reduction.partially_reduced_product(
          self.radix, m, x, y, intermediate_modulus=self.modulus
      )
      self.assertEqual(product_m % m, product_q % m)
      sum_q = partial_reduction.partially_reduced_sum(
          self.radix, self.modulus, x
      )
      sum_m = partial_reduction.partially_reduced_sum(
          self.radix, m, x, intermediate_modulus=self.modulus
      )
      self.assertEqual(sum_m % m, sum_q % m)


if __name__ == "__main__":
  absltest.main()
