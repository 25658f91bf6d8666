"""Tests for rns_utils."""

import math

import hypothesis
from hypothesis import strategies
from ffmul.ffmul_lib import curves
from ffmul.ffmul_lib import rns_utils
from absl.testing import absltest

MODULI = [65537, 65521, 65519, curves.BN254_BASE_INT]


class RnsUtilsTest(absltest.TestCase):

  def test_is_power_of_two(self):
    self.assertTrue(rns_utils.is_power_of_two(1))
    self.assertTrue(rns_utils.is_power_of_two(2**32))
    self.assertFalse(rns_utils.is_power_of_two(0))
    self.assertFalse(rns_utils.is_power_of_two(12))

  def test_lcm(self):
    self.assertEqual(rns_utils.lcm([]), 1)
    self.assertEqual(rns_utils.lcm([4, 6]), 12)
    self.assertEqual(rns_utils.lcm([7, 7, 11]), 77)
    self.assertEqual(rns_utils.lcm(MODULI), math.prod(MODULI))

  @hypothesis.settings(deadline=None)
  @hypothesis.given(
      strategies.integers(min_value=0, max_value=math.prod(MODULI) - 1)
  )
  def test_reconstruct_recovers_value(self, x: int):
    residues = [x % m for m in MODULI]
    self.assertEqual(rns_utils.rns_reconstruct(residues, MODULI), x)

  def test_reconstruct_length_mismatch_raises(self):
    with self.assertRaises(ValueError):
      rns_utils.rns_reconstruct([1, 2], MODULI)


if __name__ == "__main__":
  absltest.main()
