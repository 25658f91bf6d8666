"""Tests for the witness generation driver."""

from ffmul.ffmul_crt import witness_gen
from ffmul.ffmul_lib import curves
from ffmul.ffmul_lib import errors
from ffmul.ffmul_lib import parameters
from absl.testing import absltest
from absl.testing import parameterized

X = 8457179954364567802776200328751639987550736
Y = 371871151960082407017394978175294924545716958041


class WitnessGenTest(parameterized.TestCase):

  def setUp(self):
    super().setUp()
    self.params = parameters.MulParameters(
        radix=2**32,
        num_limbs=9,
        modulus=curves.P256_BASE_INT,
        native_modulus=curves.BN254_BASE_INT,
    )

  @parameterized.named_parameters(
      dict(testcase_name='_toml', output="toml", toml=True, params=False),
      dict(testcase_name='_params', output="params", toml=False, params=True),
      dict(testcase_name='_both', output="both", toml=True, params=True),
  )
  def test_generate_output_selection(self, output, toml, params):
    text = witness_gen.generate(self.params, X, Y, output)
    self.assertEqual("# Prover.toml" in text, toml)
    self.assertEqual("Self {" in text, params)

  def test_generate_lists_selected_moduli(self):
    text = witness_gen.generate(self.params, X, Y, "params")
    self.assertIn("    base: 4294967296,", text)
    self.assertIn(
        "m: [1399027476140078653058704379177609361753676736201, ", text
    )

  def test_generate_rejects_large_operand(self):
    with self.assertRaises(errors.InvalidInputError):
      witness_gen.generate(self.params, curves.P256_BASE_INT, Y)


if __name__ == "__main__":
  absltest.main()
