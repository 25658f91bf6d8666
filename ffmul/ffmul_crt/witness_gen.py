"""Generates foreign-field multiplication witnesses from the command line.

Example:

  python -m ffmul.ffmul_crt.witness_gen --target_field=p256_base \
      --native_field=bn254_base --num_limbs=9 --radix=4294967296
"""

from collections.abc import Sequence
import logging

from absl import app
from absl import flags
from ffmul.ffmul_crt import serialization
from ffmul.ffmul_crt import witness
from ffmul.ffmul_lib import curves
from ffmul.ffmul_lib import parameters

_X = flags.DEFINE_string(
    "x",
    "8457179954364567802776200328751639987550736",
    "First operand, a decimal integer below the target field order.",
)
_Y = flags.DEFINE_string(
    "y",
    "371871151960082407017394978175294924545716958041",
    "Second operand, a decimal integer below the target field order.",
)
_TARGET_FIELD = flags.DEFINE_enum(
    "target_field",
    "p256_base",
    list(curves.FIELDS),
    "Field q the multiplication is reduced by.",
)
_NATIVE_FIELD = flags.DEFINE_enum(
    "native_field",
    "bn254_base",
    list(curves.FIELDS),
    "Native field p of the proof system.",
)
_RADIX = flags.DEFINE_integer("radix", 2**32, "Limb base, a power of two.")
_NUM_LIMBS = flags.DEFINE_integer("num_limbs", 9, "Limbs per operand.")
_USE_NATIVE_MODULUS = flags.DEFINE_bool(
    "use_native_modulus", False, "Use p as the first CRT modulus."
)
_OUTPUT = flags.DEFINE_enum(
    "output",
    "both",
    ["toml", "params", "both"],
    "Which serialization to print.",
)


def generate(
    params: parameters.MulParameters, x: int, y: int, output: str = "both"
) -> str:
  """Returns the requested serializations of the witnesses for x * y."""
  bundle, _ = witness.mul_mod_witness(params, x, y)
  witness.verify_bundle(bundle)
  sections = []
  if output in ("toml", "both"):
    sections.append(serialization.prover_toml(bundle))
  if output in ("params", "both"):
    sections.append(serialization.params_struct(bundle))
  return "\n\n".join(sections)


def main(argv: Sequence[str]) -> None:
  if len(argv) > 1:
    raise app.UsageError("Too many command-line arguments.")

  params = parameters.MulParameters(
      radix=_RADIX.value,
      num_limbs=_NUM_LIMBS.value,
      modulus=curves.FIELDS[_TARGET_FIELD.value],
      native_modulus=curves.FIELDS[_NATIVE_FIELD.value],
      use_native_modulus=_USE_NATIVE_MODULUS.value,
  )
  logging.info(
      f"target: {_TARGET_FIELD.value}, native: {_NATIVE_FIELD.value}"
  )
  print(generate(params, int(_X.value), int(_Y.value), _OUTPUT.value))


def run() -> None:
  app.run(main)


if __name__ == "__main__":
  run()
