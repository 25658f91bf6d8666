"""Serialization of witness bundles for circuit input and circuit parameters."""

from collections.abc import Sequence
from typing import Any

from ffmul.ffmul_crt import base_converter
from ffmul.ffmul_crt import witness


def format_int_list(values: Sequence[Any]) -> str:
  """Formats integers as `[a, b, c]`."""
  return "[" + ", ".join(str(int(v)) for v in values) + "]"


def prover_inputs(bundle: witness.WitnessBundle) -> dict[str, Any]:
  """Returns the private circuit inputs, with limbs as numpy arrays."""
  return {
      "x": base_converter.limbs_to_array(bundle.x_limbs, bundle.radix),
      "y": base_converter.limbs_to_array(bundle.y_limbs, bundle.radix),
      "z_mod_q": base_converter.limbs_to_array(bundle.z_limbs, bundle.radix),
      "r": bundle.r,
      "s": list(bundle.s),
  }


def prover_toml(bundle: witness.WitnessBundle) -> str:
  """Renders the circuit inputs as a Prover.toml record."""
  lines = ["# Prover.toml"]
  for key, value in prover_inputs(bundle).items():
    if isinstance(value, int):
      lines.append(f"{key}={value}")
    else:
      lines.append(f"{key}={format_int_list(value)}")
  return "\n".join(lines)


def params_struct(bundle: witness.WitnessBundle) -> str:
  """Renders the circuit constants as a `Self { ... }` struct literal.

  When the native field order is one of the moduli it is reported separately,
  since the circuit reduces modulo p for free.
  """
  moduli = list(bundle.moduli)
  q_mod_m = list(bundle.q_mod_m)
  tables = list(bundle.radix_power_residues)
  native_fields = []
  if bundle.use_native_modulus:
    native_fields = [
        f"    native_field_q_mod_m: {q_mod_m.pop(0)},",
        "    native_field_base_exponentiation: "
        f"{format_int_list(tables.pop(0))},",
    ]
    moduli.pop(0)

  flat_tables = [residue for table in tables for residue in table]
  lines = [
      "Self {",
      f"    base: {bundle.radix},",
      f"    q: BigInt::new({format_int_list(bundle.q_limbs)}),",
      f"    m: {format_int_list(moduli)},",
      f"    q_mod_m: {format_int_list(q_mod_m)},",
      f"    base_exponentiations: {format_int_list(flat_tables)},",
      *native_fields,
      "}",
  ]
  return "\n".join(lines)
