"""Witness generation for non-native (foreign-field) modular multiplication.

To prove x * y = z (mod q) in a circuit over a native field p, the prover
supplies the limbs of x, y, q and z together with quotient witnesses r and
s_1, ..., s_k. The circuit checks

  P(q) - S(q) = r * q
  P(m_i) - S(m_i) = r * (q mod m_i) + s_i * m_i   for every m_i in M,

where P and S are the partially reduced product and sum (see
partial_reduction). Since the circuit cannot divide, r and s_i are computed
here.
"""

from collections.abc import Sequence
import dataclasses
import logging
from typing import Callable, Optional

from ffmul.ffmul_crt import base_converter
from ffmul.ffmul_crt import modulus_selector
from ffmul.ffmul_crt import partial_reduction
from ffmul.ffmul_lib import errors
from ffmul.ffmul_lib import parameters
from ffmul.ffmul_lib import rns_utils

LimbSequence = base_converter.LimbSequence


@dataclasses.dataclass(frozen=True)
class ReductionTrace:
  """Intermediate values of one reduction, passed to the trace hook."""

  # q for the master reduction, m_i for an auxiliary one.
  modulus: int
  product: int
  sum: int
  # r for the master reduction, s_i for an auxiliary one.
  quotient: int


TraceHook = Callable[[ReductionTrace], None]


@dataclasses.dataclass(frozen=True)
class WitnessBundle:
  """All witnesses and constants certifying one multiplication."""

  radix: int
  num_limbs: int
  modulus: int
  z: int
  x_limbs: LimbSequence
  y_limbs: LimbSequence
  q_limbs: LimbSequence
  z_limbs: LimbSequence
  r: int
  moduli: tuple[int, ...]
  s: tuple[int, ...]
  q_mod_m: tuple[int, ...]
  # radix_power_residues[i][t] = (b^t mod q) mod m_i, for t in [0, 2n - 1).
  radix_power_residues: tuple[tuple[int, ...], ...]
  use_native_modulus: bool = False
  native_modulus: Optional[int] = None


def _exact_quotient(numerator: int, denominator: int, name: str) -> int:
  quotient, remainder = divmod(numerator, denominator)
  if remainder != 0:
    raise errors.WitnessIntegrityError(
        f"{name} = {numerator} / {denominator} leaves remainder {remainder}"
    )
  return quotient


def _native_modulus_mismatch(
    use_native_modulus: bool,
    native_modulus: Optional[int],
    moduli: Sequence[int],
) -> Optional[str]:
  """Describes why moduli[0] is not the native modulus, or returns None."""
  if not use_native_modulus:
    return None
  if native_modulus is None:
    return "use_native_modulus requires native_modulus"
  if not moduli or moduli[0] != native_modulus:
    return f"moduli must start with the native modulus {native_modulus}"
  return None


def assemble(
    radix: int,
    num_limbs: int,
    x: int,
    y: int,
    modulus: int,
    moduli: Sequence[int],
    use_native_modulus: bool,
    native_modulus: Optional[int] = None,
    trace: Optional[TraceHook] = None,
) -> WitnessBundle:
  """Computes the witness bundle for x * y mod `modulus`.

  Args:
    radix: The limb base b.
    num_limbs: The number of limbs n per operand.
    x: The first operand, in [0, modulus).
    y: The second operand, in [0, modulus).
    modulus: The foreign modulus q.
    moduli: The CRT modulus set M, e.g. from modulus_selector.select_moduli.
    use_native_modulus: Whether moduli[0] is the native field order.
    native_modulus: The native field order, recorded in the bundle.
    trace: Optional hook receiving the intermediate values of every reduction.

  Returns:
    The WitnessBundle. Its per-modulus entries follow the order of `moduli`.

  Raises:
    InvalidInputError: if x or y is outside [0, modulus), num_limbs is
      not positive, or use_native_modulus does not match moduli[0].
    LimbOverflowError: if a value needs more than num_limbs limbs.
    WitnessIntegrityError: if a quotient is not exact.
  """
  if num_limbs < 1:
    raise errors.InvalidInputError(
        f"num_limbs must be positive, got {num_limbs}"
    )
  problem = _native_modulus_mismatch(use_native_modulus, native_modulus, moduli)
  if problem is not None:
    raise errors.InvalidInputError(problem)
  for name, value in (("x", x), ("y", y)):
    if value < 0 or value >= modulus:
      raise errors.InvalidInputError(
          f"{name}={value} not in range 0 to {modulus - 1}"
      )

  z = (x * y) % modulus
  x_limbs = base_converter.to_padded_limbs(x, radix, num_limbs)
  y_limbs = base_converter.to_padded_limbs(y, radix, num_limbs)
  q_limbs = base_converter.to_padded_limbs(modulus, radix, num_limbs)
  z_limbs = base_converter.to_padded_limbs(z, radix, num_limbs)

  product_q = partial_reduction.partially_reduced_product(
      radix, modulus, x_limbs, y_limbs
  )
  sum_q = partial_reduction.partially_reduced_sum(radix, modulus, z_limbs)
  r = _exact_quotient(product_q - sum_q, modulus, "r")
  logging.debug(f"q: {modulus}, product: {product_q}, sum: {sum_q}, r: {r}")
  if trace is not None:
    trace(ReductionTrace(modulus, product_q, sum_q, r))

  s = []
  q_mod_m = []
  residue_tables = []
  for m_i in moduli:
    q_mod_m_i = modulus % m_i
    product_i = partial_reduction.partially_reduced_product(
        radix, m_i, x_limbs, y_limbs, intermediate_modulus=modulus
    )
    sum_i = partial_reduction.partially_reduced_sum(
        radix, m_i, z_limbs, intermediate_modulus=modulus
    )
    s_i = _exact_quotient(
        product_i - sum_i - r * q_mod_m_i, m_i, f"s[{len(s)}]"
    )
    logging.debug(f"m_i: {m_i}, product: {product_i}, sum: {sum_i}")
    if trace is not None:
      trace(ReductionTrace(m_i, product_i, sum_i, s_i))
    s.append(s_i)
    q_mod_m.append(q_mod_m_i)
    residue_tables.append(
        tuple(
            partial_reduction.radix_power_residues(
                radix, m_i, 2 * num_limbs - 1, intermediate_modulus=modulus
            )
        )
    )

  return WitnessBundle(
      radix=radix,
      num_limbs=num_limbs,
      modulus=modulus,
      z=z,
      x_limbs=x_limbs,
      y_limbs=y_limbs,
      q_limbs=q_limbs,
      z_limbs=z_limbs,
      r=r,
      moduli=tuple(moduli),
      s=tuple(s),
      q_mod_m=tuple(q_mod_m),
      radix_power_residues=tuple(residue_tables),
      use_native_modulus=use_native_modulus,
      native_modulus=native_modulus,
  )


def mul_mod_witness(
    params: parameters.MulParameters,
    x: int,
    y: int,
    pool: Sequence[int] = modulus_selector.DEFAULT_PRIME_POOL,
    trace: Optional[TraceHook] = None,
) -> tuple[WitnessBundle, tuple[int, ...]]:
  """Selects the CRT moduli for `params` and assembles the witnesses.

  Returns:
    A tuple (bundle, remaining_pool).
  """
  moduli, remaining_pool = modulus_selector.select_moduli(
      params.use_native_modulus,
      params.native_modulus,
      params.modulus,
      params.num_limbs,
      params.radix,
      pool,
  )
  bundle = assemble(
      params.radix,
      params.num_limbs,
      x,
      y,
      params.modulus,
      moduli,
      params.use_native_modulus,
      native_modulus=params.native_modulus,
      trace=trace,
  )
  logging.info(
      f"generated witnesses for {params.num_limbs} limbs of "
      f"{params.log_radix} bits over {len(moduli)} moduli"
  )
  return bundle, remaining_pool


def _auxiliary_differences(bundle: WitnessBundle) -> list[int]:
  """Returns P(m_i) - S(m_i) for every m_i, from the bundle's limbs."""
  differences = []
  for m_i in bundle.moduli:
    product_i = partial_reduction.partially_reduced_product(
        bundle.radix,
        m_i,
        bundle.x_limbs,
        bundle.y_limbs,
        intermediate_modulus=bundle.modulus,
    )
    sum_i = partial_reduction.partially_reduced_sum(
        bundle.radix, m_i, bundle.z_limbs, intermediate_modulus=bundle.modulus
    )
    differences.append(product_i - sum_i)
  return differences


def verify_bundle(bundle: WitnessBundle) -> None:
  """Re-checks every identity the circuit enforces on `bundle`.

  Raises:
    WitnessIntegrityError: if any limb, table or identity is inconsistent, or
      the native modulus flag does not match moduli[0].
  """
  problem = _native_modulus_mismatch(
      bundle.use_native_modulus, bundle.native_modulus, bundle.moduli
  )
  if problem is not None:
    raise errors.WitnessIntegrityError(problem)
  radix = bundle.radix
  n = bundle.num_limbs
  for name in ("x_limbs", "y_limbs", "q_limbs", "z_limbs"):
    limbs = getattr(bundle, name)
    if len(limbs) != n or any(limb < 0 or limb >= radix for limb in limbs):
      raise errors.WitnessIntegrityError(
          f"{name} is not {n} limbs in base {radix}"
      )
  if base_converter.from_limbs(bundle.q_limbs, radix) != bundle.modulus:
    raise errors.WitnessIntegrityError("q_limbs do not reconstruct q")
  if base_converter.from_limbs(bundle.z_limbs, radix) != bundle.z:
    raise errors.WitnessIntegrityError("z_limbs do not reconstruct z")

  product_q = partial_reduction.partially_reduced_product(
      radix, bundle.modulus, bundle.x_limbs, bundle.y_limbs
  )
  sum_q = partial_reduction.partially_reduced_sum(
      radix, bundle.modulus, bundle.z_limbs
  )
  if product_q - sum_q != bundle.r * bundle.modulus:
    raise errors.WitnessIntegrityError("P(q) - S(q) != r * q")

  if not (
      len(bundle.s)
      == len(bundle.q_mod_m)
      == len(bundle.radix_power_residues)
      == len(bundle.moduli)
  ):
    raise errors.WitnessIntegrityError("per-modulus witnesses are misaligned")
  differences = _auxiliary_differences(bundle)
  for i, m_i in enumerate(bundle.moduli):
    expected_table = partial_reduction.radix_power_residues(
        radix, m_i, 2 * n - 1, intermediate_modulus=bundle.modulus
    )
    if list(bundle.radix_power_residues[i]) != expected_table:
      raise errors.WitnessIntegrityError(f"radix power table {i} is wrong")
    if bundle.q_mod_m[i] != bundle.modulus % m_i:
      raise errors.WitnessIntegrityError(f"q_mod_m[{i}] != q mod {m_i}")
    if differences[i] != bundle.r * bundle.q_mod_m[i] + bundle.s[i] * m_i:
      raise errors.WitnessIntegrityError(
          f"P(m_{i}) - S(m_{i}) != r * (q mod m_{i}) + s_{i} * m_{i}"
      )


def crt_soundness_holds(bundle: WitnessBundle) -> bool:
  """Returns True if the modulus set pins P(q) - S(q) down to r * q.

  The residues (P(m_i) - S(m_i)) mod m_i are combined by CRT and compared with
  r * q mod lcm(M). The check also requires lcm(M) to meet the soundness
  bound, without which the residues would not determine the difference.
  """
  modulus_lcm = rns_utils.lcm(bundle.moduli)
  bound = modulus_selector.soundness_bound(
      bundle.modulus, bundle.num_limbs, bundle.radix
  )
  if modulus_lcm < bound:
    return False
  residues = [
      d % m for d, m in zip(_auxiliary_differences(bundle), bundle.moduli)
  ]
  reconstructed = rns_utils.rns_reconstruct(residues, bundle.moduli)
  return reconstructed == (bundle.r * bundle.modulus) % modulus_lcm
