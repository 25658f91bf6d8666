"""Selection of auxiliary CRT moduli for foreign-field multiplication.

A multiplication x * y = z (mod q) is checked in the circuit modulo q and modulo
every m_i of a modulus set M. The set must satisfy two bounds:

  * soundness: lcm(M) >= 2 * n^2 * q * b^2, so that an identity holding modulo
    every m_i also holds over the integers;
  * wrap-around: m_i <= p / (4 * n^2 * b^2) for every m_i other than the native
    field order p, so that the circuit can compute the partially reduced sums
    modulo m_i without overflowing p.
"""

from collections.abc import Sequence
import logging

import gmpy2
from ffmul.ffmul_lib import errors

# Pre-generated primes, each below the BN254 base field order and below its
# wrap-around bound for up to 9 limbs of 32 bits.
DEFAULT_PRIME_POOL = (
    1399027476140078653058704379177609361753676736201,
    1167555264947830116235753479722409858771985625309,
    778213806565775850770437273987932725759002427,
    1258158978999755983804345499287890933023315388251,
    879493383459077038143066346003600091475190167851,
    882865033011123283515906055612738686262856896339,
    1011367821446769602611683327392392806638070094663,
    781307822319767093184989234080120664152777197089,
    1120359700563689563922307923371865921655240033331,
    1016524153110029342063341788118432251224877343367,
)


def soundness_bound(modulus: int, num_limbs: int, radix: int) -> int:
  """Returns the minimum lcm of the modulus set, 2 * n^2 * q * b^2."""
  return 2 * num_limbs**2 * modulus * radix**2


def wrap_around_bound(native_modulus: int, num_limbs: int, radix: int) -> int:
  """Returns the largest non-native modulus allowed, p // (4 * n^2 * b^2)."""
  return native_modulus // (4 * num_limbs**2 * radix**2)


def select_moduli(
    use_native_modulus: bool,
    native_modulus: int,
    modulus: int,
    num_limbs: int,
    radix: int,
    pool: Sequence[int] = DEFAULT_PRIME_POOL,
) -> tuple[tuple[int, ...], tuple[int, ...]]:
  """Chooses the CRT modulus set for one multiplication.

  Candidates are taken from the front of `pool`, in order, until the soundness
  bound is met. The first feasible prefix is returned; there is no
  backtracking.

  Args:
    use_native_modulus: Whether to use the native field order as the first
      modulus.
    native_modulus: The order p of the circuit's native field.
    modulus: The foreign modulus q.
    num_limbs: The number of limbs n per operand.
    radix: The limb base b.
    pool: Ordered candidate moduli. It is never modified.

  Returns:
    A tuple (moduli, remaining_pool), where remaining_pool holds the candidates
    that were not consumed, ready for the next independent proof.

  Raises:
    ConstraintUnsatisfiableError: if the pool runs out before the soundness
      bound is met, or a chosen modulus violates the wrap-around bound.
  """
  bound = soundness_bound(modulus, num_limbs, radix)
  lcm = gmpy2.mpz(1)
  moduli = []
  if use_native_modulus:
    lcm = gmpy2.lcm(lcm, native_modulus)
    moduli.append(native_modulus)

  consumed = 0
  while lcm < bound:
    if consumed == len(pool):
      raise errors.ConstraintUnsatisfiableError(
          f"Candidate pool exhausted after {consumed} moduli: lcm {lcm} is "
          f"below the soundness bound {bound}"
      )
    prime = pool[consumed]
    consumed += 1
    moduli.append(prime)
    lcm = gmpy2.lcm(lcm, prime)

  moduli_max = wrap_around_bound(native_modulus, num_limbs, radix)
  for m in moduli:
    if m != native_modulus and m > moduli_max:
      raise errors.ConstraintUnsatisfiableError(
          f"Modulus {m} exceeds the wrap-around bound {moduli_max}"
      )

  logging.debug(
      f"selected {len(moduli)} moduli, lcm bits: {lcm.bit_length()}, "
      f"bound bits: {bound.bit_length()}"
  )
  return tuple(moduli), tuple(pool[consumed:])
