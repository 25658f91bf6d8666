"""Residue number system helpers for CRT modulus sets."""

from collections.abc import Sequence

import gmpy2


def is_power_of_two(x: int) -> bool:
  """Returns True if x is a power of two."""
  return x > 0 and (x & (x - 1)) == 0


def lcm(moduli: Sequence[int]) -> int:
  """Returns the least common multiple of moduli (1 for an empty set)."""
  result = gmpy2.mpz(1)
  for m in moduli:
    result = gmpy2.lcm(result, m)
  return int(result)


def rns_precompute(moduli: Sequence[int]) -> list[int]:
  """Returns the inverse CRT factors of pairwise coprime moduli."""
  modulus = lcm(moduli)
  precomputed = []
  for m in moduli:
    rest = modulus // m  # 0 mod all the other moduli
    inverse = pow(rest % m, -1, m)  # factor to make 1 mod this moduli
    icrt_val = (rest * inverse) % modulus  # combine
    precomputed.append(icrt_val)
  return precomputed


def rns_reconstruct(residues: Sequence[int], moduli: Sequence[int]) -> int:
  """Recovers the integer in [0, lcm(moduli)) with the given residues."""
  if len(residues) != len(moduli):
    raise ValueError(
        f"Got {len(residues)} residues for {len(moduli)} moduli"
    )
  precomputed = rns_precompute(moduli)
  output = 0
  for i, r in enumerate(residues):
    output += precomputed[i] * int(r)
  return output % lcm(moduli)

