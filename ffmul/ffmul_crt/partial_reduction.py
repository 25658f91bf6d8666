"""Partially reduced products and sums of limb sequences.

For a radix b and a reduction modulus m, the partially reduced product of two
limb sequences x, y of length n is

  P(m) = sum_{i,j} (b^(i+j) mod m) * x[i] * y[j]

and the partially reduced sum of one limb sequence v is

  S(m) = sum_i (b^i mod m) * v[i].

P(m) = x * y (mod m) and S(m) = v (mod m), but neither is fully reduced; the
circuit recomputes both from limbs with a handful of native multiplications.

When an intermediate modulus q is given, each radix power is first reduced
modulo q and only then modulo m, i.e. ((b^k mod q) mod m). These are the
residues the circuit uses for the auxiliary moduli: they keep
P(m_i) = P(q) (mod m_i), which the CRT check relies on.
"""

from collections.abc import Sequence
from typing import Optional

import gmpy2


def radix_power_residues(
    radix: int,
    modulus: int,
    count: int,
    intermediate_modulus: Optional[int] = None,
) -> list[int]:
  """Returns [b^t mod modulus for t in range(count)].

  Args:
    radix: The limb base b.
    modulus: The reduction modulus m.
    count: The number of powers to compute.
    intermediate_modulus: If given, each power is reduced modulo this value
      before being reduced modulo `modulus`.

  Returns:
    The reduced radix powers, lowest exponent first.
  """
  residues = []
  for t in range(count):
    if intermediate_modulus is None:
      power = gmpy2.powmod(radix, t, modulus)
    else:
      power = gmpy2.powmod(radix, t, intermediate_modulus) % modulus
    residues.append(int(power))
  return residues


def partially_reduced_product(
    radix: int,
    modulus: int,
    x: Sequence[int],
    y: Sequence[int],
    intermediate_modulus: Optional[int] = None,
) -> int:
  """Computes sum_{i,j} (b^(i+j) mod m) * x[i] * y[j]."""
  residues = radix_power_residues(
      radix, modulus, len(x) + len(y) - 1, intermediate_modulus
  )
  product = gmpy2.mpz(0)
  for i, x_i in enumerate(x):
    for j, y_j in enumerate(y):
      product += residues[i + j] * gmpy2.mpz(x_i) * y_j
  return int(product)


def partially_reduced_sum(
    radix: int,
    modulus: int,
    v: Sequence[int],
    intermediate_modulus: Optional[int] = None,
) -> int:
  """Computes sum_i (b^i mod m) * v[i]."""
  residues = radix_power_residues(
      radix, modulus, len(v), intermediate_modulus
  )
  total = gmpy2.mpz(0)
  for i, v_i in enumerate(v):
    total += residues[i] * gmpy2.mpz(v_i)
  return int(total)
