"""Class encapsulating params for one foreign-field multiplication."""

import dataclasses

from ffmul.ffmul_lib import errors
from ffmul.ffmul_lib import rns_utils


@dataclasses.dataclass(frozen=True)
class MulParameters:
  """Parameters shared by every witness of one multiplication circuit."""

  # The limb base b. Every operand is written as sum(limb[i] * b**i).
  radix: int

  # The number of limbs n per operand.
  num_limbs: int

  # The foreign modulus q the multiplication is reduced by.
  modulus: int

  # The order p of the circuit's native field.
  native_modulus: int

  # Whether p itself is used as the first CRT modulus.
  use_native_modulus: bool = False

  # the log of radix
  log_radix: int = dataclasses.field(init=False)

  def __post_init__(self) -> None:
    if self.radix <= 1 or not rns_utils.is_power_of_two(self.radix):
      raise errors.InvalidInputError(
          f"radix must be a power of two greater than 1, got {self.radix}"
      )
    if self.num_limbs < 1:
      raise errors.InvalidInputError(
          f"num_limbs must be positive, got {self.num_limbs}"
      )
    if self.modulus <= 1 or self.native_modulus <= 1:
      raise errors.InvalidInputError(
          "modulus and native_modulus must be greater than 1, got "
          f"modulus={self.modulus}, native_modulus={self.native_modulus}"
      )
    object.__setattr__(self, "log_radix", self.radix.bit_length() - 1)
