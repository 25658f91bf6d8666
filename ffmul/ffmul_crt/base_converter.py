"""Conversion between integers and fixed-radix little-endian limbs."""

from collections.abc import Sequence

from ffmul.ffmul_lib import errors
import numpy as np

LimbSequence = tuple[int, ...]


def _check_radix(radix: int) -> None:
  if radix <= 1:
    raise errors.InvalidInputError(f"radix must be greater than 1, got {radix}")


def to_limbs(value: int, radix: int) -> LimbSequence:
  """Converts a non-negative integer to its minimal base-`radix` limbs.

  The least significant limb comes first. Zero is represented as a single
  zero limb.

  Args:
    value: The integer to convert.
    radix: The limb base.

  Returns:
    The little-endian limbs of value.
  """
  _check_radix(radix)
  if value < 0:
    raise errors.InvalidInputError(f"Value {value} must be non-negative")
  limbs = []
  while value >= radix:
    value, limb = divmod(value, radix)
    limbs.append(limb)
  limbs.append(value)
  return tuple(limbs)


def from_limbs(limbs: Sequence[int], radix: int) -> int:
  """The inverse of to_limbs; high zero limbs do not change the result."""
  _check_radix(radix)
  result = 0
  for limb in reversed(limbs):
    if limb < 0 or limb >= radix:
      raise errors.InvalidInputError(
          f"Limb {limb} not in range 0 to {radix - 1}"
      )
    result = result * radix + int(limb)
  return result


def pad_limbs(limbs: Sequence[int], num_limbs: int) -> LimbSequence:
  """Zero-pads limbs on the high end to exactly num_limbs entries."""
  if len(limbs) > num_limbs:
    raise errors.LimbOverflowError(
        f"{len(limbs)} limbs do not fit in {num_limbs} limbs"
    )
  return tuple(limbs) + (0,) * (num_limbs - len(limbs))


def to_padded_limbs(value: int, radix: int, num_limbs: int) -> LimbSequence:
  return pad_limbs(to_limbs(value, radix), num_limbs)


def bits_to_numpy_dtype(bits):
  """Returns the narrowest unsigned dtype holding `bits`-bit limbs."""
  if bits <= 8:
    return np.uint8
  elif bits <= 16:
    return np.uint16
  elif bits <= 32:
    return np.uint32
  elif bits <= 64:
    return np.uint64
  else:
    # Wider limbs stay Python ints.
    return np.object_


def limbs_to_array(limbs: Sequence[int], radix: int) -> np.ndarray:
  """Converts a limb sequence to a numpy array for array-based backends.

  Args:
    limbs: The limbs, least significant first.
    radix: The limb base; limbs must lie in [0, radix).

  Returns:
    A one-dimensional array with one entry per limb.
  """
  _check_radix(radix)
  dtype = bits_to_numpy_dtype((radix - 1).bit_length())
  return np.array([int(limb) for limb in limbs], dtype=dtype)
