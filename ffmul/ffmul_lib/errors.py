"""Errors raised while generating foreign-field multiplication witnesses."""


class FfmulError(Exception):
  """Base class for all witness generation errors."""


class InvalidInputError(FfmulError, ValueError):
  """A malformed operand, radix or parameter."""


class LimbOverflowError(FfmulError, ValueError):
  """A value needs more limbs than the configured limb count."""


class ConstraintUnsatisfiableError(FfmulError, ValueError):
  """No CRT modulus set meets the soundness and wrap-around bounds."""


class WitnessIntegrityError(FfmulError, ArithmeticError):
  """An expected-exact division left a remainder, or a check failed."""
