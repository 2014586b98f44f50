class RSAError(Exception):
    """Base class for every error raised by smallrsa."""


class InvalidInputError(RSAError, ValueError):
    """A message, encoded text or key that the operation cannot work with."""


class KeyGenerationError(RSAError, RuntimeError):
    """Rejection sampling gave up after its attempt budget ran out."""
