"""Exception types raised by cryptlayer.

Missing files raise the builtin FileNotFoundError and filesystem write or
delete failures propagate as OSError.
"""


class CryptLayerError(Exception):
    """Base class for cryptlayer errors."""
    pass


class InvalidArgumentError(CryptLayerError, ValueError):
    """Raised when an argument is empty, malformed or out of range."""
    pass


class CryptographicError(CryptLayerError, ValueError):
    """Raised when decryption fails (wrong key, password or corrupted data)."""
    pass
