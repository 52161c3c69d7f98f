"""
Configuration Module

Fixed parameters shared by every cryptlayer component.

The default key, IV and salt are literal byte values. Data encrypted
without an explicit key or password can only be decrypted with exactly
these bytes, so changing any of them breaks every existing `.crypt` file
and Base64 payload produced with the defaults.
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes


# AES constants
BLOCK_SIZE = 16                 # AES block size in bytes, for every key length
IV_SIZE = 16
VALID_KEY_SIZES = (16, 24, 32)  # AES-128 / AES-192 / AES-256

# PBKDF2 configuration
PBKDF2_ITERATIONS = 1000
PBKDF2_ALGORITHM = hashes.SHA1()
DERIVED_KEY_SIZE = 32
DERIVED_IV_SIZE = 16

# File conventions
ENCRYPTED_EXTENSION = ".crypt"

# Read size for hashing and streaming (64 KB)
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class CryptoDefaults:
    """
    Immutable default key material.
    
    Attributes:
        key: AES key used when no key or password is supplied
        iv: AES IV used when no key or password is supplied
        salt: PBKDF2 salt for password-derived key material
        iterations: PBKDF2 iteration count
    """
    key: bytes
    iv: bytes
    salt: bytes
    iterations: int = PBKDF2_ITERATIONS
    
    def __post_init__(self):
        if len(self.key) not in VALID_KEY_SIZES:
            raise ValueError(f"Default key must be one of {VALID_KEY_SIZES} bytes")
        if len(self.iv) != IV_SIZE:
            raise ValueError(f"Default IV must be {IV_SIZE} bytes")
        if len(self.salt) != 16:
            raise ValueError("Salt must be 16 bytes")
        if self.iterations <= 0:
            raise ValueError("Iterations must be positive")


DEFAULTS = CryptoDefaults(
    # Base64: OvKccbTlCG0fyYdSqzTQ/kahK8OeeBRg3wW7KW+T7Qo=
    key=bytes([
        0x3A, 0xF2, 0x9C, 0x71, 0xB4, 0xE5, 0x08, 0x6D,
        0x1F, 0xC9, 0x87, 0x52, 0xAB, 0x34, 0xD0, 0xFE,
        0x46, 0xA1, 0x2B, 0xC3, 0x9E, 0x78, 0x14, 0x60,
        0xDF, 0x05, 0xBB, 0x29, 0x6F, 0x93, 0xED, 0x0A,
    ]),
    # Base64: ZzS/fZgKLUPE64FFT0u3HQ==
    iv=bytes([
        0x67, 0x34, 0xBF, 0x7D, 0x98, 0x0A, 0x2D, 0x43,
        0xC4, 0xEB, 0x81, 0x45, 0x4F, 0x4B, 0xB7, 0x1D,
    ]),
    # Base64: +oMpAVt+TJowGhjvYsqHdQ==
    salt=bytes([
        0xFA, 0x83, 0x29, 0x01, 0x5B, 0x7E, 0x4C, 0x9A,
        0x3D, 0x18, 0xEF, 0x62, 0xCA, 0x07, 0x9D, 0x55,
    ]),
)
