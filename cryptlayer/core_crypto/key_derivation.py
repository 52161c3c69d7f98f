"""
Key Derivation Module

Turns a password into AES key material using PBKDF2-HMAC-SHA1.

The key and IV are taken from ONE derivation stream: the first 32 bytes
become the key and the next 16 bytes the IV. Deriving 48 bytes at once
yields the same stream as reading 32 then 16 bytes sequentially, so data
encrypted by either approach stays interchangeable.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.backends import default_backend

from ..config import (
    DEFAULTS, PBKDF2_ALGORITHM, DERIVED_KEY_SIZE, DERIVED_IV_SIZE,
    VALID_KEY_SIZES, IV_SIZE,
)
from ..exceptions import InvalidArgumentError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyMaterial:
    """AES key and IV pair."""
    key: bytes
    iv: bytes
    
    def __post_init__(self):
        validate_key_iv(self.key, self.iv)
    
    @classmethod
    def default(cls) -> 'KeyMaterial':
        """Key material built from the fixed default key and IV."""
        return cls(DEFAULTS.key, DEFAULTS.iv)


def validate_key_iv(key: bytes, iv: bytes) -> None:
    """
    Check AES key and IV lengths.
    
    Raises:
        InvalidArgumentError: If the key is not 16, 24 or 32 bytes,
            or the IV is not 16 bytes
    """
    if not isinstance(key, (bytes, bytearray)) or len(key) not in VALID_KEY_SIZES:
        raise InvalidArgumentError(f"Key must be one of {VALID_KEY_SIZES} bytes")
    if not isinstance(iv, (bytes, bytearray)) or len(iv) != IV_SIZE:
        raise InvalidArgumentError(f"IV must be {IV_SIZE} bytes")


def derive_key_material(password: str, salt: Optional[bytes] = None,
                        iterations: Optional[int] = None) -> KeyMaterial:
    """
    Derive an AES-256 key and IV from a password.
    
    Args:
        password: User password (UTF-8 encoded before derivation)
        salt: PBKDF2 salt (defaults to the fixed salt)
        iterations: PBKDF2 iterations (defaults to 1000)
        
    Returns:
        KeyMaterial with a 32-byte key and 16-byte IV
    """
    if password is None:
        raise InvalidArgumentError("Password cannot be None")
    salt = DEFAULTS.salt if salt is None else salt
    iterations = DEFAULTS.iterations if iterations is None else iterations
    
    kdf = PBKDF2HMAC(
        algorithm=PBKDF2_ALGORITHM,
        length=DERIVED_KEY_SIZE + DERIVED_IV_SIZE,
        salt=salt,
        iterations=iterations,
        backend=default_backend()
    )
    stream = kdf.derive(password.encode('utf-8'))
    logger.debug("Derived key material (iterations=%d)", iterations)
    
    return KeyMaterial(
        key=stream[:DERIVED_KEY_SIZE],
        iv=stream[DERIVED_KEY_SIZE:DERIVED_KEY_SIZE + DERIVED_IV_SIZE],
    )


def resolve_key_material(password: Optional[str] = None,
                         key: Optional[bytes] = None,
                         iv: Optional[bytes] = None) -> KeyMaterial:
    """
    Pick key material for the (default | password | key+iv) call forms.
    
    Raises:
        InvalidArgumentError: If a password is combined with a key/IV,
            or only one of key and IV is given
    """
    if password is not None:
        if key is not None or iv is not None:
            raise InvalidArgumentError("Pass either a password or a key/IV pair, not both")
        return derive_key_material(password)
    if key is None and iv is None:
        return KeyMaterial.default()
    if key is None or iv is None:
        raise InvalidArgumentError("Key and IV must be supplied together")
    return KeyMaterial(bytes(key), bytes(iv))
