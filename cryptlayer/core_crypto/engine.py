"""
Crypto Engine Module

AES-CBC with PKCS7 padding on top of the `cryptography` package.

Every function here is a pure transform: no filesystem access and no
shared state. CBC has no authentication tag, so decrypting with the wrong
key USUALLY fails the padding check but can occasionally produce output
that happens to end in valid padding. Callers needing tamper detection
must add a MAC of their own.
"""

from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from ..config import DEFAULTS, BLOCK_SIZE
from ..exceptions import CryptographicError
from .key_derivation import validate_key_iv


class Transform:
    """
    Incremental AES-CBC/PKCS7 transform.
    
    Feed data with update() and finish with finalize(). An encrypting
    transform pads the plaintext; a decrypting transform strips and
    validates the padding.
    """
    
    def __init__(self, key: bytes, iv: bytes, encrypt: bool):
        """
        Args:
            key: 16, 24 or 32-byte AES key
            iv: 16-byte IV
            encrypt: True for encryption, False for decryption
        """
        validate_key_iv(key, iv)
        cipher = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)),
                        backend=default_backend())
        pkcs7 = padding.PKCS7(BLOCK_SIZE * 8)
        self._encrypt = encrypt
        if encrypt:
            self._cipher_ctx = cipher.encryptor()
            self._padding_ctx = pkcs7.padder()
        else:
            self._cipher_ctx = cipher.decryptor()
            self._padding_ctx = pkcs7.unpadder()
    
    @property
    def is_encryptor(self) -> bool:
        return self._encrypt
    
    def update(self, data: bytes) -> bytes:
        """Transform a chunk, returning whatever output is ready."""
        if self._encrypt:
            return self._cipher_ctx.update(self._padding_ctx.update(data))
        return self._padding_ctx.update(self._cipher_ctx.update(data))
    
    def finalize(self) -> bytes:
        """
        Flush the final block.
        
        Raises:
            CryptographicError: If the ciphertext is not block aligned
                or its padding is invalid
        """
        if self._encrypt:
            last = self._padding_ctx.finalize()
            return self._cipher_ctx.update(last) + self._cipher_ctx.finalize()
        try:
            tail = self._padding_ctx.update(self._cipher_ctx.finalize())
            return tail + self._padding_ctx.finalize()
        except ValueError as exc:
            raise CryptographicError(f"Decryption failed: {exc}") from exc


def make_encryptor(key: Optional[bytes] = None,
                   iv: Optional[bytes] = None) -> Transform:
    """Create an encrypting transform, defaulting to the default key/IV."""
    return Transform(DEFAULTS.key if key is None else key,
                     DEFAULTS.iv if iv is None else iv,
                     encrypt=True)


def make_decryptor(key: Optional[bytes] = None,
                   iv: Optional[bytes] = None) -> Transform:
    """Create a decrypting transform, defaulting to the default key/IV."""
    return Transform(DEFAULTS.key if key is None else key,
                     DEFAULTS.iv if iv is None else iv,
                     encrypt=False)


def apply_transform(data: bytes, transform: Transform) -> bytes:
    """Run a whole buffer through a fresh transform."""
    return transform.update(bytes(data)) + transform.finalize()


def encrypt_bytes(data: bytes, key: Optional[bytes] = None,
                  iv: Optional[bytes] = None) -> bytes:
    """
    Encrypt a byte buffer.
    
    Returns:
        Ciphertext whose length is a multiple of 16
    """
    return apply_transform(data, make_encryptor(key, iv))


def decrypt_bytes(data: bytes, key: Optional[bytes] = None,
                  iv: Optional[bytes] = None) -> bytes:
    """
    Decrypt a byte buffer.
    
    Raises:
        CryptographicError: On padding or length failure
    """
    return apply_transform(data, make_decryptor(key, iv))
