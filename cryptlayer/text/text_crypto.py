"""
Text Encryption Module

Encrypts short strings to standard Base64 and back.

    text --UTF-8--> bytes --AES-CBC--> ciphertext --Base64--> str

try_decrypt_text() is the best-effort variant: it never raises and
reports the outcome as a DecryptResult instead.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidArgumentError, CryptographicError
from ..core_crypto.engine import encrypt_bytes, decrypt_bytes
from ..core_crypto.key_derivation import KeyMaterial, resolve_key_material


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecryptResult:
    """
    Outcome of try_decrypt_text().
    
    Truthy on success. On failure `text` is None and `error` holds the
    exception that was caught.
    """
    success: bool
    text: Optional[str] = None
    error: Optional[Exception] = None
    
    def __bool__(self) -> bool:
        return self.success


def _check_text(text: str) -> None:
    if not text:
        raise InvalidArgumentError("Text cannot be empty")


def encrypt_text(text: str, password: Optional[str] = None, *,
                 key: Optional[bytes] = None, iv: Optional[bytes] = None) -> str:
    """
    Encrypt a string.
    
    Args:
        text: Text to encrypt
        password: Optional password for PBKDF2-derived key material
        key, iv: Optional explicit key/IV pair
        
    Returns:
        Base64-encoded ciphertext
    """
    _check_text(text)
    material = resolve_key_material(password, key, iv)
    ciphertext = encrypt_bytes(text.encode('utf-8'), material.key, material.iv)
    return base64.b64encode(ciphertext).decode('ascii')


def decrypt_text(text: str, password: Optional[str] = None, *,
                 key: Optional[bytes] = None, iv: Optional[bytes] = None) -> str:
    """
    Decrypt a Base64 string produced by encrypt_text().
    
    Raises:
        InvalidArgumentError: If the text is empty or not valid Base64
        CryptographicError: If the key is wrong or the data is corrupt
    """
    _check_text(text)
    material = resolve_key_material(password, key, iv)
    
    try:
        ciphertext = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid Base64 input: {exc}") from exc
    
    plaintext = decrypt_bytes(ciphertext, material.key, material.iv)
    try:
        return plaintext.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise CryptographicError("Decrypted data is not valid UTF-8") from exc


def try_decrypt_text(text: str) -> DecryptResult:
    """
    Decrypt with the default key/IV without raising.
    
    Example:
        >>> result = try_decrypt_text(token)
        >>> if result:
        ...     print(result.text)
    """
    try:
        default = KeyMaterial.default()
        return DecryptResult(True, decrypt_text(text, key=default.key, iv=default.iv))
    except Exception as exc:
        logger.warning("Best-effort decryption failed: %s", type(exc).__name__)
        return DecryptResult(False, None, exc)
