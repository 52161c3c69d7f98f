# Text Encryption Module
"""
String encryption to and from Base64 - text_crypto.py
"""

from .text_crypto import (
    DecryptResult,
    encrypt_text,
    decrypt_text,
    try_decrypt_text,
)

__all__ = [
    'DecryptResult',
    'encrypt_text',
    'decrypt_text',
    'try_decrypt_text',
]
