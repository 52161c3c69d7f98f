# Core Cryptography Module
"""
Core cryptographic building blocks:
- PBKDF2-HMAC-SHA1 key derivation - key_derivation.py
- AES-CBC/PKCS7 transforms - engine.py
- Ciphertext detection heuristic - heuristic.py
"""

from .key_derivation import (
    KeyMaterial,
    derive_key_material,
    resolve_key_material,
    validate_key_iv,
)

from .engine import (
    Transform,
    make_encryptor,
    make_decryptor,
    apply_transform,
    encrypt_bytes,
    decrypt_bytes,
)

from .heuristic import (
    is_data_encrypted,
    looks_encrypted,
    is_stream_encrypted,
    is_file_encrypted,
)

__all__ = [
    # Key derivation
    'KeyMaterial',
    'derive_key_material',
    'resolve_key_material',
    'validate_key_iv',
    # Engine
    'Transform',
    'make_encryptor',
    'make_decryptor',
    'apply_transform',
    'encrypt_bytes',
    'decrypt_bytes',
    # Heuristic
    'is_data_encrypted',
    'looks_encrypted',
    'is_stream_encrypted',
    'is_file_encrypted',
]
