"""
cryptlayer - data protection helpers.

- AES-CBC file and text encryption with default, password or explicit keys
- Ciphertext detection heuristic
- MD5 file checksums
- Generalized Luhn check digits
"""

import logging

from .config import DEFAULTS, CryptoDefaults
from .exceptions import CryptLayerError, InvalidArgumentError, CryptographicError
from .core_crypto import (
    KeyMaterial,
    derive_key_material,
    make_encryptor,
    make_decryptor,
    apply_transform,
    encrypt_bytes,
    decrypt_bytes,
    looks_encrypted,
    is_stream_encrypted,
    is_file_encrypted,
)
from .files.file_crypto import FileEncryptor, encrypt_file, decrypt_file
from .files.streams import get_file_input_stream, get_file_output_stream
from .files.checksum import compute_checksum, compare_files, check_file
from .text import DecryptResult, encrypt_text, decrypt_text, try_decrypt_text
from .signing import check_number, compute_check_digit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    'DEFAULTS',
    'CryptoDefaults',
    'CryptLayerError',
    'InvalidArgumentError',
    'CryptographicError',
    'KeyMaterial',
    'derive_key_material',
    'make_encryptor',
    'make_decryptor',
    'apply_transform',
    'encrypt_bytes',
    'decrypt_bytes',
    'looks_encrypted',
    'is_stream_encrypted',
    'is_file_encrypted',
    'FileEncryptor',
    'encrypt_file',
    'decrypt_file',
    'get_file_input_stream',
    'get_file_output_stream',
    'compute_checksum',
    'compare_files',
    'check_file',
    'DecryptResult',
    'encrypt_text',
    'decrypt_text',
    'try_decrypt_text',
    'check_number',
    'compute_check_digit',
]
