# File Encryption Module
"""
File-level operations:
- In-place encrypt/decrypt with ".crypt" naming - file_crypto.py
- Streaming encrypting writers / decrypting readers - streams.py
- MD5 content checksums - checksum.py
"""

from .file_crypto import (
    FileEncryptor,
    encrypt_file,
    decrypt_file,
    encrypted_filename,
    decrypted_filename,
    get_file_info,
)

from .streams import (
    CryptoStreamReader,
    CryptoStreamWriter,
    get_file_output_stream,
    get_file_input_stream,
)

from .checksum import (
    compute_md5,
    compute_checksum,
    compare_files,
    check_file,
)

__all__ = [
    # File encryption
    'FileEncryptor',
    'encrypt_file',
    'decrypt_file',
    'encrypted_filename',
    'decrypted_filename',
    'get_file_info',
    # Streams
    'CryptoStreamReader',
    'CryptoStreamWriter',
    'get_file_output_stream',
    'get_file_input_stream',
    # Checksums
    'compute_md5',
    'compute_checksum',
    'compare_files',
    'check_file',
]
