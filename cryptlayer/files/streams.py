"""
Streaming File Encryption Module

Incremental AES-CBC readers and writers wrapped around file handles, for
callers that do not want to buffer a whole file. Output is byte-identical
to the buffered encrypt_file/decrypt_file path for the same key material.

A decrypting reader only checks the PKCS7 padding when it reaches the end
of the data. Closing it after a partial read discards the remaining
ciphertext without raising.
"""

import io
import logging
import os
from typing import BinaryIO, Optional

from ..config import DEFAULT_CHUNK_SIZE
from ..exceptions import InvalidArgumentError
from ..core_crypto.engine import Transform, make_encryptor, make_decryptor
from ..core_crypto.heuristic import is_stream_encrypted
from ..core_crypto.key_derivation import KeyMaterial, resolve_key_material


logger = logging.getLogger(__name__)


class CryptoStreamWriter(io.RawIOBase):
    """
    Encrypting writer.
    
    Plaintext written to this object is encrypted and forwarded to the
    underlying stream. The padded final block is written on close().
    
    Example:
        >>> with get_file_output_stream("notes.bin", encrypt=True) as out:
        ...     out.write(b"secret")
    """
    
    def __init__(self, raw: BinaryIO, transform: Transform):
        """
        Args:
            raw: Underlying binary stream (owned; closed with this writer)
            transform: Encrypting transform
        """
        super().__init__()
        if not transform.is_encryptor:
            raise InvalidArgumentError("CryptoStreamWriter requires an encrypting transform")
        self._raw = raw
        self._transform = transform
    
    def writable(self) -> bool:
        return True
    
    def write(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        data = bytes(b)
        self._raw.write(self._transform.update(data))
        return len(data)
    
    def close(self) -> None:
        if self.closed:
            return
        try:
            self._raw.write(self._transform.finalize())
        finally:
            self._raw.close()
            super().close()


class CryptoStreamReader(io.RawIOBase):
    """
    Decrypting reader.
    
    Reads ciphertext from the underlying stream in chunks and returns
    plaintext. Reading to EOF validates the padding and raises
    CryptographicError on failure; close() after a partial read does not.
    """
    
    def __init__(self, raw: BinaryIO, transform: Transform,
                 chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            raw: Underlying binary stream (owned; closed with this reader)
            transform: Decrypting transform
            chunk_size: Ciphertext read size
        """
        super().__init__()
        if transform.is_encryptor:
            raise InvalidArgumentError("CryptoStreamReader requires a decrypting transform")
        self._raw = raw
        self._transform = transform
        self._chunk_size = chunk_size
        self._buffer = bytearray()
        self._eof = False
    
    def readable(self) -> bool:
        return True
    
    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        
        while not self._buffer and not self._eof:
            chunk = self._raw.read(self._chunk_size)
            if chunk:
                self._buffer += self._transform.update(chunk)
            else:
                self._eof = True
                self._buffer += self._transform.finalize()
        
        n = min(len(b), len(self._buffer))
        b[:n] = self._buffer[:n]
        del self._buffer[:n]
        return n
    
    def close(self) -> None:
        if self.closed:
            return
        # Unread ciphertext is discarded; padding is only checked at EOF
        self._buffer.clear()
        try:
            self._raw.close()
        finally:
            super().close()


def _check_path(path: str) -> None:
    if not path:
        raise InvalidArgumentError("Path cannot be empty")


def _explicit_key_material(password: Optional[str], key: Optional[bytes],
                           iv: Optional[bytes]) -> Optional[KeyMaterial]:
    if password is None and key is None and iv is None:
        return None
    return resolve_key_material(password, key, iv)


def get_file_output_stream(path: str, encrypt: bool = False, *,
                           password: Optional[str] = None,
                           key: Optional[bytes] = None,
                           iv: Optional[bytes] = None) -> BinaryIO:
    """
    Open a file for writing, optionally encrypting everything written.
    
    Passing a password or a key/IV pair always encrypts, whatever the
    value of `encrypt`; the flag only selects the default key/IV when no
    key material is given.
    
    Args:
        path: File to create (truncated if it exists)
        encrypt: Encrypt with the default key/IV when no key material is given
        password: Encrypt with password-derived key material
        key, iv: Encrypt with an explicit key/IV pair
        
    Returns:
        A plain binary file, or a CryptoStreamWriter
    """
    _check_path(path)
    material = _explicit_key_material(password, key, iv)
    if material is None and not encrypt:
        return open(path, 'wb')
    
    material = material or KeyMaterial.default()
    # Build the transform before creating the file so bad keys leave nothing behind
    transform = make_encryptor(material.key, material.iv)
    logger.debug("Opening encrypting writer for %s", path)
    return CryptoStreamWriter(open(path, 'wb'), transform)


def get_file_input_stream(path: str, *,
                          password: Optional[str] = None,
                          key: Optional[bytes] = None,
                          iv: Optional[bytes] = None,
                          chunk_size: int = DEFAULT_CHUNK_SIZE) -> BinaryIO:
    """
    Open a file for reading, decrypting it when needed.
    
    Without key material the file is inspected with is_stream_encrypted()
    and, if it looks encrypted, decrypted with the default key/IV.
    With a password or key/IV pair the file is always decrypted.
    
    Raises:
        InvalidArgumentError: If the path is empty
        FileNotFoundError: If the file does not exist
    """
    _check_path(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    
    material = _explicit_key_material(password, key, iv)
    transform = make_decryptor(material.key, material.iv) if material else None
    
    raw = open(path, 'rb')
    if transform is None:
        try:
            encrypted = is_stream_encrypted(raw)
        except BaseException:
            raw.close()
            raise
        if not encrypted:
            return raw
        transform = make_decryptor()
    
    logger.debug("Opening decrypting reader for %s", path)
    return CryptoStreamReader(raw, transform, chunk_size)
