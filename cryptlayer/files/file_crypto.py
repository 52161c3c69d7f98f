"""
File Encryption Module

Encrypts and decrypts files in place using AES-CBC with PKCS7 padding.

Naming convention:
    encrypt: "<stem>.<ext>"        -> "<stem>_<ext>.crypt"
    decrypt: "<stem>_<ext>.crypt"  -> "<stem>.<ext>"

Replace semantics:
    1. Read the whole source file into memory
    2. Transform it (decryption failures stop here, before any write)
    3. Write the output file; on failure the partial output is removed
    4. Delete the source file

No locking is done: concurrent calls on the same path must be serialized
by the caller.
"""

import logging
import os
from typing import Optional

from ..config import ENCRYPTED_EXTENSION
from ..exceptions import InvalidArgumentError
from ..core_crypto.engine import encrypt_bytes, decrypt_bytes
from ..core_crypto.heuristic import is_file_encrypted
from ..core_crypto.key_derivation import KeyMaterial, resolve_key_material


logger = logging.getLogger(__name__)


def encrypted_filename(path: str) -> str:
    """
    Map "<stem>.<ext>" to "<stem>_<ext>.crypt".
    
    Only the final path component is rewritten.
    
    Raises:
        InvalidArgumentError: If the path is empty or the name has no '.'
    """
    if not path:
        raise InvalidArgumentError("Path cannot be empty")
    directory, name = os.path.split(path)
    dot = name.rfind('.')
    if dot < 0:
        raise InvalidArgumentError(f"File name has no extension: {name!r}")
    
    new_name = name[:dot] + '_' + name[dot + 1:] + ENCRYPTED_EXTENSION
    return os.path.join(directory, new_name)


def decrypted_filename(path: str) -> str:
    """
    Map "<stem>_<ext>.crypt" back to "<stem>.<ext>".
    
    Raises:
        InvalidArgumentError: If the path does not end in ".crypt" or the
            name has no '_' before the extension
    """
    if not path:
        raise InvalidArgumentError("Path cannot be empty")
    directory, name = os.path.split(path)
    if not name.endswith(ENCRYPTED_EXTENSION):
        raise InvalidArgumentError(f"Not a {ENCRYPTED_EXTENSION} file: {path!r}")
    
    dot = name.rfind('.')
    underscore = name.rfind('_', 0, dot)
    if underscore < 0:
        raise InvalidArgumentError(f"Cannot restore original extension from {name!r}")
    
    new_name = name[:underscore] + '.' + name[underscore + 1:dot]
    return os.path.join(directory, new_name)


def _read_all(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def _replace_file(source: str, destination: str, data: bytes) -> None:
    """Write data to destination, then delete source.
    
    A failed write removes the partial destination file and re-raises.
    A failed delete of the source propagates unchanged.
    """
    out = open(destination, 'wb')
    try:
        with out:
            out.write(data)
    except Exception:
        logger.warning("Write to %s failed, removing partial output", destination)
        os.remove(destination)
        raise
    
    os.remove(source)


class FileEncryptor:
    """
    Encrypts and decrypts files with one set of key material.
    
    Key material is chosen at construction:
        FileEncryptor()                   - default key/IV
        FileEncryptor("password")         - PBKDF2-derived key/IV
        FileEncryptor(key=k, iv=v)        - explicit key/IV
    
    Example:
        >>> encryptor = FileEncryptor("my_password")
        >>> encryptor.encrypt_file("report.txt")
        'report_txt.crypt'
        >>> encryptor.decrypt_file("report_txt.crypt")
        'report.txt'
    """
    
    def __init__(self, password: Optional[str] = None, *,
                 key: Optional[bytes] = None, iv: Optional[bytes] = None):
        self._material = resolve_key_material(password, key, iv)
    
    @property
    def key_material(self) -> KeyMaterial:
        return self._material
    
    def encrypt_file(self, path: str) -> str:
        """
        Encrypt a file, replacing it with "<stem>_<ext>.crypt".
        
        Args:
            path: File to encrypt
            
        Returns:
            Path of the encrypted file
            
        Raises:
            InvalidArgumentError: If the path is empty or has no extension
            FileNotFoundError: If the file does not exist
            OSError: If writing the output or deleting the source fails
        """
        if not path:
            raise InvalidArgumentError("Path cannot be empty")
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        output_path = encrypted_filename(path)
        
        ciphertext = encrypt_bytes(_read_all(path), self._material.key, self._material.iv)
        _replace_file(path, output_path, ciphertext)
        
        logger.info("Encrypted %s -> %s", path, output_path)
        return output_path
    
    def decrypt_file(self, path: str) -> str:
        """
        Decrypt a ".crypt" file, restoring "<stem>.<ext>".
        
        Args:
            path: File to decrypt
            
        Returns:
            Path of the restored file
            
        Raises:
            InvalidArgumentError: If the path does not end in ".crypt"
                (checked before touching the filesystem)
            FileNotFoundError: If the file does not exist
            CryptographicError: If the key is wrong or the data is corrupt
            OSError: If writing the output or deleting the source fails
        """
        output_path = decrypted_filename(path)
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        
        plaintext = decrypt_bytes(_read_all(path), self._material.key, self._material.iv)
        _replace_file(path, output_path, plaintext)
        
        logger.info("Decrypted %s -> %s", path, output_path)
        return output_path


def encrypt_file(path: str, password: Optional[str] = None, *,
                 key: Optional[bytes] = None, iv: Optional[bytes] = None) -> str:
    """Convenience function for file encryption."""
    return FileEncryptor(password, key=key, iv=iv).encrypt_file(path)


def decrypt_file(path: str, password: Optional[str] = None, *,
                 key: Optional[bytes] = None, iv: Optional[bytes] = None) -> str:
    """Convenience function for file decryption."""
    return FileEncryptor(password, key=key, iv=iv).decrypt_file(path)


def get_file_info(path: str) -> dict:
    """
    Describe a file without decrypting it.
    
    Returns:
        Dict with size, heuristic result and the name the file would get
        from encrypt_file or decrypt_file (None when not applicable)
    """
    if not path:
        raise InvalidArgumentError("Path cannot be empty")
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    
    is_crypt_name = os.path.basename(path).endswith(ENCRYPTED_EXTENSION)
    try:
        target = decrypted_filename(path) if is_crypt_name else encrypted_filename(path)
    except InvalidArgumentError:
        target = None
    
    return {
        'size': os.path.getsize(path),
        'looks_encrypted': is_file_encrypted(path),
        'crypt_name': is_crypt_name,
        'target_path': target,
    }
