"""
File Checksum Module

MD5 fingerprints of file contents for equality and change checks.

MD5 is used for compatibility with existing checksums, not as a defence
against deliberate tampering.
"""

import hashlib
import os

from ..config import DEFAULT_CHUNK_SIZE
from ..exceptions import InvalidArgumentError


CHECKSUM_LENGTH = 32  # hex characters of an MD5 digest


def compute_md5(path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Compute the MD5 digest of a file (streaming).
    
    Args:
        path: Path to file
        chunk_size: Read chunk size
        
    Returns:
        16-byte digest
        
    Raises:
        InvalidArgumentError: If the path is empty
        FileNotFoundError: If the file does not exist
    """
    if not path:
        raise InvalidArgumentError("Path cannot be empty")
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    
    md5 = hashlib.md5(usedforsecurity=False)
    with open(path, 'rb') as f:
        while chunk := f.read(chunk_size):
            md5.update(chunk)
    return md5.digest()


def compute_checksum(path: str) -> str:
    """Return the MD5 checksum of a file as 32 uppercase hex characters."""
    return compute_md5(path).hex().upper()


def compare_files(path_a: str, path_b: str) -> bool:
    """Compare two files by content; names are not considered."""
    return compute_checksum(path_a) == compute_checksum(path_b)


def check_file(path: str, checksum: str) -> bool:
    """
    Check a file against a known checksum.
    
    Args:
        path: File to check
        checksum: Expected MD5 checksum (hex, any case)
        
    Returns:
        True if the file's checksum matches
        
    Raises:
        InvalidArgumentError: If the checksum is empty or not 32 characters
        FileNotFoundError: If the file does not exist
    """
    if not path:
        raise InvalidArgumentError("Path cannot be empty")
    if not checksum:
        raise InvalidArgumentError("Checksum cannot be empty")
    if len(checksum) != CHECKSUM_LENGTH:
        raise InvalidArgumentError(f"The checksum must be {CHECKSUM_LENGTH} characters long.")
    
    return compute_checksum(path) == checksum.upper()
