"""
Encryption Detection Module

Guesses whether data is ciphertext produced by this library.

AES output is spread evenly over all 256 byte values, while text files
(XML, JSON, source code...) use almost only printable ASCII. If a sample
contains a byte outside the printable range, and that byte is not one of
a few common text bytes, the data is treated as encrypted.

This is a heuristic, not a format marker. Binary plaintext whose length
is a multiple of 16 will look encrypted.
"""

import logging
import os
from typing import BinaryIO

from ..config import BLOCK_SIZE


logger = logging.getLogger(__name__)


# CR, LF and the three bytes of the UTF-8 byte order mark (each checked alone)
TEXT_EXCEPTION_BYTES = frozenset({10, 13, 0xEF, 0xBB, 0xBF})
PRINTABLE_MIN = 32
PRINTABLE_MAX = 127


def is_data_encrypted(data: bytes) -> bool:
    """
    Return True if any byte falls outside the text allow-list.
    
    Args:
        data: Byte sample to inspect
    """
    for b in data:
        if (b < PRINTABLE_MIN or b > PRINTABLE_MAX) and b not in TEXT_EXCEPTION_BYTES:
            return True
    return False


def looks_encrypted(sample: bytes, total_length: int) -> bool:
    """
    Decide whether data is likely AES-CBC ciphertext.
    
    Args:
        sample: Leading bytes of the data (at least one block if available)
        total_length: Full length of the data
        
    Returns:
        False for empty or non block-aligned data; otherwise the result
        of the allow-list test on the first 16 bytes
    """
    if total_length == 0:
        return False
    
    # CBC output is always padded to the block size
    if total_length % BLOCK_SIZE != 0:
        return False
    
    return is_data_encrypted(sample[:BLOCK_SIZE])


def is_stream_encrypted(stream: BinaryIO) -> bool:
    """
    Inspect a seekable binary stream without moving its position.
    
    Args:
        stream: Seekable stream opened in binary mode
    """
    restore_position = stream.tell()
    total_length = stream.seek(0, os.SEEK_END)
    
    stream.seek(0)
    sample = stream.read(BLOCK_SIZE)
    stream.seek(restore_position)
    
    result = looks_encrypted(sample, total_length)
    logger.debug("Stream of %d bytes looks %s", total_length,
                 "encrypted" if result else "plain")
    return result


def is_file_encrypted(path: str) -> bool:
    """
    Check whether a file looks encrypted.
    
    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, 'rb') as f:
        return is_stream_encrypted(f)
