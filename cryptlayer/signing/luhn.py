"""
Luhn Check Digit Module

The Luhn algorithm generalized to bases 2, 8, 10 and 16.

Digits are processed from the right. Every second digit is doubled, and a
doubled value above (modulus - 1) has (modulus - 1) subtracted, which is
the "subtract 9" rule of base 10. A valid number's sum is divisible by the
modulus.

check_number() doubles ODD positions of the reversed input because its
check digit sits at position 0. compute_check_digit() doubles EVEN
positions because the digit it computes has not been appended yet.
"""

import re
from typing import List

from ..exceptions import InvalidArgumentError


NUMBER_FORMATS = {
    2: re.compile(r'^[0-1]+$'),
    8: re.compile(r'^[0-7]+$'),
    10: re.compile(r'^[0-9]+$'),
    16: re.compile(r'^[0-9a-fA-F]+$'),
}


def _reversed_digits(number: str, modulus: int) -> List[int]:
    """Validate input and return its digit values, rightmost first."""
    if not number:
        raise InvalidArgumentError("Number cannot be empty")
    number_format = NUMBER_FORMATS.get(modulus)
    if number_format is None:
        raise InvalidArgumentError(
            f"Modulus must be one of {sorted(NUMBER_FORMATS)}, got {modulus}"
        )
    if not number_format.fullmatch(number):
        raise InvalidArgumentError("Number format does not match modulus")
    
    return [int(c, modulus) for c in reversed(number)]


def _luhn_sum(digits: List[int], modulus: int, double_parity: int) -> int:
    total = 0
    for i, d in enumerate(digits):
        if i % 2 == double_parity:
            d *= 2
        if d > modulus - 1:
            d -= modulus - 1
        total += d
    return total


def check_number(number: str, modulus: int = 10) -> bool:
    """
    Validate a number whose last digit is a Luhn check digit.
    
    Args:
        number: Digits in the given base, check digit last
        modulus: 2, 8, 10 or 16
        
    Raises:
        InvalidArgumentError: Unsupported modulus or bad characters
        
    Example:
        >>> check_number("4123456789012349")
        True
    """
    digits = _reversed_digits(number, modulus)
    return _luhn_sum(digits, modulus, double_parity=1) % modulus == 0


def compute_check_digit(number: str, modulus: int = 10) -> str:
    """
    Compute the Luhn check digit to append to a number.
    
    Returns:
        A single uppercase hex character
        
    Example:
        >>> compute_check_digit("412345678901234")
        '9'
    """
    digits = _reversed_digits(number, modulus)
    total = _luhn_sum(digits, modulus, double_parity=0)
    return format((modulus - total % modulus) % modulus, 'X')
