# Number Signing Module
"""
Generalized Luhn check digits (bases 2, 8, 10, 16) - luhn.py
"""

from .luhn import check_number, compute_check_digit

__all__ = ['check_number', 'compute_check_digit']
