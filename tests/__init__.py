# cryptlayer Test Suite
"""
Unit and integration tests for cryptlayer.

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
