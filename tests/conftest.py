"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from diskwatch.dependencies import reset_singletons

# Keep test output clean
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_singletons():
    """Reset singletons before every test."""
    reset_singletons()
    yield
    reset_singletons()
