"""
Utility functions for request signing

Nonce and timestamp sources plus the range checks applied to them before
they go on the wire.
"""

import time
import secrets

from .types import NONCE_MIN, NONCE_MAX


def generate_nonce() -> int:
    """
    Generate a random nonce for replay protection.

    Returns:
        int: Uniformly chosen integer in [0, 10000]
    """
    return NONCE_MIN + secrets.randbelow(NONCE_MAX - NONCE_MIN + 1)


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def validate_nonce(nonce: int) -> bool:
    """
    Validate that a nonce is an integer within the server's range.

    Args:
        nonce: Nonce value to validate

    Returns:
        bool: True if nonce is valid
    """
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        return False

    return NONCE_MIN <= nonce <= NONCE_MAX


def validate_timestamp(timestamp: int) -> bool:
    """
    Validate timestamp (should be a non-negative Unix timestamp in seconds).
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        return False

    return timestamp >= 0
