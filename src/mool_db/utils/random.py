"""Random value helpers for secrets and test data."""

import math
import secrets

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-._~()'!*:@,;0123456789"


def string_generator(length: int) -> str:
    """
    Generate a random string of URL-safe characters.

    Args:
        length: Number of characters

    Returns:
        Random string (empty for non-positive lengths)
    """
    return "".join(secrets.choice(ALPHABET) for _ in range(max(length, 0)))


def number_generator(minimum: float, maximum: float) -> int:
    """Random integer in ``[ceil(minimum), floor(maximum))``."""
    low = math.ceil(minimum)
    high = math.floor(maximum)
    if high <= low:
        return low
    return low + secrets.randbelow(high - low)
