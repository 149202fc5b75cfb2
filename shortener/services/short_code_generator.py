"""
Short Code Generator

Produces random short codes from the 62-character alphanumeric alphabet
using the ``secrets`` module (cryptographically strong randomness), so codes
cannot be predicted from previously issued ones.

Collisions are not checked here; the registry rejects a code that is
already in use.
"""

import secrets
import string

BASE62_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_CODE_LENGTH = 6


def generate_short_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """
    Generate a random base62 short code.

    Args:
        length: Number of characters (default: 6)

    Returns:
        A string of ``length`` characters drawn uniformly from [a-zA-Z0-9]

    Example:
        generate_short_code() -> "aZ3k9Q"
    """
    if length < 1:
        raise ValueError("Short code length must be at least 1")
    return "".join(secrets.choice(BASE62_CHARS) for _ in range(length))
