"""
Input Validators

This module provides validation functions for user inputs.

- URLs must use http:// or https://; no other canonicalization is applied,
  so the stored URL is exactly what the client sent
- Length limits prevent DoS attacks
- Custom short codes are restricted to a URL-safe character set
- Paths answered by fixed routes are never handed out as short codes
"""

import re

URL_PATTERN = re.compile(r"(http|https)://.*")
SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,32}")

MAX_URL_LENGTH = 2048

# GET /{code} can never reach these, the fixed routes match first.
RESERVED_SHORT_CODES = frozenset({"health", "docs", "redoc", "openapi.json"})


def is_valid_url(url: str) -> bool:
    """
    Check that a URL is non-blank and starts with an http or https scheme.

    Args:
        url: The URL string to validate

    Returns:
        True if the whole string matches ``(http|https)://.*``
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False
    return URL_PATTERN.fullmatch(url) is not None


def validate_url_length(url: str, max_length: int = MAX_URL_LENGTH) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return len(url) <= max_length


def is_valid_short_code(short_code: str) -> bool:
    """Return True when a custom short code is 1-32 chars of [A-Za-z0-9_-]."""
    if not isinstance(short_code, str):
        return False
    return SHORT_CODE_PATTERN.fullmatch(short_code) is not None
