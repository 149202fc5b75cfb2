"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Every exception carries an ErrorCode so callers can tell failures apart
even when several of them share an HTTP status (an expired code and an
unknown code both surface as 404).
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error taxonomy shared by the registry, the services and the API."""
    INVALID_URL = "INVALID_URL"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CODE_IN_USE = "CODE_IN_USE"
    NOT_FOUND = "NOT_FOUND"
    EXPIRED = "EXPIRED"
    RATE_LIMITED = "RATE_LIMITED"


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""

    error_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    error_code = ErrorCode.INVALID_URL

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(reason)


class URLTooLongError(URLShortenerException):
    """Raised when a URL exceeds the configured maximum length."""

    error_code = ErrorCode.PAYLOAD_TOO_LARGE

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(f"URL length {length} exceeds maximum of {max_length} characters")


class InvalidShortCodeError(URLShortenerException):
    """Raised when a requested custom short code has an invalid format."""

    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(
            "Short code must be 1-32 characters of letters, digits, '-' or '_'"
        )


class ShortCodeInUseError(URLShortenerException):
    """Raised when a short code is already mapped to a URL."""

    error_code = ErrorCode.CODE_IN_USE

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__("Short code already in use")


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code is not found in the registry."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, short_code: str, message: str = "Short code not found"):
        self.short_code = short_code
        super().__init__(message)


class ShortCodeExpiredError(ShortCodeNotFoundError):
    """Raised when a short code exists but its expiry time has passed."""

    error_code = ErrorCode.EXPIRED

    def __init__(self, short_code: str, message: str = "This short URL has expired"):
        super().__init__(short_code, message)
