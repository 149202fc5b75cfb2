"""
URL Shortening Service

This service handles the business logic in front of the registry for
creating short URLs:
- Validating the URL format and length
- Validating custom short codes
- Retrying with a fresh random code when a generated code collides

Design Decisions:
- Validation lives here. The custom code format is checked through the
  registry, only once it is known the code will be used: a URL that is
  already registered returns its mapping whatever code was requested
- Only generated codes are retried; a taken custom code is reported to the
  caller straight away
- The registry itself never retries, so retries are bounded by max_attempts
"""

import logging
from typing import Optional

from shortener.core.exceptions import (
    InvalidShortCodeError,
    InvalidURLError,
    ShortCodeInUseError,
    URLTooLongError,
)
from shortener.core.validators import (
    MAX_URL_LENGTH,
    is_valid_short_code,
    is_valid_url,
    validate_url_length,
)
from shortener.services.url_registry import CreationResult, UrlRegistry

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Creates short URLs on top of a UrlRegistry.

    Separated from the API layer for testability and maintainability.
    """

    def __init__(
        self,
        registry: UrlRegistry,
        max_url_length: int = MAX_URL_LENGTH,
        max_attempts: int = 3
    ):
        """
        Initialize the URL shortening service.

        Args:
            registry: Registry holding the URL mappings
            max_url_length: Longest accepted URL (default: 2048)
            max_attempts: Total attempts with generated codes before a
                collision is reported (default: 3)
        """
        self.registry = registry
        self.max_url_length = max_url_length
        self.max_attempts = max(1, max_attempts)

    def validate(self, url: str) -> None:
        """
        Validate the URL of a shorten request.

        Raises:
            InvalidURLError: If the URL is blank or not http(s)://
            URLTooLongError: If the URL is longer than max_url_length
        """
        if not is_valid_url(url):
            raise InvalidURLError(
                url,
                reason="Invalid URL format. URL must start with http:// or https://"
            )
        if not validate_url_length(url, self.max_url_length):
            raise URLTooLongError(len(url), self.max_url_length)

    @staticmethod
    def validate_short_code(short_code: str) -> None:
        if not is_valid_short_code(short_code):
            raise InvalidShortCodeError(short_code)

    def create_short_url(self, url: str, short_code: Optional[str] = None) -> CreationResult:
        """
        Create a new short URL or return the existing one if URL was already shortened.

        Args:
            url: The long URL to shorten
            short_code: Optional custom short code

        Returns:
            CreationResult with short_url, short_code, original_url and created_at

        Raises:
            InvalidURLError: If URL format is invalid
            URLTooLongError: If URL is too long
            InvalidShortCodeError: If the custom short code is malformed and
                the URL is not registered yet
            ShortCodeInUseError: If the custom code is taken, or every
                generated code collided
        """
        self.validate(url)

        if short_code is not None:
            return self.registry.create(
                url, short_code, code_validator=self.validate_short_code
            )

        for attempt in range(1, self.max_attempts + 1):
            try:
                return self.registry.create(url)
            except ShortCodeInUseError:
                if attempt == self.max_attempts:
                    logger.error(
                        f"Generated short code collided {attempt} times for {url}"
                    )
                    raise
                logger.info(f"Generated short code collided, retrying ({attempt}/{self.max_attempts})")
