"""
Redirect Service

Looks up the destination of a short code for the redirect endpoint.
Every successful lookup counts as a visit.
"""

from shortener.services.url_registry import UrlRegistry


class RedirectService:
    """Service for resolving short codes to their original URLs."""

    def __init__(self, registry: UrlRegistry):
        self.registry = registry

    def get_redirect_url(self, short_code: str) -> str:
        """
        Get the original URL for a short code and record the visit.

        Args:
            short_code: The short code to look up

        Returns:
            The original URL

        Raises:
            ShortCodeNotFoundError: If the short code does not exist
            ShortCodeExpiredError: If the short code has expired
        """
        return self.registry.resolve(short_code)
