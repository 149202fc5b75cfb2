"""
Statistics Service

This service handles retrieving statistics for short URLs.
Separated from URL service so read-only reporting never counts a visit.
"""

from typing import List

from shortener.services.url_registry import StatsView, UrlRegistry


class StatsService:
    """Service for retrieving URL statistics."""

    def __init__(self, registry: UrlRegistry):
        """
        Initialize the stats service.

        Args:
            registry: Registry holding the URL mappings
        """
        self.registry = registry

    def get_stats(self, short_code: str) -> StatsView:
        """
        Get statistics for a single short URL.

        Returns:
            StatsView with short_code, original_url, created_at,
            visit_count and expiry_time

        Raises:
            ShortCodeNotFoundError: If the short code does not exist
            ShortCodeExpiredError: If the short code has expired
        """
        return self.registry.stats(short_code)

    def list_stats(self) -> List[StatsView]:
        """
        Get statistics for every short URL, expired ones included.

        Listing is administrative, so expiry does not hide records here.
        """
        return self.registry.list_all()
