"""
URL Registry

In-memory store of shortened URLs. The registry owns two indexes:

- primary: short code -> UrlRecord
- reverse: original URL -> short code (used to deduplicate create requests)

Design Decisions:
- A single lock guards both indexes, so a short code never appears in the
  reverse index without its record in the primary index, and two concurrent
  creates of the same URL produce one record
- Callers only ever receive frozen snapshots (CreationResult, StatsView);
  the mutable UrlRecord never leaves the registry
- Expiry only gates resolve() and stats(); expired records stay listed
- URL equality is exact string comparison, no canonicalization
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional

from shortener.core.clock import Clock
from shortener.core.exceptions import (
    ShortCodeExpiredError,
    ShortCodeInUseError,
    ShortCodeNotFoundError,
)
from shortener.services.short_code_generator import DEFAULT_CODE_LENGTH, generate_short_code

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_HOURS = 24


@dataclass
class UrlRecord:
    """
    A shortened URL.

    Only visit_count changes after creation.
    """
    short_code: str
    original_url: str
    created_at: datetime
    expiry_time: datetime
    visit_count: int = 0

    def is_expired(self, now: datetime) -> bool:
        return self.expiry_time < now


@dataclass(frozen=True)
class CreationResult:
    """Public view returned by create()."""
    short_url: str
    short_code: str
    original_url: str
    created_at: datetime


@dataclass(frozen=True)
class StatsView:
    """Point-in-time statistics for one record."""
    short_code: str
    original_url: str
    created_at: datetime
    visit_count: int
    expiry_time: datetime


class UrlRegistry:
    """
    Concurrency-safe registry of short URLs.

    Shared by every request handler thread; all access to the indexes
    happens while holding ``self._lock``.
    """

    def __init__(
        self,
        base_url: str,
        code_length: int = DEFAULT_CODE_LENGTH,
        expiration_hours: int = DEFAULT_EXPIRATION_HOURS,
        clock: Optional[Clock] = None,
        code_generator: Callable[[int], str] = generate_short_code,
        reserved_codes: Iterable[str] = ()
    ):
        """
        Initialize an empty registry.

        Args:
            base_url: Prefix prepended to a short code to build the short URL
            code_length: Length of generated codes (default: 6)
            expiration_hours: Lifetime of a record for reads (default: 24)
            clock: Time source, defaults to the system wall clock
            code_generator: Function returning a random code of a given length
            reserved_codes: Codes that are never handed out because another
                route already answers at that path
        """
        if expiration_hours < 1:
            raise ValueError("expiration_hours must be positive")

        self.base_url = base_url
        self.code_length = code_length
        self.expiration = timedelta(hours=expiration_hours)
        self.clock = clock or Clock()
        self.code_generator = code_generator
        self.reserved_codes: FrozenSet[str] = frozenset(reserved_codes)

        self._records: Dict[str, UrlRecord] = {}
        self._codes_by_url: Dict[str, str] = {}
        self._lock = threading.Lock()

    def _creation_result(self, record: UrlRecord) -> CreationResult:
        return CreationResult(
            short_url=f"{self.base_url}{record.short_code}",
            short_code=record.short_code,
            original_url=record.original_url,
            created_at=record.created_at,
        )

    @staticmethod
    def _stats_view(record: UrlRecord) -> StatsView:
        return StatsView(
            short_code=record.short_code,
            original_url=record.original_url,
            created_at=record.created_at,
            visit_count=record.visit_count,
            expiry_time=record.expiry_time,
        )

    def _get_live_record(self, short_code: str, now: datetime) -> UrlRecord:
        # Caller must hold self._lock.
        record = self._records.get(short_code)
        if record is None:
            raise ShortCodeNotFoundError(short_code)
        if record.is_expired(now):
            logger.info(f"Short code '{short_code}' requested after expiry")
            raise ShortCodeExpiredError(short_code)
        return record

    def create(
        self,
        original_url: str,
        requested_short_code: Optional[str] = None,
        code_validator: Optional[Callable[[str], None]] = None
    ) -> CreationResult:
        """
        Shorten a URL, or return the existing mapping if it was shortened before.

        Args:
            original_url: Validated absolute http(s) URL
            requested_short_code: Optional custom code. Ignored when the URL
                is already registered.
            code_validator: Called with the requested code only when it is
                about to be used; it raises to reject the code.

        Returns:
            CreationResult for the new or existing record

        Raises:
            ShortCodeInUseError: If the chosen code is already mapped. Neither
                index is modified in that case.
                Reserved codes count as in use.
        """
        with self._lock:
            existing_code = self._codes_by_url.get(original_url)
            if existing_code is not None:
                return self._creation_result(self._records[existing_code])

            if requested_short_code is not None:
                if code_validator is not None:
                    code_validator(requested_short_code)
                short_code = requested_short_code
            else:
                short_code = self.code_generator(self.code_length)

            if short_code in self._records or short_code in self.reserved_codes:
                logger.warning(f"Short code '{short_code}' already in use")
                raise ShortCodeInUseError(short_code)

            now = self.clock.now()
            record = UrlRecord(
                short_code=short_code,
                original_url=original_url,
                created_at=now,
                expiry_time=now + self.expiration,
            )
            self._records[short_code] = record
            self._codes_by_url[original_url] = short_code

        logger.info(f"Created short code '{short_code}' for {original_url}")
        return self._creation_result(record)

    def resolve(self, short_code: str) -> str:
        """
        Return the original URL for a short code and count the visit.

        Raises:
            ShortCodeNotFoundError: If the code is unknown
            ShortCodeExpiredError: If the record's expiry time has passed
        """
        with self._lock:
            record = self._get_live_record(short_code, self.clock.now())
            record.visit_count += 1
            return record.original_url

    def stats(self, short_code: str) -> StatsView:
        """
        Return statistics for a short code without counting a visit.

        Raises:
            ShortCodeNotFoundError: If the code is unknown
            ShortCodeExpiredError: If the record's expiry time has passed
        """
        with self._lock:
            record = self._get_live_record(short_code, self.clock.now())
            return self._stats_view(record)

    def list_all(self) -> List[StatsView]:
        """Snapshot of every record, expired ones included."""
        with self._lock:
            return [self._stats_view(record) for record in self._records.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
