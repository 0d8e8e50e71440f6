import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from shortlink_app.exceptions import (
    DuplicateCodeError,
    CodeGenerationExhaustedError,
    StorageError,
    ValidityOutOfRangeError,
)
from shortlink_app.schemas.url import ClickEvent, ShortenedURL, TableStatistics, URLStats
from shortlink_app.services.logging_service import LoggingService
from shortlink_app.services.short_code_strategies import ShortCodeStrategy, RandomShortCodeStrategy
from shortlink_app.storage.strategies import StorageStrategy
from shortlink_app.utils.validators import is_valid_url

_table_adapter = TypeAdapter(List[ShortenedURL])


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ClickOutcome(str, Enum):
    """Result of record_click. Only RECORDED is truthy."""
    RECORDED = "recorded"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    STORAGE_ERROR = "storage_error"

    def __bool__(self) -> bool:
        return self is ClickOutcome.RECORDED


class URLRegistry:
    """
    Owns the table of short link records.

    The table lives under a single storage key as a JSON array. Every
    mutation (create, record_click, cleanup_expired) reads the whole table,
    changes it and writes it back. Nothing else reads or writes that key.

    Note: read-modify-write is not atomic. Two processes mutating the
    table at the same time end up with last-writer-wins.
    """

    is_valid_url = staticmethod(is_valid_url)

    def __init__(
        self,
        storage: StorageStrategy,
        logger: LoggingService,
        base_url: str,
        storage_key: str = "shortened_urls",
        code_strategy: Optional[ShortCodeStrategy] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the registry with its dependencies.

        Args:
            storage: Key-value storage holding the table
            logger: Application event log
            base_url: Origin used to build short URLs
            storage_key: Key of the table in storage
            code_strategy: Generator for random short codes
                           (6 characters, 100 attempts if omitted)
            clock: Returns the current aware datetime
        """
        self.storage = storage
        self.logger = logger
        self.base_url = base_url.rstrip("/")
        self.storage_key = storage_key
        self.code_strategy = code_strategy or RandomShortCodeStrategy()
        self.clock = clock

    def _load(self) -> List[ShortenedURL]:
        stored = self.storage.get_item(self.storage_key)
        if not stored:
            return []
        return _table_adapter.validate_json(stored)

    def _save(self, urls: List[ShortenedURL]) -> None:
        self.storage.set_item(self.storage_key, _table_adapter.dump_json(urls).decode("utf-8"))

    def create(
        self,
        original_url: str,
        validity_minutes: int,
        custom_code: Optional[str] = None
    ) -> ShortenedURL:
        """Create and persist a new short link

        original_url and validity_minutes are validated by the caller; the
        registry only enforces short code uniqueness.

        Raises:
            DuplicateCodeError: custom_code is already in the table
            CodeGenerationExhaustedError: no free random code was found
            ValidityOutOfRangeError: the expiry does not fit in a datetime
            StorageError: the updated table could not be written
        """
        self.logger.info("URL shortening request", {
            "original_url": original_url,
            "validity_minutes": validity_minutes,
            "has_custom_code": bool(custom_code),
        })

        urls = self.get_all()
        taken = {url.short_code for url in urls}

        if custom_code:
            if custom_code in taken:
                self.logger.warning("Custom short code already exists", {"short_code": custom_code})
                raise DuplicateCodeError(custom_code)
            short_code = custom_code
        else:
            try:
                short_code = self.code_strategy.generate(lambda code: code in taken)
            except CodeGenerationExhaustedError as e:
                self.logger.error("Short code generation exhausted", {"attempts": e.attempts})
                raise

        created_at = self.clock()
        try:
            expires_at = created_at + timedelta(minutes=validity_minutes)
        except OverflowError:
            self.logger.error("Validity out of range", {"validity_minutes": validity_minutes})
            raise ValidityOutOfRangeError(validity_minutes)

        shortened = ShortenedURL(
            id=uuid.uuid4().hex,
            original_url=original_url,
            short_code=short_code,
            short_url=f"{self.base_url}/{short_code}",
            validity_minutes=validity_minutes,
            created_at=created_at,
            expires_at=expires_at,
        )

        urls.append(shortened)
        try:
            self._save(urls)
        except StorageError as e:
            self.logger.error("Failed to save shortened URL", {"short_code": short_code, "error": str(e)})
            raise

        self.logger.info("URL shortened successfully", {
            "short_code": short_code,
            "expires_at": shortened.expires_at.isoformat(),
        })
        return shortened

    def get_all(self) -> List[ShortenedURL]:
        """All records with dates rehydrated. Unreadable storage reads as empty."""
        try:
            return self._load()
        except (StorageError, ValidationError) as e:
            self.logger.error("Error loading URLs from storage", {"error": str(e)})
            return []

    def get_by_short_code(self, short_code: str) -> Optional[ShortenedURL]:
        return next((url for url in self.get_all() if url.short_code == short_code), None)

    def record_click(
        self,
        short_code: str,
        source: str = "direct",
        location: str = "unknown"
    ) -> ClickOutcome:
        """
        Append a click event and bump the counter.

        Never raises: missing, expired and unwritable cases come back as
        a falsy ClickOutcome and leave the stored record untouched.
        """
        self.logger.info("Click recorded", {"short_code": short_code, "source": source, "location": location})

        try:
            urls = self._load()
        except (StorageError, ValidationError) as e:
            self.logger.error("Error loading URLs from storage", {"error": str(e)})
            return ClickOutcome.STORAGE_ERROR

        url = next((url for url in urls if url.short_code == short_code), None)
        if url is None:
            self.logger.info("Short code not found", {"short_code": short_code})
            return ClickOutcome.NOT_FOUND

        now = self.clock()
        if url.is_expired(now):
            self.logger.info("URL has expired", {
                "short_code": short_code,
                "expires_at": url.expires_at.isoformat(),
            })
            return ClickOutcome.EXPIRED

        url.click_count += 1
        url.click_events.append(ClickEvent(timestamp=now, source=source, location=location))

        try:
            self._save(urls)
        except StorageError as e:
            self.logger.error("Failed to save click", {"short_code": short_code, "error": str(e)})
            return ClickOutcome.STORAGE_ERROR

        return ClickOutcome.RECORDED

    def cleanup_expired(self) -> int:
        """Purge records past their expiry. Returns how many were removed."""
        try:
            urls = self._load()
            now = self.clock()
            active = [url for url in urls if url.expires_at >= now]
            removed = len(urls) - len(active)
            if removed:
                self._save(active)
        except (StorageError, ValidationError) as e:
            self.logger.error("Expired URL cleanup failed", {"error": str(e)})
            return 0

        if removed:
            self.logger.info("Expired URLs cleaned up", {
                "total": len(urls),
                "active": len(active),
                "removed": removed,
            })
        return removed

    def get_url_stats(self, short_code: str) -> Optional[URLStats]:
        url = self.get_by_short_code(short_code)
        if url is None:
            return None

        last_accessed = url.click_events[-1].timestamp if url.click_events else None
        return URLStats(
            short_code=url.short_code,
            original_url=url.original_url,
            click_count=url.click_count,
            created_at=url.created_at,
            expires_at=url.expires_at,
            is_expired=url.is_expired(self.clock()),
            last_accessed=last_accessed,
            click_events=url.click_events,
        )

    def get_statistics(self) -> TableStatistics:
        urls = self.get_all()
        now = self.clock()
        expired = sum(1 for url in urls if url.is_expired(now))
        return TableStatistics(
            total_urls=len(urls),
            total_clicks=sum(url.click_count for url in urls),
            active_urls=len(urls) - expired,
            expired_urls=expired,
        )
