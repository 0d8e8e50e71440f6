"""
Redirect resolution for short codes.

Flow:
loading -> redirecting  (click recorded, destination revealed after a delay)
        -> not_found    (no such short code)
        -> expired      (past expires_at, click not recorded)
        -> error        (click could not be recorded)
"""

import asyncio
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from shortlink_app.services.logging_service import LoggingService
from shortlink_app.services.url_registry import ClickOutcome, URLRegistry

NOT_FOUND_MESSAGE = "Short URL not found"
EXPIRED_MESSAGE = "This short URL has expired"
CLICK_FAILED_MESSAGE = "Failed to process redirect"
UNEXPECTED_MESSAGE = "An error occurred while processing the redirect"


class RedirectState(str, Enum):
    LOADING = "loading"
    REDIRECTING = "redirecting"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    ERROR = "error"


class RedirectResult(BaseModel):
    state: RedirectState
    short_code: str
    original_url: Optional[str] = None
    message: Optional[str] = None


class RedirectResolver:
    """
    Gates and instruments redirects.

    Looks the code up in the registry, checks expiry, records the click
    and hands back the destination. The destination itself is never
    changed.
    """

    def __init__(
        self,
        registry: URLRegistry,
        logger: LoggingService,
        redirect_delay: float = 0.5
    ):
        """
        Args:
            registry: Registry owning the short link table
            logger: Application event log
            redirect_delay: Seconds to wait before revealing the destination
        """
        self.registry = registry
        self.logger = logger
        self.redirect_delay = redirect_delay

    async def resolve(
        self,
        short_code: str,
        source: str = "direct",
        location: str = "web"
    ) -> RedirectResult:
        self.logger.info("Redirect request received", {"short_code": short_code})

        try:
            return await self._resolve(short_code, source, location)
        except Exception as e:
            # Any failure ends on the error page instead of a crash
            self.logger.error("Redirect handler error", {"short_code": short_code, "error": str(e)})
            return RedirectResult(
                state=RedirectState.ERROR,
                short_code=short_code,
                message=UNEXPECTED_MESSAGE,
            )

    async def _resolve(self, short_code: str, source: str, location: str) -> RedirectResult:
        url = self.registry.get_by_short_code(short_code)
        if url is None:
            self.logger.warning("Short code not found", {"short_code": short_code})
            return RedirectResult(
                state=RedirectState.NOT_FOUND,
                short_code=short_code,
                message=NOT_FOUND_MESSAGE,
            )

        if url.is_expired(self.registry.clock()):
            self.logger.warning("URL has expired", {
                "short_code": short_code,
                "expires_at": url.expires_at.isoformat(),
            })
            return RedirectResult(
                state=RedirectState.EXPIRED,
                short_code=short_code,
                message=EXPIRED_MESSAGE,
            )

        outcome = self.registry.record_click(short_code, source, location)

        if outcome is ClickOutcome.EXPIRED:
            # Expired between the lookup and the click
            return RedirectResult(
                state=RedirectState.EXPIRED,
                short_code=short_code,
                message=EXPIRED_MESSAGE,
            )

        if not outcome:
            self.logger.error("Failed to record click", {"short_code": short_code, "outcome": outcome.value})
            return RedirectResult(
                state=RedirectState.ERROR,
                short_code=short_code,
                message=CLICK_FAILED_MESSAGE,
            )

        self.logger.info("Click recorded and redirecting", {
            "short_code": short_code,
            "original_url": url.original_url,
        })

        # Simulated latency; not cancellable once started
        if self.redirect_delay > 0:
            await asyncio.sleep(self.redirect_delay)

        return RedirectResult(
            state=RedirectState.REDIRECTING,
            short_code=short_code,
            original_url=url.original_url,
        )
