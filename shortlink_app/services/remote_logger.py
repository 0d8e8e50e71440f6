"""
Remote log sink.

Forwards log messages to the evaluation logging endpoint with bearer
token auth. Delivery is fire-and-forget: failures are reported on the
console and never reach the caller.
"""

import asyncio
import logging
from typing import Optional, Set

import httpx

from shortlink_app.schemas.log import LogLevel, RemoteLogLevel, RemoteLogPayload

logger = logging.getLogger(__name__)

LEVEL_MAP = {
    LogLevel.INFO: RemoteLogLevel.INFO,
    LogLevel.WARNING: RemoteLogLevel.WARN,
    LogLevel.ERROR: RemoteLogLevel.ERROR,
}


class RemoteLogSink:
    """
    POSTs {stack, level, package, message} to a remote endpoint.

    Usage:
        sink = RemoteLogSink(url, access_token="...")
        await sink.send(LogLevel.INFO, "URL shortened")   # awaited
        sink.dispatch(LogLevel.INFO, "URL shortened")     # fire-and-forget
    """

    def __init__(
        self,
        endpoint: str,
        access_token: Optional[str] = None,
        stack: str = "backend",
        package: str = "service",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            endpoint: Full URL of the logging endpoint
            access_token: Bearer token; without one nothing is sent
            stack: Stack tag sent with every message
            package: Package tag sent with every message
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.endpoint = endpoint
        self.access_token = access_token
        self.stack = stack
        self.package = package
        self.timeout = timeout
        self.transport = transport
        self._pending: Set[asyncio.Task] = set()

    def build_payload(self, level: LogLevel, message: str) -> RemoteLogPayload:
        return RemoteLogPayload(
            stack=self.stack,
            level=LEVEL_MAP.get(LogLevel(level), RemoteLogLevel.INFO),
            package=self.package,
            message=message,
        )

    async def send(self, level: LogLevel, message: str) -> bool:
        """
        Send one message and wait for the response.

        Returns:
            True if the endpoint accepted the message, False otherwise
        """
        if not self.access_token:
            logger.warning("No access token configured, remote log skipped")
            return False

        payload = self.build_payload(level, message)
        headers = {"Authorization": f"Bearer {self.access_token}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=payload.model_dump(mode="json"),
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error("Remote logging failed: %s", e)
            return False

        if response.is_error:
            logger.error("Remote logging failed: HTTP %s", response.status_code)
            return False

        logger.debug("Remote log sent: %s", response.text)
        return True

    def dispatch(self, level: LogLevel, message: str) -> None:
        """
        Schedule send() on the running event loop without waiting for it.

        Outside of an event loop (scripts, sync tests) the message is
        dropped: the local buffer and console already have it.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, remote log skipped")
            return

        task = loop.create_task(self.send(level, message))
        # Keep a reference until done so the task is not garbage collected
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
