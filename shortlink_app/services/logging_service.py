"""
Application event log.

Keeps a bounded buffer of structured entries in key-value storage,
mirrors every entry to the console and optionally forwards it to a
remote endpoint.
"""

import json
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from shortlink_app.exceptions import StorageError
from shortlink_app.schemas.log import LogEntry, LogLevel
from shortlink_app.services.remote_logger import RemoteLogSink
from shortlink_app.storage.strategies import StorageStrategy

console = logging.getLogger("shortlink_app.events")

CONSOLE_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_entries_adapter = TypeAdapter(List[LogEntry])


class LoggingService:
    """
    Structured event log with a bounded storage buffer.

    One instance is created per process (see dependencies.py) and passed
    to the services that log through it.
    """

    def __init__(
        self,
        storage: StorageStrategy,
        storage_key: str = "app_logs",
        max_logs: int = 1000,
        remote_sink: Optional[RemoteLogSink] = None,
    ):
        """
        Args:
            storage: Key-value storage holding the log buffer
            storage_key: Key of the log buffer
            max_logs: Number of newest entries kept in the buffer
            remote_sink: Optional remote endpoint that receives every entry
        """
        self.storage = storage
        self.storage_key = storage_key
        self.max_logs = max_logs
        self.remote_sink = remote_sink
        self.session_id = secrets.token_hex(8)
        self.log("Logging service initialized")

    def log(
        self,
        message: str,
        data: Optional[Dict[str, Any]] = None,
        level: LogLevel = LogLevel.INFO,
    ) -> None:
        """Record one entry. Never raises: an unknown level is recorded as info."""
        try:
            level = LogLevel(level)
        except ValueError:
            level = LogLevel.INFO
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            level=level,
            message=message,
            data=data,
            session_id=self.session_id,
        )

        if data:
            console.log(CONSOLE_LEVELS[level], "[%s] %s %s", level.value.upper(), message, data)
        else:
            console.log(CONSOLE_LEVELS[level], "[%s] %s", level.value.upper(), message)

        self._save(entry)

        if self.remote_sink is not None:
            self.remote_sink.dispatch(level, message)

    def _save(self, entry: LogEntry) -> None:
        try:
            logs = self.get_logs()
            logs.append(entry)
            # Keep only the newest max_logs entries
            if len(logs) > self.max_logs:
                logs = logs[-self.max_logs:]
            self.storage.set_item(self.storage_key, _entries_adapter.dump_json(logs).decode("utf-8"))
        except (StorageError, PydanticSerializationError) as e:
            console.error("Failed to save log entry: %s", e)

    def get_logs(self) -> List[LogEntry]:
        try:
            stored = self.storage.get_item(self.storage_key)
            if not stored:
                return []
            return _entries_adapter.validate_json(stored)
        except (StorageError, ValidationError) as e:
            console.error("Failed to load logs: %s", e)
            return []

    def get_logs_by_level(self, level: LogLevel) -> List[LogEntry]:
        level = LogLevel(level)
        return [entry for entry in self.get_logs() if entry.level == level]

    def get_logs_by_session(self, session_id: Optional[str] = None) -> List[LogEntry]:
        target = session_id or self.session_id
        return [entry for entry in self.get_logs() if entry.session_id == target]

    def clear_logs(self) -> None:
        try:
            self.storage.remove_item(self.storage_key)
        except StorageError as e:
            console.error("Failed to clear logs: %s", e)
        self.log("Logs cleared")

    def export_logs(self) -> str:
        logs = [entry.model_dump(mode="json") for entry in self.get_logs()]
        return json.dumps(logs, indent=2)

    # Convenience methods
    def info(self, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.log(message, data, LogLevel.INFO)

    def warning(self, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.log(message, data, LogLevel.WARNING)

    def error(self, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.log(message, data, LogLevel.ERROR)
