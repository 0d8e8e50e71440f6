"""
Data models for log entries and remote log payloads.
"""

from enum import Enum
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Levels accepted by the local log buffer"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class RemoteLogLevel(str, Enum):
    """Levels understood by the remote logging endpoint"""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class LogEntry(BaseModel):
    """
    One structured entry in the bounded log buffer.

    data holds the structured context of the event (short code, counts,
    error messages, ...).
    """

    timestamp: datetime
    level: LogLevel = LogLevel.INFO
    message: str
    data: Optional[Dict[str, Any]] = None
    session_id: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "timestamp": "2025-10-29T10:30:00+00:00",
                "level": "info",
                "message": "URL shortened successfully",
                "data": {"short_code": "aZ3k9Q", "expires_at": "2025-10-29T11:00:00+00:00"},
                "session_id": "5f1c2a9e0b7d4c3a"
            }
        }
    )


class RemoteLogPayload(BaseModel):
    """Body POSTed to the remote logging endpoint"""

    stack: str
    level: RemoteLogLevel
    package: str = Field(..., description="Component that produced the message")
    message: str
