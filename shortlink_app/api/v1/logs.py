from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from shortlink_app.schemas.log import LogEntry, LogLevel
from shortlink_app.services.logging_service import LoggingService
from shortlink_app.dependencies import get_logging_service

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=List[LogEntry])
async def get_logs(
    level: Optional[LogLevel] = None,
    session_id: Optional[str] = None,
    logger: LoggingService = Depends(get_logging_service)
):
    """Read the log buffer, optionally filtered by level and session"""
    logs = logger.get_logs_by_session(session_id) if session_id else logger.get_logs()
    if level is not None:
        logs = [entry for entry in logs if entry.level == level]
    return logs


@router.get("/export")
async def export_logs(logger: LoggingService = Depends(get_logging_service)):
    """Download the log buffer as pretty-printed JSON"""
    return Response(
        content=logger.export_logs(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="logs.json"'}
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_logs(logger: LoggingService = Depends(get_logging_service)):
    """Empty the log buffer"""
    logger.clear_logs()
