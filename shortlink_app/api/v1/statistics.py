from fastapi import APIRouter, Depends
from shortlink_app.schemas.url import TableStatistics
from shortlink_app.services.url_registry import URLRegistry
from shortlink_app.dependencies import get_url_registry

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("", response_model=TableStatistics)
async def get_statistics(registry: URLRegistry = Depends(get_url_registry)):
    """Totals across every stored short URL"""
    return registry.get_statistics()
