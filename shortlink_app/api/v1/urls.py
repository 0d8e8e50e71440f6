from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from shortlink_app.exceptions import (
    DuplicateCodeError,
    CodeGenerationExhaustedError,
    StorageError,
    ValidityOutOfRangeError,
)
from shortlink_app.schemas.url import (
    URLEntry,
    URLBatchCreate,
    BatchItemResult,
    BatchCreateResponse,
    ShortenedURL,
    URLStats,
    CleanupResult,
)
from shortlink_app.services.url_registry import URLRegistry
from shortlink_app.dependencies import get_url_registry

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=ShortenedURL, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    entry: URLEntry,
    registry: URLRegistry = Depends(get_url_registry)
):
    """Create a single short URL"""
    try:
        return registry.create(entry.original_url, entry.validity_minutes, entry.custom_code)
    except DuplicateCodeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidityOutOfRangeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except CodeGenerationExhaustedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is unavailable"
        )


@router.post("/batch", response_model=BatchCreateResponse, status_code=status.HTTP_200_OK)
async def create_short_urls(
    batch: URLBatchCreate,
    registry: URLRegistry = Depends(get_url_registry)
):
    """
    Shorten up to five URLs at once.

    Each entry succeeds or fails on its own: a taken custom code or an out-of-range
    expiry only aborts that entry.
    """
    results = []
    for index, entry in enumerate(batch.entries):
        try:
            url = registry.create(entry.original_url, entry.validity_minutes, entry.custom_code)
            results.append(BatchItemResult(index=index, url=url))
        except (DuplicateCodeError, CodeGenerationExhaustedError, ValidityOutOfRangeError) as e:
            results.append(BatchItemResult(index=index, error=str(e)))
        except StorageError:
            results.append(BatchItemResult(index=index, error="Storage is unavailable"))

    registry.logger.info("Batch shortening finished", {
        "requested": len(batch.entries),
        "created": sum(1 for result in results if result.url is not None),
    })
    return BatchCreateResponse(results=results)


@router.get("/", response_model=List[ShortenedURL])
async def list_urls(registry: URLRegistry = Depends(get_url_registry)):
    """List every stored short URL"""
    return registry.get_all()


@router.post("/cleanup", response_model=CleanupResult)
async def cleanup_expired_urls(registry: URLRegistry = Depends(get_url_registry)):
    """Maintenance: purge expired short URLs"""
    return CleanupResult(removed=registry.cleanup_expired())


@router.get("/{short_code}", response_model=ShortenedURL)
async def get_url_info(
    short_code: str,
    registry: URLRegistry = Depends(get_url_registry)
):
    """Get information about a short URL"""
    url = registry.get_by_short_code(short_code)
    if not url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return url


@router.get("/{short_code}/stats", response_model=URLStats)
async def get_url_stats(
    short_code: str,
    registry: URLRegistry = Depends(get_url_registry)
):
    """Get click statistics for a short URL"""
    stats = registry.get_url_stats(short_code)
    if not stats:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return stats
