"""
FastAPI dependencies for dependency injection.

This module builds the single storage, logging, registry and resolver
instances for the process and hands them to routes.

Pattern: Dependency Injection
- Services get their collaborators through their constructors
- Easy to test (override with app.dependency_overrides)
- Flexible (swap storage backends via config)
"""

from functools import lru_cache

from fastapi import Depends

from shortlink_app.config import settings
from shortlink_app.services.logging_service import LoggingService
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.services.remote_logger import RemoteLogSink
from shortlink_app.services.short_code_strategies import RandomShortCodeStrategy
from shortlink_app.services.url_registry import URLRegistry
from shortlink_app.storage.factory import StorageFactory, StorageBackend
from shortlink_app.storage.strategies import StorageStrategy


@lru_cache()
def get_storage() -> StorageStrategy:
    """
    Get storage instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = StorageBackend(settings.storage_backend)
    return StorageFactory.create(backend)


@lru_cache()
def get_remote_sink() -> RemoteLogSink:
    return RemoteLogSink(
        endpoint=settings.remote_log_url,
        access_token=settings.remote_log_token,
        stack=settings.remote_log_stack,
        package=settings.remote_log_package,
        timeout=settings.remote_log_timeout,
    )


@lru_cache()
def get_logging_service() -> LoggingService:
    """Get the application event log (singleton)"""
    return LoggingService(
        storage=get_storage(),
        storage_key=settings.logs_storage_key,
        max_logs=settings.max_logs,
        remote_sink=get_remote_sink() if settings.remote_log_enabled else None,
    )


@lru_cache()
def get_url_registry() -> URLRegistry:
    """Get the short link registry (singleton)"""
    return URLRegistry(
        storage=get_storage(),
        logger=get_logging_service(),
        base_url=settings.base_url,
        storage_key=settings.urls_storage_key,
        code_strategy=RandomShortCodeStrategy(
            length=settings.short_code_length,
            max_attempts=settings.max_code_attempts,
        ),
    )


def get_redirect_resolver(
    registry: URLRegistry = Depends(get_url_registry),
    logger: LoggingService = Depends(get_logging_service),
) -> RedirectResolver:
    """
    Get RedirectResolver with its dependencies injected.

    Built per request on top of the registry and logger singletons, so
    overriding either of them in tests also affects the resolver.
    """
    return RedirectResolver(
        registry=registry,
        logger=logger,
        redirect_delay=settings.redirect_delay_ms / 1000,
    )
