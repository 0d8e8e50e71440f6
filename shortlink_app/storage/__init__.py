"""
Key-value storage module for the short link service.
Implements Strategy Pattern for flexible storage backends.
"""

from .strategies import StorageStrategy, SQLAlchemyStorage, RedisStorage, InMemoryStorage
from .factory import StorageFactory, StorageBackend

__all__ = [
    "StorageStrategy",
    "SQLAlchemyStorage",
    "RedisStorage",
    "InMemoryStorage",
    "StorageFactory",
    "StorageBackend",
]
