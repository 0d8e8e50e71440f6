"""
Factory for creating key-value storage instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
from .strategies import StorageStrategy, SQLAlchemyStorage, RedisStorage, InMemoryStorage
from shortlink_app.config import settings


class StorageBackend(Enum):
    """Available storage backends"""
    SQLITE = "sqlite"
    REDIS = "redis"
    MEMORY = "memory"


class StorageFactory:
    """
    Simple factory for creating storage instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: StorageStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: StorageBackend) -> StorageStrategy:
        """
        Create or return cached storage instance.

        Args:
            backend: Type of storage backend (from enum)

        Returns:
            Singleton storage instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == StorageBackend.SQLITE:
            from shortlink_app.database.connection import Base, SessionLocal, engine

            # Make sure the storage_entries table exists
            Base.metadata.create_all(bind=engine)
            cls._instance = SQLAlchemyStorage(SessionLocal)
            print("✅ SQL storage initialized")

        elif backend == StorageBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )

                # Test connection immediately
                redis_client.ping()

                cls._instance = RedisStorage(redis_client, key_prefix=settings.redis_key_prefix)
                print("✅ Redis storage initialized")

            except redis.RedisError as e:
                print(f"⚠️  Redis connection failed: {e}")
                print("⚠️  Falling back to in-memory storage")
                cls._instance = InMemoryStorage(max_bytes=settings.storage_quota_bytes)
                print("✅ In-memory storage initialized (fallback)")

        elif backend == StorageBackend.MEMORY:
            cls._instance = InMemoryStorage(max_bytes=settings.storage_quota_bytes)
            print("✅ In-memory storage initialized")

        else:
            raise ValueError(f"Unknown storage backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
