"""
Key-value storage strategies using Strategy Pattern.

Storage mirrors the browser's localStorage API: string values under string
keys, whole-value reads and writes, no transactions across keys.

Backends:
- SQLAlchemy: SQLite file (default, survives restarts)
- Redis: shared between processes
- In-Memory: development and testing
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import StorageError, StorageQuotaExceededError
from shortlink_app.models.storage_entry import StorageEntry


class StorageStrategy(ABC):
    """
    Abstract base class for key-value storage strategies.

    Every mutation writes the complete value for a key, so two writers
    racing on the same key end up with last-writer-wins. Implementations
    raise StorageError for any backend failure.

    Similar to: Web Storage API (getItem / setItem / removeItem / clear)
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Get the value stored under key.

        Args:
            key: Storage key

        Returns:
            Stored string or None if the key is not set

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key (no-op if missing)"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key owned by this storage"""
        pass


class SQLAlchemyStorage(StorageStrategy):
    """
    SQL implementation backed by the storage_entries table.

    Pros:
    - Zero configuration with SQLite
    - Survives restarts

    Cons:
    - Not shared between hosts (with SQLite)

    A fresh session is opened per call, the same way a short-lived
    worker would use SessionLocal.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """
        Initialize SQL storage.

        Args:
            session_factory: Callable returning a new SQLAlchemy session
        """
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        session = self.session_factory()
        try:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        finally:
            session.close()

    def set_item(self, key: str, value: str) -> None:
        session = self.session_factory()
        try:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to write '{key}': {e}") from e
        finally:
            session.close()

    def remove_item(self, key: str) -> None:
        session = self.session_factory()
        try:
            session.query(StorageEntry).filter(StorageEntry.key == key).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to remove '{key}': {e}") from e
        finally:
            session.close()

    def clear(self) -> None:
        session = self.session_factory()
        try:
            session.query(StorageEntry).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to clear storage: {e}") from e
        finally:
            session.close()


class RedisStorage(StorageStrategy):
    """
    Redis implementation using plain GET / SET / DEL.

    Keys are namespaced with a prefix so clear() only touches
    this application's entries.
    """

    def __init__(self, redis_client, key_prefix: str = "shortlink:"):
        """
        Initialize Redis storage.

        Args:
            redis_client: Redis client instance (redis.Redis)
            key_prefix: Prefix added to every key
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(self._key(key))
        except redis.RedisError as e:
            raise StorageError(f"Redis get error for '{key}': {e}") from e
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def set_item(self, key: str, value: str) -> None:
        try:
            self.redis.set(self._key(key), value)
        except redis.RedisError as e:
            raise StorageError(f"Redis set error for '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self.redis.delete(self._key(key))
        except redis.RedisError as e:
            raise StorageError(f"Redis delete error for '{key}': {e}") from e

    def clear(self) -> None:
        try:
            keys = list(self.redis.scan_iter(match=f"{self.key_prefix}*"))
            if keys:
                self.redis.delete(*keys)
        except redis.RedisError as e:
            raise StorageError(f"Redis clear error: {e}") from e


class InMemoryStorage(StorageStrategy):
    """
    In-memory storage implementation using Python dict.

    Pros:
    - Very fast (no I/O)
    - No external dependencies

    Cons:
    - Lost on restart
    - Not shared between processes

    max_bytes emulates the browser storage quota: a write that would push
    the total size of keys and values past it fails.
    """

    def __init__(self, max_bytes: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def _size_with(self, key: str, value: str) -> int:
        size = len(key.encode("utf-8")) + len(value.encode("utf-8"))
        for other_key, other_value in self._items.items():
            if other_key != key:
                size += len(other_key.encode("utf-8")) + len(other_value.encode("utf-8"))
        return size

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.max_bytes is not None and self._size_with(key, value) > self.max_bytes:
            raise StorageQuotaExceededError(
                f"Writing '{key}' would exceed the storage quota of {self.max_bytes} bytes"
            )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()
