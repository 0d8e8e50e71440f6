"""
Database models for the short link service.

Short link records are not mapped to their own table: the registry keeps
the whole table as one JSON document inside a storage entry.
"""

from .storage_entry import StorageEntry

__all__ = ["StorageEntry"]
