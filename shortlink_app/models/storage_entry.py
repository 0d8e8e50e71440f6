from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from shortlink_app.database.connection import Base


class StorageEntry(Base):
    """
    One keyed value in the local key-value storage.

    Mirrors a localStorage slot: the key is the primary key and the value
    is an opaque string (the registry stores JSON documents here).
    """
    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
