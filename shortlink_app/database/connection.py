"""
SQLAlchemy engine and session setup.

The default backend keeps the key-value storage in a local SQLite file,
which plays the role of the browser's local storage.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from shortlink_app.config import settings


# SQLite needs check_same_thread=False because FastAPI may use the
# session from a worker thread
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

