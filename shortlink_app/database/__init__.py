from .connection import Base, SessionLocal, engine

__all__ = ["Base", "SessionLocal", "engine"]
