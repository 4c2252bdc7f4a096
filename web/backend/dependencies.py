#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator, Optional
from fastapi import Depends, Header
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config_loader import MatchingConfig
from core.matching.models import Actor
from database.repository import MatchingRepository
from .config import get_config
from .utils import parse_uuid


class DatabaseManager:
    """Manages database connections and sessions."""
    
    def __init__(self, url: str):
        engine_kwargs = {"pool_pre_ping": True}  # Verify connections before using
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=10, max_overflow=20)
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )
    
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.
        
        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def _get_db_manager() -> DatabaseManager:
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(get_config().database.url)
    return _db_manager


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.
    
    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from _get_db_manager().get_session()


def get_repo(db: Session = Depends(get_db)) -> MatchingRepository:
    """FastAPI dependency that wraps the request session in a MatchingRepository."""
    return MatchingRepository(db)


def get_matching_config() -> MatchingConfig:
    return get_config().matching


def get_actor(
    x_user_id: str = Header(..., description="Authenticated user id"),
    x_user_role: str = Header(default="user", description="Authenticated user role"),
) -> Actor:
    """
    Acting user for the request.

    Authentication happens upstream; the gateway forwards the verified
    identity in these headers.
    """
    return Actor(user_id=parse_uuid(x_user_id, "X-User-Id"), role=x_user_role.strip().lower())
