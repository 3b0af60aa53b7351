"""
Streamlined database utilities for hackathon records with SQLAlchemy.
"""
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ContextManager, Dict, Optional
from contextlib import contextmanager
from sqlalchemy import create_engine, func, Column, String, Float, DateTime, JSON, Index
from sqlalchemy.orm import declarative_base, sessionmaker, scoped_session, Session
from sqlalchemy.pool import QueuePool, StaticPool
from config import (
    DATABASE_URL, MAX_POOL_SIZE, POOL_TIMEOUT, DB_MAX_OVERFLOW, DB_POOL_RECYCLE,
    DB_ID_MAX_LENGTH, DB_NAME_MAX_LENGTH, DB_URL_MAX_LENGTH, DB_SOURCE_MAX_LENGTH
)
from shared_utils import logger

# SQLAlchemy models with unified base
Base = declarative_base()

@dataclass
class DatabaseConfig:
    """Database configuration with sensible defaults."""
    pool_size: int = MAX_POOL_SIZE
    max_overflow: int = DB_MAX_OVERFLOW
    pool_timeout: int = POOL_TIMEOUT
    pool_recycle: int = DB_POOL_RECYCLE

class HackathonRow(Base):
    """One hackathon record per id; the full record lives in payload."""
    __tablename__ = 'hackathons'

    id = Column(String(DB_ID_MAX_LENGTH), primary_key=True)
    name = Column(String(DB_NAME_MAX_LENGTH), nullable=False, index=True)
    url = Column(String(DB_URL_MAX_LENGTH), nullable=False, index=True)
    status = Column(String, nullable=False, index=True)
    source = Column(String(DB_SOURCE_MAX_LENGTH), index=True)
    last_updated = Column(String, index=True)
    confidence = Column(Float, nullable=False, default=0.0)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    __table_args__ = (
        Index('idx_hackathon_status_updated', 'status', 'last_updated'),
    )

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> 'HackathonRow':
        """Build a row from a serialized hackathon dictionary."""
        return cls(
            id=data['id'],
            name=str(data.get('name') or '')[:DB_NAME_MAX_LENGTH],
            url=str(data.get('url') or '')[:DB_URL_MAX_LENGTH],
            status=data.get('status'),
            source=str(data.get('source') or '')[:DB_SOURCE_MAX_LENGTH],
            last_updated=data.get('lastUpdated'),
            confidence=data.get('confidence') or 0.0,
            payload=data,
        )

class DatabaseManager:
    """Streamlined database manager with connection pooling."""

    def __init__(self, database_url: Optional[str] = None, config: DatabaseConfig = None):
        self.database_url = database_url or os.getenv('DATABASE_URL', DATABASE_URL)
        self.config = config or DatabaseConfig()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self):
        """Lazy-loaded database engine."""
        if self._engine is None:
            logger.log("info", "Using database", url=self.database_url)

            if self.database_url in ('sqlite://', 'sqlite:///:memory:'):
                # One shared connection so every session sees the same in-memory database
                self._engine = create_engine(
                    self.database_url,
                    echo=False,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False}
                )
            elif self.database_url.startswith('sqlite'):
                self._engine = create_engine(
                    self.database_url,
                    echo=False,
                    connect_args={"check_same_thread": False}
                )
            else:
                # PostgreSQL configuration
                self._engine = create_engine(
                    self.database_url,
                    poolclass=QueuePool,
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_timeout=self.config.pool_timeout,
                    pool_recycle=self.config.pool_recycle,
                    pool_pre_ping=True,
                    echo=False
                )
        return self._engine

    @contextmanager
    def get_session(self) -> ContextManager[Session]: # type: ignore
        """Context manager for database sessions."""
        if self._session_factory is None:
            self._session_factory = scoped_session(sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False
            ))

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self):
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self):
        """Drop all database tables."""
        Base.metadata.drop_all(self.engine)

    def get_database_stats(self) -> Dict[str, Any]:
        """Get database statistics."""
        stats = {}

        with self.get_session() as session:
            stats['hackathons_count'] = session.query(HackathonRow).count()
            stats['by_status'] = {
                status: count for status, count in
                session.query(HackathonRow.status, func.count(HackathonRow.id)).group_by(HackathonRow.status)
            }

        return stats

# Global database manager instance
_db_manager = None

def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
