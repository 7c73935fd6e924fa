"""
Catalog store connection and session management.
Handles async database operations with SQLAlchemy and connection pooling.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, DateTime, Uuid
from sqlalchemy.pool import StaticPool
from rural_properties.config import settings
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Timezone-aware current time used for document timestamps."""
    return datetime.now(timezone.utc)


def enum_values(enum_cls) -> list:
    """Store enum values rather than member names."""
    return [member.value for member in enum_cls]


def build_engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the configured backend."""
    if database_url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        # Connection pool settings for containerized deployments
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_timeout": 30,
        "connect_args": {
            "server_settings": {
                "application_name": "rural_properties_api",
            }
        },
    }


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **build_engine_options(settings.database_url)
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all catalog documents.
    Includes common fields: id, created_at, updated_at.
    """
    
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )
    
    # Set on the client so creation order is stable for cursor pagination
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )
    
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )
    
    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


async def get_db() -> AsyncSession:
    """Request-scoped session; rolled back if the handler raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_database_connection() -> bool:
    """Round-trip a trivial statement. Used at startup and by /health."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Catalog store unreachable: {e}")
        return False
    logger.info("Catalog store reachable")
    return True


async def create_tables():
    """
    Create any missing catalog tables.

    Called on application startup and before a seed run; existing tables
    and their rows are left alone.
    """
    # Models register themselves on Base.metadata at import time
    import rural_properties.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Catalog tables ready: {', '.join(sorted(Base.metadata.tables))}")


async def close_db_connection():
    await engine.dispose()
    logger.info("Catalog store connections closed")
