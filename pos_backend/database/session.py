"""
Asynchronous database session management for FastAPI
Using SQLite with aiosqlite backend and WAL mode enabled
"""
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from config import DATABASE_URL
from pos_backend.database.base import Base
from pos_backend.core.errors import PersistenceError, ValidationError
from pos_backend.core.i18n_logger import get_i18n_logger

logger = get_i18n_logger(__name__)


def build_engine(url: str = DATABASE_URL, **kwargs) -> AsyncEngine:
    """Create an async engine; SQLite connections get the performance PRAGMAs"""
    engine = create_async_engine(
        url,
        echo=False,
        connect_args={"check_same_thread": False} if "sqlite" in url else {},
        **kwargs
    )

    if "sqlite" in url:
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Enable WAL, foreign keys, and reasonable performance options"""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")     # Write-ahead logging
            cursor.execute("PRAGMA synchronous = NORMAL;")
            cursor.execute("PRAGMA foreign_keys = ON;")
            cursor.close()

    return engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


# --- Application-wide engine and session factory ---
engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every table registered on Base (idempotent)"""
    # Make sure all models are registered before create_all
    import pos_backend.database.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Dependency for FastAPI endpoints ---
async def get_db():
    """
    Provides a new async database session per request.
    Closes it automatically when the request is done.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def commit_or_raise(db: AsyncSession, conflict_message: str = "Record already exists") -> None:
    """
    Commit the session, translating storage failures into domain errors.

    Unique/foreign-key violations become ValidationError, anything else
    from the driver becomes PersistenceError. The session is rolled back
    in both cases.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("database.integrity_error", reason=str(e.orig))
        raise ValidationError(conflict_message) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("database.commit_failed", reason=str(e))
        raise PersistenceError("Could not save changes") from e
