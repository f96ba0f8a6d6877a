"""
Unified Database Management Layer.

Provides a singleton DatabaseManager for:
- Connection pooling (PostgreSQL, file SQLite) / StaticPool (in-memory SQLite)
- Bounded pool, connect and statement timeouts
- Session management with context managers
- Auto-commit/rollback behavior
- Translation of storage failures into UnavailableError

Usage:
    from core.db import db, get_db, Base

    db.initialize()
    with db.session() as session:
        profile = session.query(UserProfile).first()
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from functools import wraps
from typing import Optional, TypeVar

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings
from .errors import UnavailableError
from .logging import get_logger

logger = get_logger("database")

F = TypeVar("F", bound=Callable)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


@contextmanager
def store_errors(operation: str) -> Generator[None, None, None]:
    """
    Surface connection failures and timeouts as UnavailableError.

    Integrity errors are left alone; repositories turn those into conflicts.
    """
    try:
        yield
    except (OperationalError, InterfaceError, PoolTimeoutError) as exc:
        logger.error(
            "store_unavailable",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise UnavailableError() from exc
    except DBAPIError as exc:
        if not exc.connection_invalidated:
            raise
        logger.error("store_connection_invalidated", operation=operation, error=str(exc))
        raise UnavailableError() from exc


def translate_store_errors(operation: str) -> Callable[[F], F]:
    """Decorator form of store_errors for repository methods."""

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            with store_errors(operation):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


class DatabaseManager:
    """
    Singleton database manager with connection pooling and health checks.

    Features:
    - Connection pooling (QueuePool; StaticPool for in-memory SQLite)
    - Context manager for automatic commit/rollback
    - Thread-safe session factory
    - Health check support
    """

    _instance: Optional["DatabaseManager"] = None
    _initialized: bool = False

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        pass  # Prevent re-initialization

    def initialize(self, database_url: str | None = None) -> None:
        """
        Initialize database connection. Call once at app startup.

        Args:
            database_url: Optional override. Uses settings.database_url if not provided.
        """
        if self._initialized:
            return

        settings = get_settings()
        url = database_url or settings.database_url
        self.engine = build_engine(url)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )

        self._initialized = True
        logger.info("database_initialized", dialect=self.engine.dialect.name)

    def create_all_tables(self) -> None:
        """Create all tables defined by models."""
        self._ensure_initialized()
        import core.models  # noqa: F401  registers mappers

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with auto-commit/rollback.

        Usage:
            with db.session() as session:
                profile = session.query(UserProfile).first()
        """
        self._ensure_initialized()
        session = self.SessionLocal()
        try:
            yield session
            with store_errors("commit"):
                session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @property
    def is_initialized(self) -> bool:
        """Check if database manager is initialized."""
        return self._initialized

    def health_check(self) -> dict:
        """
        Perform database health check.

        Returns:
            dict with 'healthy' (bool), 'latency_ms' (float), and 'error' (str or None)
        """
        import time

        if not self._initialized:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        start = time.perf_counter()
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            latency = (time.perf_counter() - start) * 1000
            return {"healthy": True, "latency_ms": round(latency, 2), "error": None}
        except Exception as e:
            latency = (time.perf_counter() - start) * 1000
            logger.warning("database_health_check_failed", error=str(e))
            return {"healthy": False, "latency_ms": round(latency, 2), "error": type(e).__name__}

    def reset(self) -> None:
        """Reset database manager. Disposes engine and clears singleton state."""
        if hasattr(self, "engine") and self.engine:
            self.engine.dispose()
        self._initialized = False

    def _ensure_initialized(self) -> None:
        """Raise error if not initialized."""
        if not self._initialized:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")


def is_memory_sqlite(url: str) -> bool:
    """sqlite:// and :memory: URLs live in a single connection."""
    return url in ("sqlite://", "sqlite+pysqlite://") or ":memory:" in url or "mode=memory" in url


def build_engine(url: str):
    """
    Create an engine with bounded timeouts.

    In-memory SQLite gets a StaticPool so every session sees the one
    database; file-backed SQLite keeps the default per-connection pool and a
    busy timeout. PostgreSQL gets a QueuePool, a connect timeout and a
    server-side statement_timeout.
    """
    settings = get_settings()
    is_sqlite = url.startswith("sqlite")

    if is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.db_connect_timeout,
        }
        pool_class: type[StaticPool | QueuePool] | None = StaticPool if is_memory_sqlite(url) else None
        pool_config: dict = {}
    else:
        connect_args = {
            "connect_timeout": settings.db_connect_timeout,
            "options": f"-c statement_timeout={settings.db_statement_timeout_ms}",
        }
        pool_class = QueuePool
        pool_config = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_timeout": settings.db_pool_timeout,
        }

    if pool_class is not None:
        pool_config["poolclass"] = pool_class

    engine = create_engine(
        url,
        connect_args=connect_args,
        echo=settings.debug,
        future=True,
        **pool_config,
    )

    # Enable foreign keys for SQLite so tag rows cascade with their profile
    if is_sqlite:

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    # pysqlite opens transactions lazily, so a SAVEPOINT issued first would
    # become the outer transaction and RELEASE would commit it
    if is_sqlite and pool_class is None:

        @event.listens_for(engine, "connect")
        def disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


# Global singleton
db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @app.get("/profiles")
        def list_profiles(db: Session = Depends(get_db)):
            ...
    """
    with db.session() as session:
        yield session


__all__ = [
    "Base",
    "DatabaseManager",
    "build_engine",
    "is_memory_sqlite",
    "db",
    "get_db",
    "store_errors",
    "translate_store_errors",
]
