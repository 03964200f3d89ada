"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.books_api.core.exceptions import StorageError
from src.books_api.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Create the shared database engine for ``db_config``.

        No connection is opened here; call :meth:`ping` to verify connectivity.
        """
        self._db_config = db_config
        url = make_url(db_config.connection_string)

        logger.info(
            "Configuring {} database engine for environment: {}",
            url.get_backend_name(),
            environment,
        )
        engine_kwargs = self._get_engine_kwargs(db_config, environment)
        logger.debug(
            "Initializing database engine for {} with args {}",
            url.render_as_string(hide_password=True),
            engine_kwargs,
        )
        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    @staticmethod
    def _get_engine_kwargs(db_config: DatabaseConfig, environment: str) -> dict[str, Any]:
        """Get backend-specific engine arguments."""
        url = make_url(db_config.connection_string)

        if url.get_backend_name() == "sqlite":
            if environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider MySQL for better performance and reliability."
                )
            kwargs: dict[str, Any] = {
                "echo": False,
                "connect_args": {"check_same_thread": False},
            }
            # An in-memory database only lives as long as its single connection
            if url.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
            return kwargs

        return {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_recycle": db_config.pool_recycle,
            "pool_pre_ping": True,
            "echo": False,
            "echo_pool": False,
        }

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            if isinstance(e, SQLAlchemyError):
                logger.error(
                    "Database transaction failed: {}: {}", type(e).__name__, e
                )
            raise
        finally:
            db.close()

    def ping(self) -> None:
        """Open a connection and run a trivial query.

        Raises:
            StorageError: If the database cannot be reached.
        """
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError(f"database ping failed: {e}") from e

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            self.ping()
        except StorageError as e:
            logger.error("Database health check failed: {}", e)
            return False
        return True

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
        logger.info("Database engine disposed")
