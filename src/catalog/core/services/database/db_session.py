"""Database engine and session factory used across the application."""

import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


class DbSessionService:
    def __init__(self, config: ConfigData | None = None, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        main_config = config or get_config()
        self._config = main_config

        if engine is not None:
            self._engine = engine
            self._connection_lock = self._make_connection_lock()
            return

        db_config = main_config.database
        logger.info("Configuring database engine for environment: {}", main_config.app.environment)

        engine_kwargs: dict[str, Any] = {
            "echo": False,
            "echo_pool": False,
            "pool_pre_ping": True,
            "connect_args": self._get_connect_args(main_config),
        }

        if db_config.is_sqlite:
            if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        self._connection_lock = self._make_connection_lock()

        if main_config.app.environment == "production":
            logger.bind(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            ).info("Database engine initialized")

    @property
    def engine(self) -> Engine:
        return self._engine

    def _make_connection_lock(self) -> AbstractContextManager | None:
        # StaticPool hands every session the same DBAPI connection
        if isinstance(self._engine.pool, StaticPool):
            return threading.RLock()
        return None

    def _exclusive(self) -> AbstractContextManager:
        """Hold the shared connection for the duration of a unit of work."""
        if self._connection_lock is None:
            return nullcontext()
        return self._connection_lock

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}

        if "postgresql" in config.database.url:
            connect_args.update(
                {
                    "application_name": f"{config.app.environment}_catalog",
                    "connect_timeout": 30,
                    "options": "-c jit=off",
                }
            )

        elif config.database.is_sqlite:
            connect_args.update(
                {
                    # Sessions run in worker threads
                    "check_same_thread": False,
                    "timeout": 20,
                }
            )

        return connect_args

    def create_all(self) -> None:
        """Create all database tables."""
        from src.catalog.entities.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager style helper for repositories and tests.

        On a single-connection pool (in-memory SQLite) scopes run one at a
        time across threads.
        """
        with self._exclusive():
            db = self.get_session()
            try:
                yield db
                db.commit()
            except Exception as e:
                db.rollback()
                logger.bind(error_type=type(e).__name__).debug(
                    "Database transaction rolled back: {}", e
                )
                raise
            finally:
                db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._exclusive(), self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
