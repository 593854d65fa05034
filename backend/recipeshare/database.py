"""
RecipeShare Backend - Database Connection Provider
==================================================

What:  Async SQLAlchemy engine, pooled session acquisition and the FastAPI
       dependency that hands the pool to route handlers.
How:   `Database` is constructed once by the application lifespan and stored on
       `app.state.database`. Routes receive it through `Depends(get_database)`
       and pass it to the query executors, which borrow one session per call
       with `async with db.session() as session:`.
Who:   Used by every service in `recipeshare.services` and by the lifespan.
When:  Engine is created at startup; sessions are created per executor call.

Connection Pooling Strategy:
    pool_size=db_pool_min (1):                   persistent connections
    max_overflow=db_pool_max - db_pool_min (2):  extra connections under load
    pool_timeout=db_pool_timeout (60s):          acquisition wait before failing
    pool_pre_ping:                               validates connections before use

    At most three statements are in flight at once; further acquisitions
    queue inside the pool and fail with StoreUnavailableError on timeout.

Error Translation:
    IntegrityError                                   → ConstraintViolationError
    TimeoutError / OperationalError / InterfaceError → StoreUnavailableError
    DisconnectionError / invalidated connection      → StoreUnavailableError
    any other SQLAlchemyError                        → DatabaseError
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from fastapi import Request
from sqlalchemy import literal, select
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from recipeshare.config import Settings
from recipeshare.exceptions import (
    ConstraintViolationError,
    DatabaseError,
    RecipeShareError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every table on one metadata object, which Alembic and the
    test fixtures use to build the schema.
    """
    pass


def translate_error(exc: sa_exc.SQLAlchemyError) -> RecipeShareError:
    """
    Map a SQLAlchemy exception onto the application error taxonomy.

    The original exception is logged here, server-side only; the returned
    exception carries a generic message plus the error type in its context.
    """
    context = {"error_type": type(exc).__name__}

    if isinstance(exc, sa_exc.IntegrityError):
        logger.warning("Constraint violation: %s", exc.orig or exc)
        return ConstraintViolationError(context=context)

    unavailable = isinstance(
        exc,
        (
            sa_exc.TimeoutError,
            sa_exc.OperationalError,
            sa_exc.InterfaceError,
            sa_exc.DisconnectionError,
        ),
    ) or (isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated)
    if unavailable:
        logger.error("Database unavailable: %s", exc)
        return StoreUnavailableError(context=context)

    logger.error("Statement execution failed: %s", exc)
    return DatabaseError(context=context)


class Database:
    """
    Explicitly owned handle to the connection pool.

    Responsibilities:
        - connect():          start the pool and prove a connection can be made
        - session():          scoped acquisition; rollback on error, always release
        - with_connection():  run one action against a borrowed session
        - ping():             boolean connectivity check for health endpoints
        - close():            drain in-flight sessions for a grace period, then dispose

    Release guarantee:
        session() releases on every exit path (success, exception, early
        return). A failed release is logged and never replaces the error
        raised by the caller's action.
    """

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        self.engine = engine or create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_min,
            max_overflow=settings.db_pool_max - settings.db_pool_min,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
            echo=settings.log_level == "DEBUG",
        )
        # expire_on_commit=False: records are read after commit in executors
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._in_flight = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._closing = False

    @property
    def in_flight(self) -> int:
        """Number of sessions currently borrowed from the pool."""
        return self._in_flight

    @property
    def closing(self) -> bool:
        return self._closing

    async def connect(self) -> None:
        """
        Open the first pooled connection and run a trivial query on it.

        Raises:
            StoreUnavailableError / DatabaseError when the store can't be reached.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(select(literal(1)))
        except sa_exc.SQLAlchemyError as exc:
            raise translate_error(exc) from exc
        logger.info(
            "Connection pool started (min=%d, max=%d, timeout=%ds)",
            self.settings.db_pool_min,
            self.settings.db_pool_max,
            self.settings.db_pool_timeout,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Borrow one session (and its pooled connection) for the duration of a block.

        Usage:
            async with db.session() as session:
                result = await session.execute(stmt)
                await session.commit()

        Raises:
            StoreUnavailableError: pool is closing, acquisition timed out,
                                   or the connection was lost
            ConstraintViolationError: the store rejected a write
            DatabaseError: any other statement failure
            Exceptions that are not database errors propagate unchanged.
        """
        if self._closing:
            raise StoreUnavailableError(
                message="The service is shutting down. Please try again later.",
                context={"reason": "pool_closing"},
            )

        session = self._session_factory()
        self._in_flight += 1
        self._idle.clear()
        try:
            yield session
        except sa_exc.SQLAlchemyError as exc:
            await self._rollback(session)
            raise translate_error(exc) from exc
        except Exception:
            await self._rollback(session)
            raise
        finally:
            try:
                await session.close()
            except Exception:
                logger.error("Failed to release database session", exc_info=True)
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

    async def with_connection(self, action: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run `action(session)` inside session() and return its result."""
        async with self.session() as session:
            return await action(session)

    async def ping(self) -> bool:
        """Return True when a pooled connection can execute a query."""
        try:
            async with self.session() as session:
                await session.execute(select(literal(1)))
        except RecipeShareError as exc:
            logger.warning("Database ping failed: %s", exc.message)
            return False
        return True

    async def close(self, grace_period: Optional[float] = None) -> None:
        """
        Drain and dispose the pool.

        New acquisitions are refused immediately; sessions already in flight
        get up to `grace_period` seconds (default: settings.shutdown_grace_period)
        to finish before every pooled connection is closed.

        Raises:
            Whatever engine disposal raises; the lifespan records it as an
            unclean shutdown.
        """
        if grace_period is None:
            grace_period = self.settings.shutdown_grace_period
        self._closing = True

        if self._in_flight:
            logger.info(
                "Waiting up to %.1fs for %d in-flight database session(s)",
                grace_period,
                self._in_flight,
            )
            try:
                await asyncio.wait_for(self._idle.wait(), timeout=grace_period)
            except asyncio.TimeoutError:
                logger.warning(
                    "Grace period elapsed with %d session(s) still in flight",
                    self._in_flight,
                )

        await self.engine.dispose()
        logger.info("Connection pool closed")

    @staticmethod
    async def _rollback(session: AsyncSession) -> None:
        try:
            await session.rollback()
        except Exception:
            logger.error("Rollback failed", exc_info=True)


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the pool handle owned by the application.

    Example usage in a route:
        @router.get("/locations")
        async def list_locations(db: Database = Depends(get_database)):
            return await location_service.fetch_all_locations(db)
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreUnavailableError(
            message="The database is not initialized.",
            context={"reason": "no_pool"},
        )
    return database
