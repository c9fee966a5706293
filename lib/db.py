"""
Database module - PostgreSQL connection pooling
"""
import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg

from lib.errors import DatabaseConnectionError, PoolExhaustedError
from lib.prometheus_metrics import database_pool_acquire_failures_total, update_pool_gauges
from lib.settings import Settings

logger = logging.getLogger(__name__)

# Failures that mean a physical connection could not be opened
CONNECT_ERRORS = (
    OSError,
    asyncpg.PostgresConnectionError,
    asyncpg.InvalidAuthorizationSpecificationError,
    asyncpg.InvalidCatalogNameError,
)


async def _init_connection(conn):
    """Decode aggregated JSON columns into Python objects"""
    for typename in ("json", "jsonb"):
        await conn.set_type_codec(
            typename,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog"
        )


class Database:
    """Bounded connection pool, created once at startup and passed by reference"""

    def __init__(
        self,
        dsn: str,
        min_size: int = 0,
        max_size: int = 5,
        acquire_timeout: Optional[float] = None,
        command_timeout: Optional[float] = 60
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.acquire_timeout = acquire_timeout
        self.command_timeout = command_timeout
        self.pool = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            str(settings.database_url),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            acquire_timeout=settings.db_acquire_timeout,
            command_timeout=settings.db_command_timeout
        )

    async def connect(self):
        """Create connection pool; connections above min_size open lazily"""
        if self.pool is not None:
            return
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout,
                init=_init_connection
            )
        except CONNECT_ERRORS as e:
            raise DatabaseConnectionError() from e
        logger.info(f"Connection pool ready (max_size={self.max_size})")

    async def disconnect(self):
        """Close connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Connection pool closed")

    async def acquire(self):
        """
        Check out one connection.
        Waits while the pool is at capacity; raises PoolExhaustedError only
        when acquire_timeout is set and elapses.
        """
        if self.pool is None:
            raise DatabaseConnectionError("Connection pool is not initialized")
        try:
            return await self.pool.acquire(timeout=self.acquire_timeout)
        except asyncio.TimeoutError as e:
            # asyncio.TimeoutError is an OSError subclass on 3.11+, check it first
            if self.pool.get_size() < self.pool.get_max_size():
                # Below capacity the wait was for a new connection to open
                database_pool_acquire_failures_total.labels(reason="connect").inc()
                logger.error("Timed out opening a database connection")
                raise DatabaseConnectionError() from e
            database_pool_acquire_failures_total.labels(reason="timeout").inc()
            raise PoolExhaustedError() from e
        except CONNECT_ERRORS as e:
            database_pool_acquire_failures_total.labels(reason="connect").inc()
            logger.error(f"Failed to open database connection: {e}")
            raise DatabaseConnectionError() from e

    async def release(self, conn):
        """Return a connection to the idle set; broken ones are discarded by the pool"""
        await self.pool.release(conn)

    @asynccontextmanager
    async def connection(self):
        """Acquire a connection and release it on every exit path"""
        conn = await self.acquire()
        try:
            yield conn
        finally:
            await self.release(conn)

    def refresh_metrics(self):
        if self.pool is not None:
            update_pool_gauges(self.pool.get_size(), self.pool.get_idle_size())
