"""
aiosqlite connections for the inventory database.

SQLite admits one writer at a time. Write transactions go through a single
writer connection serialized by an asyncio lock; reads use a small pool of
reader connections that run alongside the writer under WAL.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from fieldstock.config import get_logger, get_settings
from fieldstock.core.exceptions import StorageError

logger = get_logger(__name__)


class ConnectionPool:
    """Reader connections plus one writer for a single database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._readers: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._writer: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            # Writer first so WAL is switched on before readers attach
            self._writer = await self._open(isolation_level=None)
            self._connections.append(self._writer)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                await self._readers.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                readers=self.pool_size,
            )

    async def _open(self, **kwargs) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, **kwargs)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a reader connection.

        Usage:
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT ...")
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._readers.get()
        try:
            yield conn
        finally:
            await self._readers.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Hold the writer for one ``BEGIN IMMEDIATE`` transaction.

        Commits when the block exits normally and rolls back when it raises.
        Not reentrant: a transaction block must not open another one.
        """
        if not self._initialized:
            await self.initialize()

        async with self._write_lock:
            conn = self._writer
            if conn is None:
                raise StorageError(
                    f"No writer connection for {self.db_path}", code="WRITER_UNAVAILABLE"
                )
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._writer = None
            self._readers = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the process-wide pool from storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Reader connection from the process-wide pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Serialized write transaction on the process-wide pool."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
