"""
Async database access helpers (raw SQL) using aiosqlite.

The `Database` handle owns the single SQLite connection. FastAPI opens it on
startup and closes it on shutdown (see `api/main.py`), stores it on
`app.state.db`, and repositories receive it through `get_db`.

SQL parameter style:
- sqlite uses positional placeholders: ?, ?, ?, ...

Column names in the schema are camelCase and quoted, so rows come back as
dicts whose keys already match the JSON field names.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

import aiosqlite
from fastapi import Request

logger = logging.getLogger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
    "PRAGMA busy_timeout=5000",
    "PRAGMA synchronous=NORMAL",
)


def _row_to_dict(row: aiosqlite.Row) -> dict[str, Any]:
    return dict(row)


async def _fetch_one(conn: aiosqlite.Connection, sql: str, args: tuple) -> dict[str, Any] | None:
    async with conn.execute(sql, args) as cursor:
        row = await cursor.fetchone()
    return _row_to_dict(row) if row is not None else None


async def _fetch_all(conn: aiosqlite.Connection, sql: str, args: tuple) -> list[dict[str, Any]]:
    async with conn.execute(sql, args) as cursor:
        rows = await cursor.fetchall()
    return [_row_to_dict(r) for r in rows]


async def _execute(conn: aiosqlite.Connection, sql: str, args: tuple) -> int:
    async with conn.execute(sql, args) as cursor:
        return cursor.rowcount


class Transaction:
    """
    Statement helpers bound to a connection inside BEGIN ... COMMIT.

    Only handed out by `Database.transaction()`, which already holds the lock.
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        return await _fetch_one(self._conn, sql, args)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return await _fetch_all(self._conn, sql, args)

    async def execute(self, sql: str, *args: Any) -> int:
        return await _execute(self._conn, sql, args)


class Database:
    def __init__(self, path: str) -> None:
        self.path = path
        self._conn: aiosqlite.Connection | None = None
        self._lock: asyncio.Lock | None = None

    async def connect(self) -> None:
        if self._conn is not None:
            return None
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        # Autocommit mode: transactions are explicit BEGIN/COMMIT below.
        conn = await aiosqlite.connect(self.path, isolation_level=None)
        conn.row_factory = aiosqlite.Row
        for pragma in _PRAGMAS:
            try:
                await conn.execute(pragma)
            except aiosqlite.Error as exc:
                logger.warning("Failed to set %s: %s", pragma, exc)

        self._conn = conn
        self._lock = asyncio.Lock()
        logger.info("Opened database %s", self.path)

    async def close(self) -> None:
        if self._conn is None:
            return None
        await self._conn.close()
        self._conn = None
        self._lock = None

    def connection(self) -> aiosqlite.Connection:
        if self._conn is None or self._lock is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._conn

    async def apply_schema(self, script: str) -> None:
        """
        Run an idempotent DDL script (CREATE ... IF NOT EXISTS).
        """
        conn = self.connection()
        async with self._lock:
            await conn.executescript(script)
        logger.info("Database schema applied")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        conn = self.connection()
        async with self._lock:
            return await _fetch_one(conn, sql, args)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        conn = self.connection()
        async with self._lock:
            return await _fetch_all(conn, sql, args)

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE). Returns the affected row count.
        """
        conn = self.connection()
        async with self._lock:
            return await _execute(conn, sql, args)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        BEGIN, yield a `Transaction`, COMMIT; ROLLBACK and re-raise on error.

        The lock is held for the whole block so no other request's statement
        can land inside the open transaction.
        """
        conn = self.connection()
        async with self._lock:
            await conn.execute("BEGIN")
            try:
                yield Transaction(conn)
            except BaseException:
                await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")


def get_db(request: Request) -> Database:
    return request.app.state.db


def new_id() -> str:
    return str(uuid4())


def utc_now() -> str:
    """
    Current UTC time as ISO-8601 text; lexical order matches time order.
    """
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
