"""
Relational store adapter - thin pass-through to PostgreSQL via asyncpg
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

import asyncpg

from database.connection import get_db_pool
from utils.exceptions import ConstraintError, IdentityFormatError, QueryError

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _quote_identifier(name: str) -> str:
    """Validate and quote a table or column name"""
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise QueryError(f"Invalid SQL identifier: {name!r}")
    return f'"{name}"'


def _serialize_row(row) -> Dict[str, Any]:
    """Convert a record to a dict with datetime values as ISO strings"""
    data = dict(row)
    for key, value in data.items():
        if hasattr(value, 'isoformat'):
            data[key] = value.isoformat()
    return data


class RelationalStore:
    """getAll / insert / delete over a named table"""

    def __init__(self, pool_getter: Callable = get_db_pool, id_column: str = "id", created_column: str = "created_at"):
        self._pool_getter = pool_getter
        self.id_column = id_column
        self.created_column = created_column

    def _pool(self):
        db_pool = self._pool_getter()
        if not db_pool:
            raise QueryError("Database pool not initialized")
        return db_pool

    async def get_all(self, table: str) -> List[Dict[str, Any]]:
        """Return every row of the table, newest first"""
        table_sql = _quote_identifier(table)
        created_sql = _quote_identifier(self.created_column)
        id_sql = _quote_identifier(self.id_column)
        query = f"SELECT * FROM {table_sql} ORDER BY {created_sql} DESC, {id_sql} DESC"

        logger.info(f"Executing READ query: {query}")

        try:
            async with self._pool().acquire() as conn:
                rows = await conn.fetch(query)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during READ on {table}: {e}")
            raise QueryError(f"Database query failed: {e}") from e
        except (asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Connection error during READ on {table}: {e}")
            raise QueryError(f"Database connection failed: {e}") from e

        return [_serialize_row(row) for row in rows]

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a record and return the stored row

        Args:
            table: Table name
            record: Column values; identity and timestamps are left to the database

        Returns:
            The inserted row including server-assigned id and timestamps
        """
        if not record:
            raise QueryError("Insert requires at least one column")

        table_sql = _quote_identifier(table)
        columns = [_quote_identifier(column) for column in record]
        placeholders = [f"${index}" for index in range(1, len(columns) + 1)]
        params = list(record.values())
        query = (
            f"INSERT INTO {table_sql} ({', '.join(columns)}) "
            f"VALUES ({', '.join(placeholders)}) RETURNING *"
        )

        logger.info(f"Executing INSERT: {query}")
        logger.info(f"Parameters: {params}")

        try:
            async with self._pool().acquire() as conn:
                row = await conn.fetchrow(query, *params)
        except asyncpg.IntegrityConstraintViolationError as e:
            detail = getattr(e, "detail", None)
            message = f"{e} ({detail})" if detail else str(e)
            logger.warning(f"Constraint violation on {table}: {message}")
            raise ConstraintError(message) from e
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during INSERT on {table}: {e}")
            raise QueryError(f"Database INSERT failed: {e}") from e
        except (asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Connection error during INSERT on {table}: {e}")
            raise QueryError(f"Database connection failed: {e}") from e

        if not row:
            raise QueryError("Insert operation failed - no data returned")

        return _serialize_row(row)

    async def delete(self, table: str, identity: str) -> None:
        """Delete a row by identity; a missing row is not an error"""
        key = self.to_native_id(identity)
        table_sql = _quote_identifier(table)
        id_sql = _quote_identifier(self.id_column)
        query = f"DELETE FROM {table_sql} WHERE {id_sql} = $1"

        logger.info(f"Executing DELETE: {query}")
        logger.info(f"Parameters: [{key}]")

        try:
            async with self._pool().acquire() as conn:
                result = await conn.execute(query, key)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during DELETE on {table}: {e}")
            raise QueryError(f"Database DELETE failed: {e}") from e
        except (asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Connection error during DELETE on {table}: {e}")
            raise QueryError(f"Database connection failed: {e}") from e

        # asyncpg returns "DELETE N"; the count is informational only
        logger.info(f"DELETE result for {table} id={key}: {result}")

    @staticmethod
    def to_native_id(identity: Optional[str]) -> int:
        """Convert an external identity string to the integer primary key"""
        text = identity.strip() if isinstance(identity, str) else str(identity)
        # ASCII digits only; int() alone also takes "1_0" and non-Latin digits
        if not _INTEGER_RE.fullmatch(text):
            raise IdentityFormatError(f"Invalid relational identity: {identity!r}")
        return int(text)
