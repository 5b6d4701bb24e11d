"""Async Data Access Layer for the spouses table.

Provides SpouseDAL with the two operations the API needs, compatible with
`utils.database_init.AsyncDatabaseInitializer`.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from models.spouse_record import SpouseRecord
from utils.database_init import AsyncDatabaseInitializer
from utils.errors import StorageError

LOGGER = logging.getLogger(__name__)


class SpouseStore(Protocol):
    """Anything the API layer can list and create spouses against."""

    async def list_spouses(self) -> List[SpouseRecord]: ...

    async def create_spouse(self, record: SpouseRecord) -> SpouseRecord: ...


class SpouseDAL:
    """Data access layer for spouse records.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`).
    """

    _COLUMNS = ("id", "user_name", "spouse_name", "image_data")
    _COLUMN_LIST, _INSERT_COLUMNS = ", ".join(_COLUMNS), ", ".join(_COLUMNS[1:])

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def list_spouses(self) -> List[SpouseRecord]:
        """Return every stored spouse in insertion order.

        Raises:
            StorageError: If the database cannot be reached or the query fails.
        """
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM spouses ORDER BY id"
                )
                rows = await cur.fetchall()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.exception("Database error fetching spouses")
            raise StorageError("Failed to fetch spouses from database") from exc

        return [self._row_to_record(r) for r in rows]

    async def create_spouse(self, record: SpouseRecord) -> SpouseRecord:
        """Insert a new spouse row and return it with its assigned id.

        Args:
            record: SpouseRecord with `id=None`; any id given is ignored.

        Raises:
            StorageError: If the insert fails or the new row cannot be read back.
        """
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    f"INSERT INTO spouses ({self._INSERT_COLUMNS}) VALUES (?, ?, ?)",
                    (record.user_name, record.spouse_name, record.image_data),
                )
                await conn.commit()
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM spouses WHERE id = ?",
                    (cur.lastrowid,),
                )
                row = await cur.fetchone()
            if row is None:
                raise StorageError("Failed to create spouse record")
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.exception("Database error creating spouse")
            raise StorageError("Failed to create spouse in database") from exc

        return self._row_to_record(row)

    @staticmethod
    def _row_to_record(row: Sequence[object]) -> SpouseRecord:
        """Convert a DB row tuple into a SpouseRecord."""
        return SpouseRecord(
            id=row[0],
            user_name=row[1],
            spouse_name=row[2],
            image_data=row[3],
        )
