from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import urlparse

import aiosqlite


def resolve_sqlite_path(database_url: str) -> Path:
    """Translate a DATABASE_URL into the SQLite file it points at.

    Accepts ``sqlite:///relative.db``, ``sqlite:////abs/path.db`` or a bare
    filesystem path.

    Raises:
        RuntimeError: If the URL uses a scheme other than sqlite or has no path.
    """
    if "://" not in database_url:
        return Path(database_url).expanduser()

    parsed = urlparse(database_url)
    if parsed.scheme != "sqlite":
        raise RuntimeError(
            f"Unsupported database URL scheme {parsed.scheme!r}; expected sqlite:///<path>"
        )

    # sqlite:///app.db -> "/app.db" (relative), sqlite:////tmp/app.db -> "//tmp/app.db"
    raw_path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    if not raw_path:
        raise RuntimeError(f"DATABASE_URL={database_url!r} does not name a database file")
    return Path(raw_path).expanduser()


class AsyncDatabaseInitializer:
    """
    Manage the async SQLite database named by DATABASE_URL.

    - The spouses table is created on the first call to `ensure_database()`;
      existing data is kept across restarts.
    - Subsequent calls to `ensure_database()` on the same instance are no-ops,
      so it is safe for `connection()` to call it.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.db_path = resolve_sqlite_path(database_url)
        self._initialized = False

    async def ensure_database(self) -> None:
        """Create the parent directory and the spouses table if missing."""
        if self._initialized:
            return

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RuntimeError(
                f"Failed to create or access database directory at {self.db_path.parent}"
            ) from exc

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS spouses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_name TEXT NOT NULL,
                    spouse_name TEXT NOT NULL,
                    image_data TEXT NOT NULL
                )
                """
            )
            await db.commit()

        self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Async context manager yielding an `aiosqlite.Connection`.

        The table is created on first use via `ensure_database()`.
        """
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()
