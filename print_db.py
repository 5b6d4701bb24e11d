"""Print every spouse stored in the project's SQLite database.

Image data is summarised (MIME prefix and length) rather than printed.
It reuses the same `DATABASE_URL` behavior as the application via
`utils.database_init.AsyncDatabaseInitializer`.

Run: set the `DATABASE_URL` environment variable and run `python print_db.py`.
"""
import asyncio

from dal.spouse_dal import SpouseDAL
from models.spouse_record import SpouseRecord
from utils.database_init import AsyncDatabaseInitializer
from utils.settings import AppSettings


def _summarise_image(image_data: str) -> str:
    """Return e.g. ``data:image/png;base64 (1234 chars)`` for a data URI."""
    head = image_data.split(",", 1)[0] if "," in image_data else image_data[:32]
    return f"{head} ({len(image_data)} chars)"


def format_spouse(spouse: SpouseRecord) -> str:
    return (
        f"id={spouse.id}: user_name={spouse.user_name!r}; "
        f"spouse_name={spouse.spouse_name!r}; image_data={_summarise_image(spouse.image_data)}"
    )


async def main() -> None:
    """Ensure the DB exists and print all stored spouses."""
    settings = AppSettings.from_env()
    dal = SpouseDAL(AsyncDatabaseInitializer(settings.database_url))
    spouses = await dal.list_spouses()
    print(f"Table: spouses ({len(spouses)} rows)")
    for spouse in spouses:
        print("  " + format_spouse(spouse))


if __name__ == "__main__":
    asyncio.run(main())
