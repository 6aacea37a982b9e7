"""
Example 03: Async Support and Settings

This example configures the connection from ROW_BAG_* environment variables
and uses AsyncMapper to save and stream rows.
"""

import asyncio
import os
import tempfile
import sqlite3
from pathlib import Path

from row_bag import AsyncMapper, get_settings
from row_bag.core.log import configure_logging


async def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL
        )
    """)
    conn.commit()
    conn.close()

    os.environ["ROW_BAG_DRIVER"] = "sqlite"
    os.environ["ROW_BAG_DATABASE"] = db_path
    os.environ["ROW_BAG_POOL_SIZE"] = "2"
    os.environ.setdefault("ROW_BAG_LOG_LEVEL", "DEBUG")
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    async with AsyncMapper.from_config(settings.to_connection_config()) as mapper:
        print("=== Async Save and Read ===\n")

        for name in ("Alice", "Bob", "Charlie"):
            identity = await mapper.save(
                "users", {"name": name, "email": f"{name.lower()}@example.com"}
            )
            print(f"Saved {name} as {identity}")

        print()
        async with mapper.read("SELECT * FROM users ORDER BY id") as rows:
            async for row in rows:
                print(f"  - {row.name} ({row.email})")

        count = await mapper.read_one("SELECT COUNT(*) AS n FROM users")
        print(f"\nTotal users: {count.n}")

    Path(db_path).unlink()


if __name__ == "__main__":
    asyncio.run(main())
