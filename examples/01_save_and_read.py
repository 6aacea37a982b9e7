"""
Example 01: Save and Read

This example saves ad-hoc records into a table and reads them back as
dynamic rows, including slicing a record with include/exclude lists.
"""

from row_bag import ConnectionConfig, Mapper
import tempfile
import sqlite3
from pathlib import Path


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE Test (
            Id INTEGER PRIMARY KEY AUTOINCREMENT,
            DataInt INTEGER,
            DataLong BIGINT,
            DataString TEXT
        )
    """)
    conn.commit()
    conn.close()

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=2)

    with Mapper.from_config(config) as mapper:
        print("=== Save ===\n")

        values = {"DataInt": 5, "DataLong": 3000000000, "DataString": "hello world"}
        identity = mapper.save("Test", values)
        print(f"Saved {values} with identity {identity}\n")

        # A record carrying a field the table does not have
        sliced = {**values, "Garbage": "booooooo"}
        try:
            mapper.save("Test", sliced)
        except sqlite3.OperationalError as e:
            print(f"Unfiltered save failed: {e}")

        identity = mapper.save("Test", sliced, include=["DataInt", "DataLong", "DataString"])
        print(f"Saved with include list, identity {identity}")
        identity = mapper.save("Test", sliced, exclude=["Garbage"])
        print(f"Saved with exclude list, identity {identity}\n")

        print("=== Read ===\n")

        row = mapper.read_one("SELECT * FROM Test")
        print(f"read_one: {row}")
        print(f"row.Id = {row.Id}, row.DataString = {row.DataString!r}\n")

        missing = mapper.read_one("SELECT * FROM Test WHERE Id = 999")
        print(f"read_one with no match: {missing}\n")

        with mapper.read("SELECT Id, DataInt FROM Test ORDER BY Id") as rows:
            for row in rows:
                print(f"  - {row.Id}: {row.DataInt}")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()
