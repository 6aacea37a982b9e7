"""
Example 02: Interceptors

Values the driver cannot bind (enums, value objects) go through the
unknown-value interceptor before they are saved.
"""

from dataclasses import dataclass
from enum import Enum
import tempfile
import sqlite3
from pathlib import Path

from row_bag import ConnectionConfig, InvalidArgumentError, Mapper


class OrderStatus(Enum):
    OPEN = "open"
    SHIPPED = "shipped"


@dataclass(frozen=True)
class Money:
    cents: int


@dataclass
class Order:
    Customer: str
    Status: OrderStatus
    Total: Money


def to_driver(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Money):
        return value.cents
    return value


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE Orders (
            Id INTEGER PRIMARY KEY AUTOINCREMENT,
            Customer TEXT NOT NULL,
            Status TEXT NOT NULL,
            Total INTEGER NOT NULL
        )
    """)
    conn.commit()
    conn.close()

    config = ConnectionConfig(driver="sqlite", database=db_path, pool_size=1)

    with Mapper.from_config(config) as mapper:
        print("=== Interceptors ===\n")

        try:
            mapper.interceptors.unknown_value_type = None
        except InvalidArgumentError as e:
            print(f"Rejected: {e}")

        mapper.interceptors.unknown_value_type = to_driver

        identity = mapper.save("Orders", Order("ada", OrderStatus.SHIPPED, Money(1250)))
        row = mapper.read_one(f"SELECT * FROM Orders WHERE Id = {identity}")
        print(f"Saved order {identity}: {row}")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()
