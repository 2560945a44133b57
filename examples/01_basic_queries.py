"""Mapped queries and DML with SqlDao on SQLite."""

from __future__ import annotations

import logging
import sqlite3
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqldao").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqldao import Database, IndexParameter, NameParameter, SqlDao


@dataclass
class Product:
    id: Optional[int] = None
    name: str = ""
    price: Optional[float] = None


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    conn = sqlite3.connect(":memory:")
    with Database(conn) as db:
        dao = SqlDao(db)
        dao.execute("CREATE TABLE product (id INTEGER PRIMARY KEY, name TEXT, price REAL);")
        for name, price in [("keyboard", 49.0), ("computer", 999.0), ("computer mouse", 19.5)]:
            dao.execute_args("INSERT INTO product (name, price) VALUES (?, ?);", name, price)

        products = dao.query_to_list(
            "SELECT * FROM product WHERE name LIKE ? ORDER BY id",
            IndexParameter([SqlDao.sql_like_start("computer")]),
            Product,
        )
        print("Products:", products)

        cheapest = dao.query_to_bean(
            "SELECT * FROM product WHERE price < :max_price",
            NameParameter(max_price=20),
            Product,
        )
        print("Cheapest:", cheapest)

        total = dao.query_to_number("SELECT SUM(price) FROM product")
        print("Total price:", total)

        renamed = dao.execute("UPDATE product SET name = :name WHERE id = :id", {"name": "pc", "id": 2})
        print("Updated rows:", renamed)


if __name__ == "__main__":
    main()
