"""Paged reads with Criteria and Paging, reusing the total between pages."""

from __future__ import annotations

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

from sqldao import Criteria, Database, SqlDao


@dataclass
class Ticket:
    id: Optional[int] = None
    title: str = ""
    status: str = ""


def main() -> None:
    conn = sqlite3.connect(":memory:")
    with Database(conn) as db:
        dao = SqlDao(db)
        dao.execute("CREATE TABLE ticket (id INTEGER PRIMARY KEY, title TEXT, status TEXT);")
        for i in range(1, 48):
            dao.execute_args(
                "INSERT INTO ticket (title, status) VALUES (?, ?);",
                f"ticket {i}",
                "open" if i % 4 else "closed",
            )

        criteria = Criteria(page=1, size=10, sorts={"id": "DESC"}, skip_row_count=True)
        sql = "SELECT * FROM ticket WHERE status = :status"
        params = {"status": "open"}

        while True:
            page = dao.query_with_paging(sql, params, criteria, Ticket)
            print(
                f"page {page.criteria.page}/{page.total_pages} "
                f"({page.total_elements} total): {[t.id for t in page.items]}"
            )
            if page.last or not page.items:
                break
            # Total is carried forward, so later pages skip the count query.
            criteria = page.criteria.for_page(page.criteria.page + 1)


if __name__ == "__main__":
    main()
