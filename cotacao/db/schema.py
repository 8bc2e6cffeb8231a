"""Database schema DDL and initialization for the quote store.

Tables:
  - exchange_rate: one append-only row per successful upstream fetch; every
    quote field is kept as the text the upstream sent.
"""

from __future__ import annotations
import sqlite3
from typing import Sequence

TABLE_NAME = "exchange_rate"

QUOTE_COLUMNS: Sequence[str] = (
    "code",
    "codein",
    "name",
    "high",
    "low",
    "var_bid",
    "pct_change",
    "bid",
    "ask",
    "timestamp",
    "create_date",
)

EXCHANGE_RATE_DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    code TEXT,
    codein TEXT,
    name TEXT,
    high TEXT,
    low TEXT,
    var_bid TEXT,
    pct_change TEXT,
    bid TEXT,
    ask TEXT,
    timestamp TEXT,
    create_date TEXT
);
"""

DDL_ORDER: Sequence[str] = (EXCHANGE_RATE_DDL,)


def init_schema(conn: sqlite3.Connection) -> None:
    """Create all tables idempotently on an open connection."""
    cur = conn.cursor()
    for ddl in DDL_ORDER:
        cur.execute(ddl)
    conn.commit()
