"""Data access for persisted quotes.

Responsibilities
----------------
- Open a fresh connection per request and migrate the schema on it.
- Append one row per fetched quote; rows are never updated or deleted.
- Read back the most recent rows.

Connections are opened with ``check_same_thread=False`` because setup and the
insert run in different worker threads of the same request.
"""

from __future__ import annotations

from pathlib import Path
import logging
import sqlite3
from typing import List

from cotacao.core.errors import PersistenceSetupError, PersistenceWriteError
from cotacao.models import PersistedRateRecord, RateQuote

from .schema import QUOTE_COLUMNS, TABLE_NAME, init_schema

logger = logging.getLogger("cotacao.store")

_INSERT_SQL = "INSERT INTO {table} ({cols}) VALUES ({marks})".format(
    table=TABLE_NAME,
    cols=", ".join(QUOTE_COLUMNS),
    marks=", ".join("?" for _ in QUOTE_COLUMNS),
)


class RateStore:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    @classmethod
    def open(cls, db_path: Path) -> "RateStore":
        """Connect to ``db_path`` and ensure the schema exists."""
        conn = None
        try:
            conn = sqlite3.connect(db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            init_schema(conn)
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            raise PersistenceSetupError(
                f"failed to set up database {db_path}: {e}"
            ) from e
        return cls(conn)

    # ------------------------------------------------------------------
    # Writes
    def insert(self, quote: RateQuote) -> PersistedRateRecord:
        values = [getattr(quote, col) for col in QUOTE_COLUMNS]
        try:
            cur = self._conn.execute(_INSERT_SQL, values)
            self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceWriteError(f"failed to insert exchange rate: {e}") from e
        row_id = int(cur.lastrowid)
        logger.info("exchange rate saved to database (id=%d)", row_id)
        return PersistedRateRecord(id=row_id, **quote.model_dump())

    def save(self, quote: RateQuote) -> PersistedRateRecord:
        """Insert ``quote`` and release the connection, whatever the outcome."""
        try:
            return self.insert(quote)
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Reads
    def latest(self, limit: int = 10) -> List[PersistedRateRecord]:
        cur = self._conn.execute(
            f"SELECT id, {', '.join(QUOTE_COLUMNS)} FROM {TABLE_NAME} "
            "ORDER BY id DESC LIMIT ?",
            (limit,),
        )
        return [PersistedRateRecord(**dict(r)) for r in cur.fetchall()]

    def close(self) -> None:
        self._conn.close()
