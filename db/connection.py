from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection with sane pragmas for local use.

    - WAL journal for fewer writer blocks
    - NORMAL synchronous for performance
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0)
    try:
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
    except sqlite3.Error:
        conn.close()
        raise
    return conn


@contextmanager
def connect(db_path: str, timeout: Optional[float] = 30.0) -> Iterator[sqlite3.Connection]:
    """Scoped connection: commit on success, roll back on error, always close."""
    conn = get_connection(db_path, timeout)
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
