from __future__ import annotations

import logging
import sqlite3

from db.connection import connect
from services.errors import SchemaError


logger = logging.getLogger(__name__)

USERS_TABLE = "users"
MISSING_TABLE = f"no such table: {USERS_TABLE}"

CREATE_USERS_SQL = (
    "CREATE TABLE users (\n"
    "  id INTEGER PRIMARY KEY UNIQUE NOT NULL,\n"
    "  name TEXT,\n"
    "  first TEXT,\n"
    "  last TEXT,\n"
    "  link TEXT,\n"
    "  username TEXT,\n"
    "  gender TEXT,\n"
    "  locale TEXT\n"
    ")"
)


def ensure_schema(db_path: str) -> bool:
    """Make sure the users table exists; returns True when it had to be created.

    The table is probed with a count query. Only a missing table leads to
    creation; any other failure means the store is unusable and raises
    SchemaError.
    """
    try:
        with connect(db_path) as conn:
            conn.execute(f"SELECT COUNT(*) FROM {USERS_TABLE}").fetchone()
        return False
    except sqlite3.OperationalError as e:
        if str(e) != MISSING_TABLE:
            raise SchemaError(f"opening profile database: {e}") from e
    except sqlite3.Error as e:
        raise SchemaError(f"opening profile database: {e}") from e

    logger.info("creating table")
    try:
        with connect(db_path) as conn:
            conn.execute(CREATE_USERS_SQL)
    except sqlite3.Error as e:
        raise SchemaError(f"opening profile database: {e}") from e
    return True
