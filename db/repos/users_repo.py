from __future__ import annotations

import sqlite3

from db.connection import connect
from models.user_record import UserRecord
from services.errors import StorageError


_SIGN_BIT = 1 << 63
_UINT64_SPAN = 1 << 64


def to_signed(uid: int) -> int:
    """Map an unsigned 64-bit id onto SQLite's signed INTEGER range."""
    return uid - _UINT64_SPAN if uid >= _SIGN_BIT else uid


def to_unsigned(value: int) -> int:
    return value + _UINT64_SPAN if value < 0 else value


class UsersRepo:
    """Storage gateway for the users table. Every call uses its own connection."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def store(self, record: UserRecord) -> None:
        """Insert one user row; duplicates are reported, never overwritten."""
        row = record.as_row()
        try:
            with connect(self.db_path) as conn:
                conn.execute(
                    "INSERT INTO users VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (to_signed(row[0]), *row[1:]),
                )
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def last_inserted_identifier(self) -> int:
        """Return the id to resume from: 0 for an empty table, else max(id) + 1."""
        try:
            with connect(self.db_path) as conn:
                cur = conn.cursor()
                cur.execute("SELECT COUNT(*) FROM users")
                if int(cur.fetchone()[0]) == 0:
                    return 0
                # Negative values are ids at or above 2**63 and sort above every
                # non-negative id once mapped back to unsigned.
                cur.execute("SELECT MAX(id) FROM users WHERE id < 0")
                high = cur.fetchone()[0]
                if high is None:
                    cur.execute("SELECT MAX(id) FROM users")
                    high = cur.fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        return to_unsigned(int(high)) + 1

    def count(self) -> int:
        try:
            with connect(self.db_path) as conn:
                return int(conn.execute("SELECT COUNT(*) FROM users").fetchone()[0])
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def get(self, uid: int) -> UserRecord | None:
        try:
            with connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT id, name, first, last, link, username, gender, locale FROM users WHERE id = ?",
                    (to_signed(uid),),
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        if row is None:
            return None
        return UserRecord(
            id=to_unsigned(row[0]),
            name=row[1] or "",
            first=row[2] or "",
            last=row[3] or "",
            link=row[4] or "",
            username=row[5] or "",
            gender=row[6] or "",
            locale=row[7] or "",
        )
