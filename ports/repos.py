from __future__ import annotations

from typing import Protocol

from models.user_record import UserRecord


class UsersRepoPort(Protocol):
    def store(self, record: UserRecord) -> None:
        ...

    def last_inserted_identifier(self) -> int:
        ...
