from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from config.settings import UINT64_MAX


class UserRecord(BaseModel):
    """App/DB record shape: one row of the users table."""

    id: int = Field(ge=0, le=UINT64_MAX)
    name: str = ""
    first: str = ""
    last: str = ""
    link: str = ""
    username: str = ""
    gender: str = ""
    locale: str = ""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def as_row(self) -> Tuple[int, str, str, str, str, str, str, str]:
        return (
            self.id,
            self.name,
            self.first,
            self.last,
            self.link,
            self.username,
            self.gender,
            self.locale,
        )
