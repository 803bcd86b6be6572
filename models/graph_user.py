from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


RATE_LIMIT_CODE = 4
RATE_LIMIT_MESSAGE = "Application request limit reached"


class GraphError(BaseModel):
    """Error object embedded in a Graph API response body."""

    message: str = ""
    type: str = ""
    code: int = 0

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class GraphUser(BaseModel):
    """Wire shape of a Graph user lookup: validated, then converted to a UserRecord."""

    id: str = ""
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    link: str = ""
    username: str = ""
    gender: str = ""
    locale: str = ""
    error: GraphError = Field(default_factory=GraphError)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null means "absent", same as a missing key
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def failed(self) -> bool:
        """True when the Graph rejected the lookup for this id."""
        return self.error.message != ""

    def is_rate_limited(self) -> bool:
        if not self.failed():
            return False
        return self.error.code == RATE_LIMIT_CODE or RATE_LIMIT_MESSAGE in self.error.message
