from __future__ import annotations

from models.graph_user import GraphUser
from models.user_record import UserRecord
from config.settings import UINT64_MAX
from services.errors import InvalidIdentifier, RemoteRejected


# len(str(2**64 - 1))
_MAX_UID_DIGITS = 20


def parse_uid(value: str) -> int:
    """Parse a canonical unsigned 64-bit decimal string.

    Rejects signs, whitespace, leading zeros, non-ASCII digits and anything
    that does not format back to the exact same string.
    """
    if not value or len(value) > _MAX_UID_DIGITS:
        raise InvalidIdentifier(f"invalid id {value!r}")
    if not (value.isascii() and value.isdigit()):
        raise InvalidIdentifier(f"invalid id {value!r}")
    n = int(value)
    if n > UINT64_MAX:
        raise InvalidIdentifier(f"id {value!r} out of range")
    if str(n) != value:
        raise InvalidIdentifier("invalid id conversion")
    return n


def to_user_record(profile: GraphUser) -> UserRecord:
    """Map a decoded Graph user to the stored record shape (fields copied verbatim)."""
    if profile.failed():
        raise RemoteRejected(
            profile.error.message,
            code=profile.error.code,
            error_type=profile.error.type,
            rate_limited=profile.is_rate_limited(),
        )
    return UserRecord(
        id=parse_uid(profile.id),
        name=profile.name,
        first=profile.first_name,
        last=profile.last_name,
        link=profile.link,
        username=profile.username,
        gender=profile.gender,
        locale=profile.locale,
    )
