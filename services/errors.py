"""
Error taxonomy for the Graph user downloader.

Per-id errors are logged by the driver and the loop moves on; SchemaError and
CeilingBelowStart abort the run.
"""

from __future__ import annotations

from typing import Optional


class DownloaderError(Exception):
    """Base class for every error raised while processing a uid."""

    rate_limited: bool = False


class NetworkError(DownloaderError):
    """Transport-level failure talking to the Graph API."""


class DecodeError(DownloaderError):
    """Response body was not a decodable Graph user object."""


class RemoteRejected(DownloaderError):
    """The Graph answered with an embedded error object."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        error_type: Optional[str] = None,
        rate_limited: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_type = error_type
        self.rate_limited = rate_limited


class InvalidIdentifier(DownloaderError):
    """The id field is not a canonical unsigned 64-bit decimal."""


class StorageError(DownloaderError):
    """A row could not be written (duplicate id, locked or unreadable file)."""


class SchemaError(DownloaderError):
    """The users table could not be probed or created. Fatal."""


class CeilingBelowStart(DownloaderError):
    """The configured ceiling is lower than the resolved start id. Fatal."""
