"""
Graph API client: one unauthenticated GET per user id.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from config.settings import Settings, get_settings
from models.graph_user import GraphUser
from services.errors import DecodeError, NetworkError


logger = logging.getLogger(__name__)


class GraphClient:
    """Fetches Graph user objects by numeric id."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.graph_base_url.rstrip("/")
        self.session = session or requests.Session()

    def user_url(self, uid: int) -> str:
        return f"{self.base_url}/{uid}"

    def fetch_profile(self, uid: int) -> GraphUser:
        """GET the user object for ``uid`` and decode it.

        Error payloads arrive with 4xx statuses but still carry the JSON
        error object, so the status code is not checked here.
        """
        timeout = self.settings.request_timeout_seconds or None
        try:
            response = self.session.get(self.user_url(uid), timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(str(e)) from e

        logger.debug("GET %s -> %s", self.user_url(uid), response.status_code, extra={"uid": uid})
        try:
            payload = response.json()
        except (ValueError, RecursionError) as e:
            # RecursionError: valid JSON nested deeper than the decoder allows
            raise DecodeError(f"malformed JSON: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError(f"expected JSON object, got {type(payload).__name__}")
        try:
            return GraphUser.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"unexpected payload shape: {e.error_count()} field error(s)") from e

    def close(self) -> None:
        self.session.close()
