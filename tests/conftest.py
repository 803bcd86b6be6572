from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'pipelines.download_users'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    from config.settings import get_settings

    # Keep a developer .env from leaking into tests
    monkeypatch.setattr("config.settings.load_dotenv", lambda *a, **k: None)
    for key in ("DB_PATH", "GRAPH_BASE_URL", "REQUEST_TIMEOUT", "RATE_LIMIT_PAUSE_SECONDS", "PROGRESS_EVERY", "RESUME", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path):
    from config.settings import Settings

    return Settings(
        db_path=str(tmp_path / "fbgraph.db"),
        graph_base_url="https://graph.example.test",
        request_timeout_seconds=5,
        rate_limit_pause_seconds=3600,
        progress_every=1000,
        resume=True,
        log_level="INFO",
    )


def user_payload(uid: int, **overrides) -> Dict:
    payload = {
        "id": str(uid),
        "name": f"User {uid}",
        "first_name": "User",
        "last_name": str(uid),
        "link": f"https://www.facebook.com/user{uid}",
        "username": f"user{uid}",
        "gender": "female",
        "locale": "en_US",
    }
    payload.update(overrides)
    return payload


def error_payload(message: str, code: int = 100, type_: str = "GraphMethodException") -> Dict:
    return {"error": {"message": message, "type": type_, "code": code}}


class StubGraphClient:
    """Serves canned payloads per uid; a list is consumed one entry per call."""

    def __init__(self, payloads: Dict[int, object]):
        self.payloads = payloads
        self.calls: List[int] = []

    def fetch_profile(self, uid: int):
        from models.graph_user import GraphUser

        self.calls.append(uid)
        payload = self.payloads.get(uid, error_payload("Unsupported get request."))
        if isinstance(payload, list):
            payload = payload.pop(0)
        if isinstance(payload, Exception):
            raise payload
        return GraphUser.model_validate(payload)
