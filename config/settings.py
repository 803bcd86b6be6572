from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


UINT64_MAX = 2**64 - 1


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Storage
    db_path: str

    # Graph API
    graph_base_url: str
    request_timeout_seconds: float  # 0 means no timeout

    # Driver behaviour
    rate_limit_pause_seconds: float
    progress_every: int
    resume: bool

    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    progress_every = int(os.getenv("PROGRESS_EVERY", "1000"))
    if progress_every <= 0:
        raise RuntimeError("PROGRESS_EVERY must be a positive integer")
    return Settings(
        db_path=os.getenv("DB_PATH", "fbgraph.db"),
        graph_base_url=os.getenv("GRAPH_BASE_URL", "https://graph.facebook.com").rstrip("/"),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT", "0")),
        rate_limit_pause_seconds=float(os.getenv("RATE_LIMIT_PAUSE_SECONDS", "3600")),
        progress_every=progress_every,
        resume=_as_bool(os.getenv("RESUME"), True),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
