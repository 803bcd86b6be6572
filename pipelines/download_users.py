"""
Sequential Graph user download: resolve a start id, then fetch, map and store
every uid below the ceiling, one at a time.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from config.settings import UINT64_MAX, Settings, get_settings
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import FetchProfile, MapRecord, PersistRecord
from ports.graph import GraphClientPort
from ports.repos import UsersRepoPort
from services.errors import CeilingBelowStart, DownloaderError


logger = logging.getLogger(__name__)


@dataclass
class DownloadState:
    start: int
    ceiling: int
    cursor: int
    total: int = 0
    failed: int = 0
    rate_limit_pauses: int = 0
    stopped: bool = False


class UserDownloader:
    """Drives the per-uid pipeline over ``[start, ceiling)``.

    Per-uid errors are logged and skipped, except the Graph rate-limit error:
    the loop then waits ``rate_limit_pause_seconds`` and retries the same uid.
    The wait is interruptible through ``stop()``.
    """

    def __init__(
        self,
        client: GraphClientPort,
        repo: UsersRepoPort,
        *,
        settings: Optional[Settings] = None,
        resume: Optional[bool] = None,
        wait: Optional[Callable[[float], bool]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.repo = repo
        self.resume = self.settings.resume if resume is None else resume
        self._stop_event = threading.Event()
        # wait(seconds) -> True when interrupted by stop()
        self._wait = wait or self._stop_event.wait
        self.pipeline = Pipeline([
            FetchProfile(client),
            MapRecord(),
            PersistRecord(repo),
        ])

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def resolve_start(self) -> int:
        if not self.resume:
            return 0
        return self.repo.last_inserted_identifier()

    def prepare(self, ceiling: int = UINT64_MAX, start: Optional[int] = None) -> DownloadState:
        """Resolve the start id and validate the ceiling before any fetch."""
        if start is None:
            start = self.resolve_start()
        if ceiling < start:
            raise CeilingBelowStart(f"max uid {ceiling} is less than starting uid {start}")
        return DownloadState(start=start, ceiling=ceiling, cursor=start)

    def run(self, ceiling: int = UINT64_MAX, state: Optional[DownloadState] = None) -> DownloadState:
        if state is None:
            state = self.prepare(ceiling)
        logger.info("grabbing uids from %d to %d", state.start, state.ceiling)

        while state.cursor < state.ceiling:
            if self.stop_requested:
                state.stopped = True
                break
            if self.step(state):
                state.cursor += 1
            elif self._pause(state):
                state.stopped = True
                break

        logger.info("finished at uid %d: stored=%d failed=%d", state.cursor, state.total, state.failed)
        return state

    def step(self, state: DownloadState) -> bool:
        """Process ``state.cursor`` once. Returns False when the uid must be retried."""
        uid = state.cursor
        try:
            ctx = self.pipeline.run(RunContext(uid=uid))
        except DownloaderError as e:
            logger.info("failed uid %d: %s", uid, e, extra={"uid": uid, "status": "failed", "error": type(e).__name__})
            if e.rate_limited:
                return False
            state.failed += 1
            return True

        state.total += 1
        username = ctx.record.username if ctx.record else ""
        logger.info("stored uid %d (%s)", uid, username, extra={"uid": uid, "status": "stored"})
        if state.total % self.settings.progress_every == 0:
            logger.info("%d users stored", state.total)
        return True

    def _pause(self, state: DownloadState) -> bool:
        """Block for the rate-limit pause; True if a stop interrupted it."""
        state.rate_limit_pauses += 1
        seconds = self.settings.rate_limit_pause_seconds
        logger.warning("rate limit reached at uid %d, pausing for %.0f seconds", state.cursor, seconds, extra={"uid": state.cursor, "status": "paused"})
        return bool(self._wait(seconds))
