from __future__ import annotations

from pipelines.runner import RunContext
from ports.repos import UsersRepoPort


class PersistRecord:
    def __init__(self, repo: UsersRepoPort) -> None:
        self.repo = repo

    def run(self, ctx: RunContext) -> RunContext:
        if ctx.record is None:
            raise RuntimeError("PersistRecord requires a mapped record")
        self.repo.store(ctx.record)
        return ctx
