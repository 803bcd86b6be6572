from __future__ import annotations

from pipelines.runner import RunContext
from services.mapping import to_user_record


class MapRecord:
    def run(self, ctx: RunContext) -> RunContext:
        if ctx.profile is None:
            raise RuntimeError("MapRecord requires a fetched profile")
        ctx.record = to_user_record(ctx.profile)
        return ctx
