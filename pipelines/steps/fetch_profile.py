from __future__ import annotations

from pipelines.runner import RunContext
from ports.graph import GraphClientPort


class FetchProfile:
    def __init__(self, client: GraphClientPort) -> None:
        self.client = client

    def run(self, ctx: RunContext) -> RunContext:
        ctx.profile = self.client.fetch_profile(ctx.uid)
        return ctx
