from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

from models.graph_user import GraphUser
from models.user_record import UserRecord


@dataclass
class RunContext:
    """State carried through the steps for a single uid."""

    uid: int
    profile: Optional[GraphUser] = None
    record: Optional[UserRecord] = None


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        for step in self.steps:
            ctx = step.run(ctx)
        return ctx
