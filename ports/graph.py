from __future__ import annotations

from typing import Protocol

from models.graph_user import GraphUser


class GraphClientPort(Protocol):
    def fetch_profile(self, uid: int) -> GraphUser:
        ...
