from .graph import GraphClientPort
from .repos import UsersRepoPort

__all__ = [
    "GraphClientPort",
    "UsersRepoPort",
]
