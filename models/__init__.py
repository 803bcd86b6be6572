from .graph_user import GraphError, GraphUser
from .user_record import UserRecord

__all__ = [
    "GraphError",
    "GraphUser",
    "UserRecord",
]
