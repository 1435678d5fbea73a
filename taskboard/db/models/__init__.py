from .user import User
from .task import Task, Subtask

__all__ = [
    "User",
    "Task",
    "Subtask",
]
