"""
Domain Layer - Pure business objects with no I/O.
"""

from .entities import Task
from .enums import Channel, IdempotencyMode, TaskStatus
from .value_objects import RepoRef


__all__ = [
    "Channel",
    "IdempotencyMode",
    "RepoRef",
    "Task",
    "TaskStatus",
]
