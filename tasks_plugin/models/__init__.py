"""In-memory entity models for task lists."""

from .task import Task, TaskIdentity, TaskList, TaskStatus, utcnow

__all__ = ["Task", "TaskIdentity", "TaskList", "TaskStatus", "utcnow"]
