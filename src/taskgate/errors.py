"""Errors raised by the task registry."""

from __future__ import annotations


class TaskNotFoundError(LookupError):
    """Raised when a task id does not resolve to a registered task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id!r}")
        self.task_id = task_id
