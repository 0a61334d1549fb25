"""Exceptions for the tasks module."""

from src.exceptions import TaggerError


class PermissionDenied(TaggerError):
    """Raised when the task service answers 403 for an authenticated call."""

    status_code = 403


class TaskNotFound(TaggerError):
    """Raised when a task to update does not exist."""

    status_code = 404

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' not found")


class ValidationError(TaggerError):
    """Raised when a save request carries no tags."""

    status_code = 400
