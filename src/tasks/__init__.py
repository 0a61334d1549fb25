"""Remote task service integration.

This module provides the TaskServiceClient for reading tasks and writing
confirmed tags, and the TaskTaggingService that turns a fetch into the
operator's list of unprocessed, annotated tasks.
"""

from .client import TaskServiceClient
from .exceptions import PermissionDenied, TaskNotFound, ValidationError
from .fallback import FALLBACK_TASKS, fallback_records
from .models import FetchOutcome, FetchStatus, Priority, Task
from .service import TaskTaggingService

__all__ = [
    # Main classes
    "TaskServiceClient",
    "TaskTaggingService",
    # Models
    "Task",
    "Priority",
    "FetchOutcome",
    "FetchStatus",
    # Fallback data
    "FALLBACK_TASKS",
    "fallback_records",
    # Exceptions
    "PermissionDenied",
    "TaskNotFound",
    "ValidationError",
]
