"""Data models for the tasks module."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

from src.exceptions import TaggerError
from src.tagging import PROCESSED_TAG


class Priority(Enum):
    """Task priority levels."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"

    @classmethod
    def parse(cls, value: Any) -> "Priority":
        """Parse a priority from the task service.

        Accepts TickTick's numeric levels (0 none, 1 low, 3 medium, 5 high)
        and label strings. Anything unrecognised is NORMAL.
        """
        if isinstance(value, Priority):
            return value
        if isinstance(value, bool):
            return cls.NORMAL
        if isinstance(value, int):
            if value >= 5:
                return cls.HIGH
            if value == 1:
                return cls.LOW
            return cls.NORMAL
        if isinstance(value, str):
            label = value.strip().lower()
            if label in ("high", "urgent"):
                return cls.HIGH
            if label == "low":
                return cls.LOW
        return cls.NORMAL


@dataclass
class Task:
    """A task from the remote task service.

    Attributes:
        id: Identifier, unique within the task service.
        title: Task title.
        content: Free text body, may be empty.
        due_date: Optional due date.
        project_name: Name of the project/list the task belongs to.
        priority: Priority level.
        tags: Tags currently stored on the task.
        suggested_tags: Derived suggestions, never written back.
    """

    id: str
    title: str
    content: str = ""
    due_date: Optional[date] = None
    project_name: Optional[str] = None
    priority: Priority = Priority.NORMAL
    tags: list[str] = field(default_factory=list)
    suggested_tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the browser wire format."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "projectName": self.project_name,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "suggestedTags": list(self.suggested_tags),
        }

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Task":
        """Create from a task service record.

        Raises:
            TaggerError: If the record is not an object or has no id.
        """
        if not isinstance(data, dict):
            raise TaggerError("Task record is not an object")
        if not data.get("id"):
            raise TaggerError("Task record without an id")

        due_date = None
        due = data.get("dueDate") or data.get("due_date")
        if due:
            # RFC 3339 timestamps and plain dates both start with the date
            due_date = date.fromisoformat(str(due)[:10])

        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            content=data.get("content") or "",
            due_date=due_date,
            project_name=data.get("projectName") or data.get("project_name"),
            priority=Priority.parse(data.get("priority")),
            tags=list(data.get("tags") or []),
        )

    @property
    def is_processed(self) -> bool:
        """Check if the task went through the confirmation workflow."""
        return PROCESSED_TAG in self.tags


class FetchStatus(Enum):
    """Outcome of loading tasks for the operator."""

    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class FetchOutcome:
    """Tagged result of a task load.

    OK carries remote tasks, DEGRADED carries the fallback dataset and the
    reason it was used, FAILED carries the typed error and no tasks.
    """

    status: FetchStatus
    tasks: list[Task] = field(default_factory=list)
    reason: Optional[str] = None
    error: Optional[TaggerError] = None

    @classmethod
    def ok(cls, tasks: list[Task]) -> "FetchOutcome":
        return cls(status=FetchStatus.OK, tasks=tasks)

    @classmethod
    def degraded(cls, tasks: list[Task], reason: str) -> "FetchOutcome":
        return cls(status=FetchStatus.DEGRADED, tasks=tasks, reason=reason)

    @classmethod
    def failed(cls, error: TaggerError) -> "FetchOutcome":
        return cls(status=FetchStatus.FAILED, reason=str(error), error=error)

    @property
    def is_degraded(self) -> bool:
        return self.status == FetchStatus.DEGRADED

    @property
    def source(self) -> str:
        """Where the tasks came from, for the API response."""
        return "fallback" if self.is_degraded else "remote"
