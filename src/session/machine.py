"""Processing session state machine for the confirmation workflow.

The session is an immutable value. Every transition is a plain function
that takes a session and returns the next one, so the workflow can be
driven and tested without any rendering surface:

    LOADING -> READY(cursor) -> COMPLETED
       |          ^  |
       v          |  +-- skip / save (cursor + 1)
     ERROR -------+ (refresh re-enters LOADING)

Transitions that do not apply to the current state return the session
unchanged.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, Optional

from src.tasks.exceptions import ValidationError
from src.tasks.models import Task


class SessionState(Enum):
    """States of the confirmation workflow."""

    LOADING = "loading"
    READY = "ready"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessingSession:
    """One operator's pass over their unprocessed tasks.

    Attributes:
        state: Current workflow state.
        tasks: Tasks loaded for this session, in presentation order.
        cursor: Index of the visible task; equals len(tasks) once done.
        processed_count: Tasks saved in this session.
        saving: True while a save is outstanding.
        error: Message for the operator after a failed load or save.
        degraded_reason: Set when the tasks are the fallback dataset.
    """

    state: SessionState = SessionState.LOADING
    tasks: tuple[Task, ...] = ()
    cursor: int = 0
    processed_count: int = 0
    saving: bool = False
    error: Optional[str] = None
    degraded_reason: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.cursor <= len(self.tasks):
            raise ValueError(f"cursor {self.cursor} outside 0..{len(self.tasks)}")
        if not 0 <= self.processed_count <= self.cursor:
            raise ValueError(
                f"processed_count {self.processed_count} exceeds cursor {self.cursor}"
            )

    @property
    def current_task(self) -> Optional[Task]:
        """The task shown to the operator, if any."""
        if self.state == SessionState.READY and self.cursor < len(self.tasks):
            return self.tasks[self.cursor]
        return None

    @property
    def remaining(self) -> int:
        return len(self.tasks) - self.cursor

    @property
    def can_act(self) -> bool:
        """Whether Skip and Save are enabled."""
        return self.state == SessionState.READY and not self.saving

    def stats(self) -> dict[str, Any]:
        return {
            "total": len(self.tasks),
            "processed": self.processed_count,
            "remaining": self.remaining,
        }


def _advance(session: ProcessingSession, processed: int) -> ProcessingSession:
    cursor = session.cursor + 1
    state = SessionState.COMPLETED if cursor >= len(session.tasks) else SessionState.READY
    return replace(
        session,
        state=state,
        cursor=cursor,
        processed_count=session.processed_count + processed,
        saving=False,
        error=None,
    )


def start_loading(session: Optional[ProcessingSession] = None) -> ProcessingSession:
    """Enter LOADING on session start or refresh, discarding prior progress."""
    return ProcessingSession(state=SessionState.LOADING)


def tasks_loaded(
    session: ProcessingSession,
    tasks: Iterable[Task],
    degraded_reason: Optional[str] = None,
) -> ProcessingSession:
    """Move from LOADING to READY at the first task (COMPLETED if there are none)."""
    if session.state != SessionState.LOADING:
        return session
    loaded = tuple(tasks)
    return ProcessingSession(
        state=SessionState.READY if loaded else SessionState.COMPLETED,
        tasks=loaded,
        degraded_reason=degraded_reason,
    )


def load_failed(session: ProcessingSession, message: str) -> ProcessingSession:
    """Move from LOADING to ERROR; the operator may refresh to retry."""
    if session.state != SessionState.LOADING:
        return session
    return ProcessingSession(state=SessionState.ERROR, error=message)


def skip(session: ProcessingSession) -> ProcessingSession:
    """Advance past the current task without writing anything."""
    if not session.can_act:
        return session
    return _advance(session, processed=0)


def begin_save(session: ProcessingSession, selected_tags: Iterable[str]) -> ProcessingSession:
    """Mark a save of the current task as outstanding.

    Raises:
        ValidationError: No tags selected. The session is left as it was.
    """
    if not session.can_act:
        return session
    if not list(selected_tags):
        raise ValidationError("Please select at least one tag")
    return replace(session, saving=True, error=None)


def save_succeeded(session: ProcessingSession) -> ProcessingSession:
    """Count the saved task and advance."""
    if session.state != SessionState.READY or not session.saving:
        return session
    return _advance(session, processed=1)


def save_failed(session: ProcessingSession, message: str) -> ProcessingSession:
    """Stay on the current task with an error; the operator may retry or skip."""
    if session.state != SessionState.READY or not session.saving:
        return session
    return replace(session, saving=False, error=message)
