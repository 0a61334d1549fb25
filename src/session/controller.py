"""SessionController - drives a processing session against the tagging service."""

import logging
from typing import Iterable, Optional

from src.exceptions import TaggerError
from src.tasks import FetchStatus, Task, TaskTaggingService

from . import machine
from .machine import ProcessingSession, SessionState

logger = logging.getLogger(__name__)


class SessionController:
    """Runs operator actions through the session state machine.

    Actions run strictly one after another. A save that is still
    outstanding blocks further Skip/Save calls, so at most one write is
    in flight per session.

    Example:
        controller = SessionController(service)
        controller.load()
        while controller.session.current_task:
            controller.save(controller.session.current_task.suggested_tags)
    """

    def __init__(self, service: TaskTaggingService):
        self._service = service
        self._session = ProcessingSession()

    @property
    def session(self) -> ProcessingSession:
        return self._session

    def load(self) -> ProcessingSession:
        """Start or refresh the session by loading tasks."""
        self._session = machine.start_loading(self._session)
        outcome = self._service.load_tasks()
        if outcome.status == FetchStatus.FAILED:
            self._session = machine.load_failed(self._session, outcome.reason or "Failed to load tasks")
        else:
            self._session = machine.tasks_loaded(
                self._session, outcome.tasks, degraded_reason=outcome.reason
            )
        logger.info(
            "Session %s with %d tasks", self._session.state.value, len(self._session.tasks)
        )
        return self._session

    def skip(self) -> ProcessingSession:
        self._session = machine.skip(self._session)
        return self._session

    def save(self, selected_tags: Iterable[str]) -> Optional[Task]:
        """Save tags for the current task.

        Returns:
            The updated task, or None when the save did not go through
            (no-op state or remote failure, see ``session.error``).

        Raises:
            ValidationError: No tags selected.
        """
        if not self._session.can_act:
            return None
        selected_tags = list(selected_tags)
        task = self._session.current_task
        self._session = machine.begin_save(self._session, selected_tags)

        try:
            updated = self._service.save_tags(task.id, selected_tags)
        except TaggerError as e:
            logger.error("Failed to save task %s: %s", task.id, e)
            self._session = machine.save_failed(self._session, str(e))
            return None

        self._session = machine.save_succeeded(self._session)
        return updated

    @property
    def is_completed(self) -> bool:
        return self._session.state == SessionState.COMPLETED
