"""TaskTaggingService - connects the task client, filter and classifier."""

import logging
from typing import Any, Optional

from src.config import Settings
from src.credentials import AuthError, CredentialCache, CredentialResolver, default_strategies
from src.exceptions import TaggerError
from src.tagging import annotate, filter_unprocessed

from .client import TaskServiceClient
from .exceptions import ValidationError
from .fallback import fallback_records
from .models import FetchOutcome, Task

logger = logging.getLogger(__name__)


def _parse_records(records: list[dict[str, Any]]) -> list[Task]:
    tasks = []
    for record in records:
        try:
            tasks.append(Task.from_api_response(record))
        except (TaggerError, ValueError) as e:
            logger.warning("Skipping malformed task record: %s", e)
    return tasks


class TaskTaggingService:
    """Loads unprocessed tasks with suggestions and saves confirmed tags.

    Example:
        service = TaskTaggingService.from_settings(Settings.from_env())
        outcome = service.load_tasks()
        if outcome.is_degraded:
            print(f"Showing sample tasks: {outcome.reason}")
    """

    def __init__(self, client: TaskServiceClient):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskTaggingService":
        """Wire the resolver, credential cache and client from settings."""
        resolver = CredentialResolver(default_strategies(settings))
        client = TaskServiceClient(
            CredentialCache(resolver),
            base_url=settings.api_base,
            timeout=settings.timeout,
        )
        return cls(client)

    @property
    def client(self) -> TaskServiceClient:
        return self._client

    @property
    def configured_strategies(self) -> list[str]:
        return self._client.credentials.resolver.configured_strategies

    @property
    def remote_configured(self) -> bool:
        """Whether any credential strategy has its inputs."""
        return bool(self.configured_strategies)

    def load_tasks(self) -> FetchOutcome:
        """Fetch, filter and annotate the operator's outstanding tasks.

        A rejected credential is answered with the fallback dataset so the
        operator never faces an empty screen over an integration problem.
        Other failures are returned as FAILED outcomes.

        Returns:
            FetchOutcome tagged OK, DEGRADED or FAILED.
        """
        try:
            records = self._client.fetch_tasks()
        except AuthError as e:
            logger.warning("Task service authentication failed, using fallback tasks: %s", e)
            tasks = annotate(filter_unprocessed(_parse_records(fallback_records())))
            return FetchOutcome.degraded(tasks, reason=str(e))
        except TaggerError as e:
            logger.error("Failed to fetch tasks: %s", e)
            return FetchOutcome.failed(e)

        tasks = annotate(filter_unprocessed(_parse_records(records)))
        logger.info("Loaded %d unprocessed tasks (of %d)", len(tasks), len(records))
        return FetchOutcome.ok(tasks)

    def save_tags(self, task_id: str, tags: Optional[list[str]]) -> Task:
        """Write the operator's confirmed tags back.

        Raises:
            ValidationError: No tags were selected.
            TaskNotFound, PermissionDenied, AuthError, RemoteError: From the client.
        """
        if not task_id:
            raise ValidationError("Missing task id")
        if not tags:
            raise ValidationError("Please select at least one tag")
        return self._client.update_task_tags(task_id, list(tags))
