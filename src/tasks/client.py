"""TaskServiceClient for the remote task REST API."""

import logging
from typing import Any, Optional

import requests

from src.credentials import AuthError, CredentialCache
from src.exceptions import RemoteError
from src.tagging import mark_processed

from .exceptions import PermissionDenied, TaskNotFound
from .models import Task

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class TaskServiceClient:
    """Reads tasks from and writes tags to the remote task service.

    Every call carries the bearer credential from the cache. A 401 drops
    the cached credential, resolves a new one and retries the call once;
    a second 401 raises AuthError.

    Example usage:
        cache = CredentialCache(CredentialResolver(default_strategies(settings)))
        client = TaskServiceClient(cache, base_url=settings.api_base)
        raw = client.fetch_tasks()
    """

    def __init__(
        self,
        credentials: CredentialCache,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            credentials: Credential cache owned by this client.
            base_url: Base URL of the task REST API.
            timeout: Seconds before a call is abandoned.
            session: Pre-built requests session (for testing).
        """
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def credentials(self) -> CredentialCache:
        return self._credentials

    def _send(self, method: str, path: str, json_body: Any = None) -> requests.Response:
        credential = self._credentials.get()
        headers = {"Content-Type": "application/json", **credential.authorization_header()}
        try:
            return self._session.request(
                method,
                f"{self._base_url}{path}",
                headers=headers,
                json=json_body,
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise RemoteError(f"Task service timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise RemoteError(f"Task service request failed: {e}") from e

    def _handle_error_response(self, response: requests.Response, context: str, task_id: str = "") -> None:
        """Convert a non-2xx response to the matching exception.

        Raises:
            AuthError: 401.
            PermissionDenied: 403.
            TaskNotFound: 404 on a call about a single task.
            RemoteError: Anything else.
        """
        status_code = response.status_code
        logger.error("Task service error (status=%d): %s", status_code, context)

        if status_code == 401:
            raise AuthError("Task service authentication failed. Please check your credentials.")
        elif status_code == 403:
            raise PermissionDenied("Access denied. Please check your task service permissions.")
        elif status_code == 404 and task_id:
            raise TaskNotFound(task_id)
        else:
            raise RemoteError(f"{context}: status {status_code}", status_code=status_code)

    def _request(self, method: str, path: str, context: str, json_body: Any = None, task_id: str = "") -> Any:
        response = self._send(method, path, json_body)
        if response.status_code == 401:
            logger.warning("Task service rejected credential, re-resolving once")
            self._credentials.invalidate()
            response = self._send(method, path, json_body)

        if not response.ok:
            self._handle_error_response(response, context, task_id)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"{context}: response is not JSON") from e

    def fetch_tasks(self) -> list[dict[str, Any]]:
        """Fetch the full task collection.

        Returns:
            The raw task records, unmodified.

        Raises:
            CredentialError: No credential strategy is configured.
            AuthError: The credential was rejected twice.
            PermissionDenied: The credential lacks access.
            RemoteError: Any other failure, including timeouts.
        """
        records = self._request("GET", "/tasks", "Failed to fetch tasks")
        if not isinstance(records, list):
            raise RemoteError("Failed to fetch tasks: expected a list of tasks")
        logger.info("Fetched %d tasks from task service", len(records))
        return records

    def update_task_tags(self, task_id: str, tags: list[str]) -> Task:
        """Write confirmed tags back and mark the task processed.

        The ``processed`` marker is appended once, however often the same
        tags are sent. There is no rollback once this returns.

        Args:
            task_id: The task to update.
            tags: Tags confirmed by the operator.

        Returns:
            The updated Task.

        Raises:
            TaskNotFound: The task does not exist.
            PermissionDenied: The credential lacks write access.
            AuthError: The credential was rejected twice.
            RemoteError: Any other failure.
        """
        body = {"tags": mark_processed(tags)}
        result = self._request(
            "PUT",
            f"/tasks/{task_id}",
            f"Failed to update task {task_id}",
            json_body=body,
            task_id=task_id,
        )
        if not isinstance(result, dict):
            result = {}
        # Some deployments answer with an empty body
        updated = Task.from_api_response({"id": task_id, **body, **result})
        logger.info("Tagged task %s with %s", task_id, ", ".join(body["tags"]))
        return updated
