"""Unit tests for the TaskServiceClient."""

from unittest.mock import MagicMock

import pytest
import requests

from src.credentials import AuthError, CredentialCache, CredentialError
from src.exceptions import RemoteError
from src.tasks import PermissionDenied, Task, TaskNotFound, TaskServiceClient
from tests.tagger_test_helpers import make_cache, make_record, make_response

BASE_URL = "https://api.example.com/api/v2"


def _client(responses, tokens=("tok-1", "tok-2")):
    cache, resolver = make_cache(*tokens)
    session = MagicMock()
    session.request.side_effect = responses
    client = TaskServiceClient(cache, base_url=BASE_URL, timeout=10.0, session=session)
    return client, session, resolver


def _auth_header(call) -> str:
    return call.kwargs["headers"]["Authorization"]


class TestFetchTasks:
    """Tests for fetch_tasks()."""

    def test_returns_raw_records(self):
        records = [make_record("1", tags=["processed"]), make_record("2")]
        client, session, _ = _client([make_response(200, records)])

        assert client.fetch_tasks() == records
        session.request.assert_called_once_with(
            "GET",
            f"{BASE_URL}/tasks",
            headers={"Content-Type": "application/json", "Authorization": "Bearer tok-1"},
            json=None,
            timeout=10.0,
        )

    def test_retries_once_after_401(self):
        records = [make_record("1")]
        client, session, resolver = _client([make_response(401), make_response(200, records)])

        assert client.fetch_tasks() == records
        assert session.request.call_count == 2
        assert _auth_header(session.request.call_args_list[0]) == "Bearer tok-1"
        assert _auth_header(session.request.call_args_list[1]) == "Bearer tok-2"
        assert resolver.resolve.call_count == 2

    def test_second_401_raises_auth_error(self):
        client, session, _ = _client([make_response(401), make_response(401)])
        with pytest.raises(AuthError):
            client.fetch_tasks()
        assert session.request.call_count == 2

    def test_403_is_not_retried(self):
        client, session, _ = _client([make_response(403)])
        with pytest.raises(PermissionDenied):
            client.fetch_tasks()
        assert session.request.call_count == 1

    def test_404_on_collection_is_remote_error(self):
        client, _, _ = _client([make_response(404)])
        with pytest.raises(RemoteError):
            client.fetch_tasks()

    def test_server_error(self):
        client, _, _ = _client([make_response(503)])
        with pytest.raises(RemoteError) as exc_info:
            client.fetch_tasks()
        assert exc_info.value.remote_status == 503

    def test_timeout(self):
        client, _, _ = _client(requests.Timeout("read timed out"))
        with pytest.raises(RemoteError, match="timed out"):
            client.fetch_tasks()

    def test_connection_error(self):
        client, _, _ = _client(requests.ConnectionError("refused"))
        with pytest.raises(RemoteError):
            client.fetch_tasks()

    def test_non_json_body(self):
        client, _, _ = _client([make_response(200, ValueError("bad json"))])
        with pytest.raises(RemoteError, match="not JSON"):
            client.fetch_tasks()

    def test_non_list_body(self):
        client, _, _ = _client([make_response(200, {"tasks": []})])
        with pytest.raises(RemoteError):
            client.fetch_tasks()

    def test_no_credentials(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = CredentialError("no credentials configured")

        session = MagicMock()
        client = TaskServiceClient(CredentialCache(resolver), base_url=BASE_URL, session=session)
        with pytest.raises(CredentialError):
            client.fetch_tasks()
        session.request.assert_not_called()


class TestUpdateTaskTags:
    """Tests for update_task_tags()."""

    def test_appends_processed(self):
        record = make_record("t1", tags=["work", "urgent", "processed"])
        client, session, _ = _client([make_response(200, record)])

        task = client.update_task_tags("t1", ["work", "urgent"])

        assert isinstance(task, Task)
        assert task.tags == ["work", "urgent", "processed"]
        call = session.request.call_args
        assert call.args == ("PUT", f"{BASE_URL}/tasks/t1")
        assert call.kwargs["json"] == {"tags": ["work", "urgent", "processed"]}

    def test_sentinel_not_duplicated(self):
        client, session, _ = _client([make_response(200, make_record("t1"))])
        client.update_task_tags("t1", ["work", "processed"])
        assert session.request.call_args.kwargs["json"] == {"tags": ["work", "processed"]}

    def test_same_body_when_repeated(self):
        client, session, _ = _client(
            [make_response(200, make_record("t1")), make_response(200, make_record("t1"))]
        )
        client.update_task_tags("t1", ["work"])
        client.update_task_tags("t1", ["work"])
        first, second = session.request.call_args_list
        assert first.kwargs["json"] == second.kwargs["json"]

    def test_empty_body_response(self):
        client, _, _ = _client([make_response(200, None)])
        task = client.update_task_tags("t1", ["work"])
        assert task.id == "t1"
        assert task.tags == ["work", "processed"]

    def test_not_found(self):
        client, _, _ = _client([make_response(404)])
        with pytest.raises(TaskNotFound) as exc_info:
            client.update_task_tags("missing", ["work"])
        assert exc_info.value.task_id == "missing"

    def test_forbidden(self):
        client, _, _ = _client([make_response(403)])
        with pytest.raises(PermissionDenied):
            client.update_task_tags("t1", ["work"])

    def test_retries_once_after_401(self):
        client, session, _ = _client([make_response(401), make_response(200, make_record("t1"))])
        client.update_task_tags("t1", ["work"])
        assert session.request.call_count == 2
        assert _auth_header(session.request.call_args_list[1]) == "Bearer tok-2"

    def test_second_401_raises_auth_error(self):
        client, _, _ = _client([make_response(401), make_response(401)])
        with pytest.raises(AuthError):
            client.update_task_tags("t1", ["work"])

    def test_other_failure(self):
        client, _, _ = _client([make_response(500)])
        with pytest.raises(RemoteError):
            client.update_task_tags("t1", ["work"])
