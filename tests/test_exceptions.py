"""Tests for the error taxonomy shared across packages."""

import pytest

import src.credentials.exceptions as credential_errors
import src.tasks.exceptions as task_errors
from src.credentials import AuthError, CredentialError
from src.exceptions import RemoteError, TaggerError
from src.tasks import PermissionDenied, TaskNotFound, ValidationError


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error,status",
        [
            (TaggerError("x"), 500),
            (RemoteError("x"), 502),
            (CredentialError("x"), 503),
            (AuthError("x"), 401),
            (PermissionDenied("x"), 403),
            (TaskNotFound("t1"), 404),
            (ValidationError("x"), 400),
        ],
    )
    def test_status_code(self, error, status):
        assert isinstance(error, TaggerError)
        assert error.status_code == status


class TestPackageErrors:
    def test_credential_errors_live_in_credentials(self):
        assert AuthError is credential_errors.AuthError
        assert CredentialError is credential_errors.CredentialError

    def test_task_errors_live_in_tasks(self):
        assert PermissionDenied is task_errors.PermissionDenied
        assert TaskNotFound is task_errors.TaskNotFound
        assert ValidationError is task_errors.ValidationError

    def test_context_kept_on_instance(self):
        assert TaskNotFound("t9").task_id == "t9"
        assert str(TaskNotFound("t9")) == "Task 't9' not found"
        assert RemoteError("bad gateway", status_code=503).remote_status == 503
        assert AuthError("rejected", failures=[("oauth", "invalid_client")]).failures == [
            ("oauth", "invalid_client")
        ]
        assert CredentialError("none").failures == []
