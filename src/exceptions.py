"""Base exceptions shared by the task tagger packages.

Package-specific errors live beside their package
(``src/credentials/exceptions.py``, ``src/tasks/exceptions.py``).
"""


class TaggerError(Exception):
    """Base exception for all task tagger errors.

    Attributes:
        status_code: HTTP status the API layer answers with.
    """

    status_code = 500


class RemoteError(TaggerError):
    """Raised for a transport failure or an unexpected remote answer."""

    status_code = 502

    def __init__(self, message: str, status_code: int | None = None):
        self.remote_status = status_code
        super().__init__(message)
