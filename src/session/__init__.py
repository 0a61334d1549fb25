"""Operator confirmation workflow: one task at a time, skip or save."""

from .controller import SessionController
from .machine import (
    ProcessingSession,
    SessionState,
    begin_save,
    load_failed,
    save_failed,
    save_succeeded,
    skip,
    start_loading,
    tasks_loaded,
)

__all__ = [
    "SessionController",
    "ProcessingSession",
    "SessionState",
    "start_loading",
    "tasks_loaded",
    "load_failed",
    "skip",
    "begin_save",
    "save_succeeded",
    "save_failed",
]
