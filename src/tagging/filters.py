"""Processed-task filtering, suggestion annotation and the processed marker."""

from typing import Any, Iterable, Sequence, TypeVar

from .classifier import suggest_tags

PROCESSED_TAG = "processed"

T = TypeVar("T")


def _tags_of(task: Any) -> Sequence[str]:
    if isinstance(task, dict):
        return task.get("tags") or ()
    return getattr(task, "tags", None) or ()


def is_processed(task: Any) -> bool:
    """Check whether a task (model or raw record) carries the processed tag."""
    return PROCESSED_TAG in _tags_of(task)


def filter_unprocessed(tasks: Iterable[T]) -> list[T]:
    """Keep tasks that have not been through the confirmation workflow.

    A task is kept when it has no tags or its tags lack ``processed``.
    Input order is preserved.
    """
    return [task for task in tasks if not is_processed(task)]


def annotate(tasks: Iterable[T]) -> list[T]:
    """Attach suggested tags to each task in place and return them as a list."""
    annotated = []
    for task in tasks:
        task.suggested_tags = suggest_tags(task.title, task.content)
        annotated.append(task)
    return annotated


def mark_processed(tags: Iterable[str]) -> list[str]:
    """Return the tags with the processed marker appended exactly once.

    Duplicates are dropped and first-seen order kept, so applying this to
    its own output gives the same list.
    """
    marked: list[str] = []
    for tag in tags:
        if tag not in marked and tag != PROCESSED_TAG:
            marked.append(tag)
    marked.append(PROCESSED_TAG)
    return marked
