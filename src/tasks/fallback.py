"""Built-in substitute tasks shown when the task service denies access."""

import copy
from typing import Any

FALLBACK_TASKS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "title": "Review quarterly reports",
        "content": "Need to review and approve all Q4 reports before the deadline",
        "dueDate": "2024-01-15",
        "projectName": "Finance",
        "priority": "High",
        "tags": [],
    },
    {
        "id": "2",
        "title": "Call mom",
        "content": "Check in with mom about weekend plans",
        "dueDate": "2024-01-10",
        "projectName": "Personal",
        "priority": "Normal",
        "tags": [],
    },
    {
        "id": "3",
        "title": "Design new landing page",
        "content": "Create wireframes and mockups for the new product landing page",
        "dueDate": "2024-01-20",
        "projectName": "Marketing",
        "priority": "High",
        "tags": [],
    },
    {
        "id": "4",
        "title": "Grocery shopping",
        "content": "Buy ingredients for dinner this week",
        "dueDate": "2024-01-08",
        "projectName": "Personal",
        "priority": "Normal",
        "tags": [],
    },
    {
        "id": "5",
        "title": "Emergency client meeting",
        "content": "Urgent meeting with client about project delays",
        "dueDate": "2024-01-09",
        "projectName": "Client Relations",
        "priority": "High",
        "tags": [],
    },
)


def fallback_records() -> list[dict[str, Any]]:
    """Return a fresh copy of the fallback records."""
    return copy.deepcopy(list(FALLBACK_TASKS))
