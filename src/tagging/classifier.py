"""Keyword based tag suggestions for task text."""

# Declaration order is the order suggestions come out in.
TAG_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("work", ("meeting", "project", "deadline", "report", "presentation", "client", "email", "call")),
    ("personal", ("family", "home", "health", "exercise", "diet", "hobby", "travel", "shopping")),
    ("urgent", ("asap", "urgent", "emergency", "critical", "deadline", "due")),
    ("important", ("important", "priority", "key", "essential", "critical")),
    ("low-priority", ("low", "minor", "optional", "nice-to-have", "when-time")),
    ("creative", ("design", "creative", "art", "writing", "content", "marketing", "brand")),
)

DETAILED_TAG = "detailed"
DETAILED_MIN_LENGTH = 100

REVIEW_TAG = "review"
REVIEW_KEYWORDS = ("review", "check")

# Tags offered to the operator on every task.
ALL_TAGS: tuple[str, ...] = (
    "work",
    "personal",
    "urgent",
    "important",
    "low-priority",
    "creative",
    "detailed",
    "review",
    "meeting",
    "project",
    "health",
    "family",
    "shopping",
    "travel",
    "exercise",
)


def suggest_tags(title: str, content: str | None = "") -> list[str]:
    """Suggest tags for a task from its title and content.

    Matching is a case-insensitive substring test over ``title + " " +
    content``. Category tags come first in table order, followed by
    ``detailed`` for long text and ``review`` for review/check wording.

    Args:
        title: Task title.
        content: Task body, may be empty or None.

    Returns:
        Ordered list of suggested tags without duplicates.
    """
    text = f"{title or ''} {content or ''}".lower()
    suggestions: list[str] = []

    for tag, keywords in TAG_CATEGORIES:
        if any(keyword in text for keyword in keywords):
            suggestions.append(tag)

    if len(text) > DETAILED_MIN_LENGTH and DETAILED_TAG not in suggestions:
        suggestions.append(DETAILED_TAG)

    if any(keyword in text for keyword in REVIEW_KEYWORDS) and REVIEW_TAG not in suggestions:
        suggestions.append(REVIEW_TAG)

    return suggestions
