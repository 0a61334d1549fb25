"""Tag suggestion and processed-task filtering."""

from .classifier import ALL_TAGS, TAG_CATEGORIES, suggest_tags
from .filters import (
    PROCESSED_TAG,
    annotate,
    filter_unprocessed,
    is_processed,
    mark_processed,
)

__all__ = [
    "suggest_tags",
    "TAG_CATEGORIES",
    "ALL_TAGS",
    "PROCESSED_TAG",
    "filter_unprocessed",
    "annotate",
    "is_processed",
    "mark_processed",
]
