"""Object readers."""

from .base import ObjectOperations, merge_config, check_result
from .custom import CustomObjectReader, MAX_QUERY_TOTAL_COUNT

__all__ = [
    "ObjectOperations",
    "CustomObjectReader",
    "merge_config",
    "check_result",
    "MAX_QUERY_TOTAL_COUNT",
]
