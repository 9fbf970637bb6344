from __future__ import annotations

from .exceptions import PendingReviewsError, WatchlistAccessError
from .parsers import format_api_timestamp, parse_api_timestamp, parse_log_event, parse_revision
from .wiki_client import WikiClient

__all__ = [
    "WikiClient",
    "PendingReviewsError",
    "WatchlistAccessError",
    "parse_api_timestamp",
    "format_api_timestamp",
    "parse_log_event",
    "parse_revision",
]
