"""Records describing a user's pending reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from django.utils.safestring import SafeString


@dataclass(frozen=True)
class LogEntry:
    """An administrative action recorded in the wiki log."""

    logid: int
    timestamp: datetime
    user: str
    log_type: str
    log_action: str
    params: dict | str = field(default_factory=dict)


@dataclass(frozen=True)
class Revision:
    """A stored version of a page produced by an edit."""

    revid: int
    parentid: int | None
    timestamp: datetime
    user: str
    comment: str = ""


MergedEntry = LogEntry | Revision


@dataclass
class ExistingPageItem:
    """A watched page that still exists and changed since the last visit.

    ``new_revisions`` and ``log`` are ordered newest first.
    """

    title: str
    namespace: int = 0
    latest_revid: int | None = None
    notification_timestamp: datetime | None = None
    new_revisions: list[Revision] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)


@dataclass
class DeletedPageItem:
    """A watched page that no longer exists.

    ``deletion_log`` is chronological, so its last entry is the most recent
    deletion-related action.
    """

    deleted_title: str
    deleted_ns: int = 0
    notification_timestamp: datetime | None = None
    deletion_log: list[LogEntry] = field(default_factory=list)


PendingReviewItem = ExistingPageItem | DeletedPageItem


@dataclass(frozen=True)
class RenderedChange:
    timestamp: str
    description: SafeString
