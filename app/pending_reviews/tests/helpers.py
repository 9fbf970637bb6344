from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest import mock

from pending_reviews.context import RenderContext
from pending_reviews.types import LogEntry, Revision
from pending_reviews.wiki import WikiSite

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)
WIKI = WikiSite(
    code="test",
    family="wikipedia",
    base_url="https://wiki.example",
    script_path="/w",
    username="Reviewer",
)


def at(seconds: int) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


def make_log(
    seconds: int,
    user: str = "Admin",
    log_type: str = "protect",
    log_action: str = "protect",
    params=None,
    logid: int | None = None,
) -> LogEntry:
    return LogEntry(
        logid=logid if logid is not None else seconds,
        timestamp=at(seconds),
        user=user,
        log_type=log_type,
        log_action=log_action,
        params=params or {},
    )


def make_revision(
    seconds: int,
    revid: int | None = None,
    parentid: int | None = None,
    user: str = "Editor",
    comment: str = "",
) -> Revision:
    return Revision(
        revid=revid if revid is not None else seconds,
        parentid=parentid,
        timestamp=at(seconds),
        user=user,
        comment=comment,
    )


def make_context(client=None) -> RenderContext:
    if client is None:
        client = mock.Mock()
        client.get_move_target.return_value = "Target page"
        client.talk_page_exists.return_value = True
    return RenderContext(client=client, wiki=WIKI, page_url="/pending/")
