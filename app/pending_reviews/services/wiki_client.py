from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import pywikibot
from django.conf import settings
from pywikibot.exceptions import InvalidTitleError

from ..types import DeletedPageItem, ExistingPageItem, LogEntry, PendingReviewItem, Revision
from .exceptions import WatchlistAccessError
from .parsers import (
    format_api_timestamp,
    parse_api_timestamp,
    parse_log_event,
    parse_optional_int,
    parse_revision,
)

if TYPE_CHECKING:
    from ..wiki import WikiSite

logger = logging.getLogger(__name__)

os.environ.setdefault("PYWIKIBOT2_NO_USER_CONFIG", "1")
os.environ.setdefault("PYWIKIBOT_NO_USER_CONFIG", "2")

DELETION_LOG_TYPES = ("delete", "move")
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class WikiClient:
    """Client reading watchlists, revisions and log entries for a wiki."""

    def __init__(self, wiki: WikiSite):
        self.wiki = wiki
        self.site = pywikibot.Site(code=wiki.code, fam=wiki.family)

    def _query_all(self, result_key: str, **params: Any) -> list[dict]:
        """Run a query and follow API continuation until all results are read."""
        results: list[dict] = []
        continuation: dict[str, Any] = {}
        while True:
            request = self.site.simple_request(
                action="query", formatversion=2, **{**params, **continuation}
            )
            response = request.submit()
            results.extend(response.get("query", {}).get(result_key, []) or [])
            continuation = response.get("continue") or {}
            if not continuation:
                return results

    def _query_page(self, **params: Any) -> dict:
        """Query a single page, collecting its revisions across continued batches."""
        page: dict | None = None
        continuation: dict[str, Any] = {}
        while True:
            request = self.site.simple_request(
                action="query", formatversion=2, **{**params, **continuation}
            )
            response = request.submit()
            pages = response.get("query", {}).get("pages", []) or []
            if pages:
                revisions = list(pages[0].get("revisions", []) or [])
                if page is None:
                    page = {**pages[0], "revisions": revisions}
                else:
                    page["revisions"].extend(revisions)
            continuation = response.get("continue") or {}
            if not continuation:
                return page or {"missing": True}

    def _watchlist_owner_params(self, username: str) -> dict[str, str]:
        if username == self.wiki.username:
            return {}
        token = settings.PENDING_REVIEWS_WATCHLIST_TOKENS.get(username)
        if not token:
            raise WatchlistAccessError(f"No watchlist token is configured for {username}")
        return {"wrowner": username, "wrtoken": token}

    def get_pending_reviews_list(self, username: str) -> list[PendingReviewItem]:
        """Return the watched pages of a user that changed since their last visit.

        Items are ordered by notification timestamp, oldest first.
        """
        watched = self._query_all(
            "watchlistraw",
            list="watchlistraw",
            wrshow="changed",
            wrprop="changed",
            wrlimit="max",
            **self._watchlist_owner_params(username),
        )

        items: list[PendingReviewItem] = []
        for entry in watched:
            title = entry.get("title")
            if not title:
                continue
            namespace = parse_optional_int(entry.get("ns")) or 0
            since = parse_api_timestamp(entry.get("changed"))
            items.append(self.get_pending_review_item(title, namespace, since))

        items.sort(key=lambda item: item.notification_timestamp or _EPOCH)
        logger.info("Found %s pending reviews for %s on %s", len(items), username, self.wiki)
        return items

    def get_pending_review_item(
        self, title: str, namespace: int, since: datetime | None
    ) -> PendingReviewItem:
        params: dict[str, Any] = {"titles": title, "prop": "info"}
        if since is not None:
            params.update(
                prop="info|revisions",
                rvprop="ids|timestamp|user|comment",
                rvlimit="max",
                rvend=format_api_timestamp(since),
            )

        page = self._query_page(**params)

        if page.get("missing") or page.get("invalid"):
            logger.debug("Watched page %s no longer exists", title)
            return DeletedPageItem(
                deleted_title=page.get("title", title),
                deleted_ns=parse_optional_int(page.get("ns")) or namespace,
                notification_timestamp=since,
                deletion_log=self.get_deletion_log(title, since),
            )

        revisions: list[Revision] = []
        for data in page.get("revisions", []) or []:
            revision = parse_revision(data)
            if revision is not None:
                revisions.append(revision)

        return ExistingPageItem(
            title=page.get("title", title),
            namespace=parse_optional_int(page.get("ns")) or namespace,
            latest_revid=parse_optional_int(page.get("lastrevid")),
            notification_timestamp=since,
            new_revisions=revisions,
            log=self.get_log_entries(title, since),
        )

    def get_log_entries(
        self, title: str, since: datetime | None, newest_first: bool = True
    ) -> list[LogEntry]:
        """Fetch the log entries of a page recorded at or after ``since``."""
        params: dict[str, Any] = {
            "list": "logevents",
            "letitle": title,
            "leprop": "ids|title|type|user|timestamp|details",
            "lelimit": "max",
            "ledir": "older" if newest_first else "newer",
        }
        if since is not None:
            params["leend" if newest_first else "lestart"] = format_api_timestamp(since)

        entries: list[LogEntry] = []
        for event in self._query_all("logevents", **params):
            entry = parse_log_event(event)
            if entry is not None:
                entries.append(entry)
        return entries

    def get_deletion_log(self, title: str, since: datetime | None) -> list[LogEntry]:
        """Chronological delete and move entries explaining why a page is gone."""
        return [
            entry
            for entry in self.get_log_entries(title, since, newest_first=False)
            if entry.log_type in DELETION_LOG_TYPES
        ]

    def clear_by_user_and_title(self, username: str, title: str) -> None:
        """Mark a watched page as reviewed by resetting its notification timestamp."""
        if username != self.wiki.username:
            raise WatchlistAccessError(
                f"Notifications can only be cleared for {self.wiki.username or 'the wiki account'}"
            )
        self.site.login()
        request = self.site.simple_request(
            action="setnotificationtimestamp",
            titles=title,
            token=self.site.tokens["csrf"],
            formatversion=2,
        )
        request.submit()
        logger.info("Cleared notification timestamp of %s for %s on %s", title, username, self.wiki)

    @staticmethod
    def get_move_target(params: dict | str) -> str:
        """Extract the destination title from the parameters of a move log entry."""
        if isinstance(params, dict):
            return str(params.get("target_title") or params.get("4::target") or "")
        if params:
            return str(params).split("\n", 1)[0].strip()
        return ""

    def resolve_title(self, text: str, namespace: int = 0) -> str | None:
        """Return the normalised full title, or None if ``text`` is not a valid title."""
        try:
            return pywikibot.Page(self.site, text, ns=namespace).title()
        except (InvalidTitleError, ValueError):
            logger.warning("Invalid title %r in namespace %s", text, namespace)
            return None

    def talk_page_exists(self, username: str) -> bool:
        return pywikibot.Page(self.site, self.wiki.user_talk_page(username)).exists()
