"""Action links shown beside each pending review."""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlencode

from django.utils.html import format_html
from django.utils.safestring import SafeString
from django.utils.translation import gettext, ngettext

from .types import ExistingPageItem, LogEntry, Revision
from .wiki import WikiSite


def _oldest_revision(revisions: Sequence[Revision]) -> Revision:
    return min(revisions, key=lambda revision: (revision.timestamp, revision.revid))


def diff_button(item: ExistingPageItem, wiki: WikiSite) -> SafeString:
    """
    Link to the diff between the last reviewed revision and the current one.

    The last reviewed revision is the parent of the oldest new revision. When
    there are no new revisions, or the oldest one created the page, the link
    points at the latest revision instead.
    """
    last_reviewed = None
    if item.new_revisions:
        last_reviewed = _oldest_revision(item.new_revisions).parentid or None

    if last_reviewed:
        count = len(item.new_revisions)
        url = wiki.page_url(item.title, diff="cur", oldid=last_reviewed)
        label = ngettext(
            "%(count)d new revision since your last review",
            "%(count)d new revisions since your last review",
            count,
        ) % {"count": count}
    else:
        if item.latest_revid:
            url = wiki.page_url(item.title, oldid=item.latest_revid)
        else:
            url = wiki.page_url(item.title)
        label = gettext("No content changes - view latest")

    return format_html('<a href="{}" class="pendingreviews-green-button">{}</a>', url, label)


def history_button(item: ExistingPageItem, wiki: WikiSite) -> SafeString:
    return format_html(
        '<a href="{}" class="pendingreviews-dark-blue-button">{}</a>',
        wiki.page_url(item.title, action="history"),
        gettext("History"),
    )


def mark_deleted_reviewed_button(title: str, namespace: int, page_url: str) -> SafeString:
    """Link back to this page asking it to clear the notification for a deleted page."""
    query = urlencode({"clearNotificationTitle": title, "clearNotificationNS": namespace})
    return format_html(
        '<a href="{}?{}" class="pendingreviews-red-button pendingreviews-accept-deletion" '
        'pending-namespace="{}" pending-title="{}">{}</a>',
        page_url,
        query,
        namespace,
        title,
        gettext("Accept deletion"),
    )


def deleter_talk_button(
    deletion_log: Sequence[LogEntry], wiki: WikiSite, talk_page_exists: bool
) -> SafeString:
    """Link to the talk page of whoever made the most recent deletion-related action."""
    if not deletion_log:
        return SafeString("")

    deleter = deletion_log[-1].user
    talk_page = wiki.user_talk_page(deleter)
    if talk_page_exists:
        url = wiki.page_url(talk_page)
    else:
        url = wiki.page_url(talk_page, action="edit")

    return format_html(
        '<a href="{}" class="pendingreviews-dark-blue-button">{}</a>',
        url,
        gettext("Contact %(user)s") % {"user": deleter},
    )
