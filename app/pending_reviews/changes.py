"""Human-readable descriptions of log entries and revisions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from django.contrib.humanize.templatetags.humanize import naturaltime
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString
from django.utils.translation import gettext
from django.utils.translation import gettext_lazy as _

from .types import LogEntry, MergedEntry, RenderedChange, Revision

if TYPE_CHECKING:
    from .context import RenderContext

LOG_MESSAGES = {
    "approval": {
        "approve": _("Approved by {user}"),
        "unapprove": _("Unapproved by {user}"),
    },
    "delete": {
        "delete": _("Deleted by {user}"),
        "restore": _("Restored by {user}"),
    },
    "import": {
        "upload": _("Imported by {user}"),
    },
    "move": {
        "move": _("Moved to {target} by {user}"),
        "move_redir": _("Moved to {target} over a redirect by {user}"),
    },
    "protect": {
        "protect": _("Protected by {user}"),
        "unprotect": _("Unprotected by {user}"),
        "modify": _("Protection settings changed by {user}"),
    },
    "upload": {
        "upload": _("File uploaded by {user}"),
        "overwrite": _("New version of the file uploaded by {user}"),
    },
}

UNKNOWN_CHANGE_MESSAGE = _("Unknown change by {user}")
# Used when the log entry does not record where the page went.
MOVE_MESSAGES_WITHOUT_TARGET = {
    "move": _("Moved by {user}"),
    "move_redir": _("Moved over a redirect by {user}"),
}
MOVE_ACTIONS = tuple(MOVE_MESSAGES_WITHOUT_TARGET)


def _page_link(title: str, context: RenderContext) -> SafeString:
    return format_html('<a href="{}">{}</a>', context.wiki.page_url(title), title)


def _user_link(username: str, context: RenderContext) -> SafeString:
    return _page_link(context.wiki.user_page(username), context)


def describe_log_entry(entry: LogEntry, context: RenderContext) -> SafeString:
    user = _user_link(entry.user, context)
    message = LOG_MESSAGES.get(entry.log_type, {}).get(entry.log_action)
    if message is None:
        return format_html(str(UNKNOWN_CHANGE_MESSAGE), user=user)

    if entry.log_action in MOVE_ACTIONS:
        target = context.client.get_move_target(entry.params)
        if not target:
            return format_html(str(MOVE_MESSAGES_WITHOUT_TARGET[entry.log_action]), user=user)
        return format_html(str(message), user=user, target=_page_link(target, context))
    return format_html(str(message), user=user)


def describe_revision(revision: Revision, context: RenderContext) -> SafeString:
    user = _user_link(revision.user, context)
    if revision.comment:
        # format_html escapes the comment, so wiki markup and HTML show literally.
        return format_html(
            gettext("Edited by {user} with comment: {comment}"),
            user=user,
            comment=revision.comment,
        )
    return format_html(gettext("Edited by {user}"), user=user)


def describe_change(entry: MergedEntry, context: RenderContext) -> RenderedChange:
    """Classify one timeline entry into a display record."""
    if isinstance(entry, LogEntry):
        description = describe_log_entry(entry, context)
    else:
        description = describe_revision(entry, context)
    return RenderedChange(timestamp=str(naturaltime(entry.timestamp)), description=description)


def changes_list(entries: Iterable[MergedEntry], context: RenderContext) -> SafeString:
    """Render a page's timeline as an unordered list."""
    changes = [describe_change(entry, context) for entry in entries]
    if not changes:
        return format_html("<ul><li>{}</li></ul>", gettext("No changes recorded"))

    items = format_html_join(
        "",
        '<li><span class="pendingreviews-changes-list-time">{}</span> {}</li>',
        ((change.timestamp, change.description) for change in changes),
    )
    return format_html("<ul>{}</ul>", items)
