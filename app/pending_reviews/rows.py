"""Table rows for the pending reviews list.

Every pending review is rendered as two rows: the page title with its action
links, followed by a full-width row listing the changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils.html import format_html
from django.utils.safestring import SafeString
from django.utils.translation import gettext

from .buttons import (
    deleter_talk_button,
    diff_button,
    history_button,
    mark_deleted_reviewed_button,
)
from .changes import changes_list
from .timeline import merge_log_and_revisions
from .types import DeletedPageItem, ExistingPageItem, PendingReviewItem

if TYPE_CHECKING:
    from .context import RenderContext


ROW_ATTRS = (
    'class="pendingreviews-row {row_class} pendingreviews-row-{n}"'
    ' pendingreviews-row-count="{n}"'
)
ROW_PAIR_TEMPLATE = (
    "<tr " + ROW_ATTRS + ">"
    '<td class="pendingreviews-page-title pendingreviews-top-cell">{title}</td>'
    '<td class="pendingreviews-review-links pendingreviews-bottom-cell pendingreviews-top-cell">'
    "{links}</td></tr>"
    "<tr " + ROW_ATTRS + ">"
    '<td colspan="2" class="pendingreviews-bottom-cell">{changes}</td></tr>'
)


def _row_pair(
    row_count: int, title: SafeString, links: SafeString, changes: SafeString
) -> SafeString:
    row_class = "pendingreviews-even-row" if row_count % 2 == 0 else "pendingreviews-odd-row"
    return format_html(
        ROW_PAIR_TEMPLATE,
        row_class=row_class,
        n=row_count,
        title=title,
        links=links,
        changes=changes,
    )


def standard_change_row(
    item: ExistingPageItem, row_count: int, context: RenderContext
) -> SafeString:
    timeline = merge_log_and_revisions(item.log, item.new_revisions)
    links = format_html(
        "{} {}",
        diff_button(item, context.wiki),
        history_button(item, context.wiki),
    )
    return _row_pair(
        row_count,
        format_html("<strong>{}</strong>", item.title),
        links,
        changes_list(timeline, context),
    )


def deleted_page_row(
    item: DeletedPageItem, row_count: int, context: RenderContext
) -> SafeString:
    talk_page_exists = False
    if item.deletion_log:
        talk_page_exists = context.client.talk_page_exists(item.deletion_log[-1].user)

    accept = SafeString("")
    if context.can_clear_notifications:
        accept = mark_deleted_reviewed_button(item.deleted_title, item.deleted_ns, context.page_url)
    links = format_html(
        "{} {}",
        accept,
        deleter_talk_button(item.deletion_log, context.wiki, talk_page_exists),
    )
    title = format_html(
        "<strong>{}</strong>",
        format_html(gettext("The page {title} has been deleted"), title=item.deleted_title),
    )
    return _row_pair(row_count, title, links, changes_list(item.deletion_log, context))


def render_row(item: PendingReviewItem, row_count: int, context: RenderContext) -> SafeString:
    if isinstance(item, DeletedPageItem):
        return deleted_page_row(item, row_count, context)
    return standard_change_row(item, row_count, context)
