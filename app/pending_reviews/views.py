from __future__ import annotations

import logging
from collections.abc import Sequence
from http import HTTPStatus

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.urls import reverse
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString
from django.utils.translation import gettext, ngettext
from django.views.decorators.http import require_GET
from pywikibot.exceptions import Error as PywikibotError

from .context import RenderContext
from .rows import render_row
from .services import PendingReviewsError, WikiClient
from .services.parsers import parse_optional_int
from .types import PendingReviewItem
from .wiki import WikiSite

logger = logging.getLogger(__name__)


def parse_limit(value: str | None) -> int:
    """Return the number of reviews to show for a ``limit`` request parameter."""
    limit = parse_optional_int(value)
    if limit is None or limit < 1:
        return settings.PENDING_REVIEWS_DEFAULT_LIMIT
    return min(limit, settings.PENDING_REVIEWS_MAX_LIMIT)


def page_header(total: int, limit: int) -> SafeString:
    """Paragraph stating how many reviews are pending and how many are shown."""
    text = ngettext(
        "You have %(count)d pending review.",
        "You have %(count)d pending reviews.",
        total,
    ) % {"count": total}
    if total > limit:
        text += " " + gettext("Showing the oldest %(limit)d.") % {"limit": limit}
    return format_html("<p>{}</p>", text)


def pending_reviews_table(
    items: Sequence[PendingReviewItem], limit: int, context: RenderContext
) -> SafeString:
    rows = format_html_join(
        "",
        "{}",
        ((render_row(item, row_count, context),) for row_count, item in enumerate(items[:limit])),
    )
    return format_html('<table class="pendingreviews-list">{}</table>', rows)


def _clear_notification(
    request: HttpRequest, client: WikiClient, title: str, page_url: str
) -> HttpResponse:
    client.clear_by_user_and_title(request.user.get_username(), title)
    message = format_html(
        gettext("The notification for {title} has been cleared. Return to {link}."),
        title=title,
        link=format_html(
            '<a href="{}" style="font-weight:bold;">{}</a>', page_url, gettext("Pending reviews")
        ),
    )
    return render(
        request,
        "pending_reviews/index.html",
        {"page_title": gettext("Pending reviews"), "content": format_html("<p>{}</p>", message)},
    )


def _upstream_error(request: HttpRequest, exc: Exception) -> HttpResponse:
    return render(
        request,
        "pending_reviews/index.html",
        {
            "page_title": gettext("Pending reviews"),
            "notice": gettext("The wiki could not be queried: %(error)s") % {"error": exc},
        },
        status=HTTPStatus.BAD_GATEWAY,
    )


@login_required
@require_GET
def pending_reviews(request: HttpRequest) -> HttpResponse:
    """List the viewing user's watched pages with unreviewed changes."""
    viewer = request.user.get_username()
    page_url = reverse("pending_reviews")
    wiki = WikiSite.from_settings()
    client = WikiClient(wiki)
    notice = None

    clear_title = request.GET.get("clearNotificationTitle")
    if clear_title:
        namespace = parse_optional_int(request.GET.get("clearNotificationNS")) or 0
        title = client.resolve_title(clear_title, namespace)
        if title:
            try:
                return _clear_notification(request, client, title, page_url)
            except (PywikibotError, PendingReviewsError) as exc:
                logger.exception("Failed to clear notification of %s for %s", title, viewer)
                return _upstream_error(request, exc)
        logger.warning("Ignoring request to clear notification for invalid title %r", clear_title)
        notice = gettext("%(title)s is not a valid page title, nothing was cleared.") % {
            "title": clear_title
        }

    target_user = request.GET.get("user") or viewer
    if target_user != viewer and not request.user.is_staff:
        raise PermissionDenied("Only staff members can view the pending reviews of other users.")

    limit = parse_limit(request.GET.get("limit"))
    context = RenderContext(
        client=client,
        wiki=wiki,
        page_url=page_url,
        can_clear_notifications=viewer == target_user == wiki.username,
    )
    try:
        items = client.get_pending_reviews_list(target_user)
        content = format_html(
            "{}{}",
            page_header(len(items), limit),
            pending_reviews_table(items, limit, context),
        )
    except (PywikibotError, PendingReviewsError) as exc:
        logger.exception("Failed to fetch pending reviews for %s from %s", target_user, wiki)
        return _upstream_error(request, exc)

    if target_user == viewer:
        page_title = gettext("Pending reviews")
    else:
        page_title = gettext("Pending reviews for %(user)s") % {"user": target_user}

    return render(
        request,
        "pending_reviews/index.html",
        {"page_title": page_title, "notice": notice, "content": content},
    )
