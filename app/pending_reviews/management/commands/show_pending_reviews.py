"""Management command printing a user's pending reviews."""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.html import strip_tags
from pending_reviews.changes import describe_change
from pending_reviews.context import RenderContext
from pending_reviews.services import PendingReviewsError, WikiClient
from pending_reviews.timeline import merge_log_and_revisions
from pending_reviews.types import DeletedPageItem
from pending_reviews.wiki import WikiSite
from pywikibot.exceptions import Error as PywikibotError


class Command(BaseCommand):
    help = "List the watched pages of a user that changed since their last visit"

    def add_arguments(self, parser):
        parser.add_argument("username", help="Wiki user whose watchlist is inspected")
        parser.add_argument(
            "--limit",
            type=int,
            default=settings.PENDING_REVIEWS_DEFAULT_LIMIT,
            help="Maximum number of pages to list",
        )

    def handle(self, *args, **options):
        wiki = WikiSite.from_settings()
        client = WikiClient(wiki)
        context = RenderContext(
            client=client, wiki=wiki, page_url="", can_clear_notifications=False
        )

        try:
            items = client.get_pending_reviews_list(options["username"])
        except (PywikibotError, PendingReviewsError) as exc:
            raise CommandError(
                f"Could not read the watchlist of {options['username']}: {exc}"
            ) from exc

        self.stdout.write(
            self.style.SUCCESS(f"\n{len(items)} pending reviews for {options['username']}:\n")
        )
        for item in items[: options["limit"]]:
            if isinstance(item, DeletedPageItem):
                self.stdout.write(self.style.WARNING(f"{item.deleted_title} (deleted)"))
                entries = item.deletion_log
            else:
                self.stdout.write(item.title)
                entries = merge_log_and_revisions(item.log, item.new_revisions)

            for entry in entries:
                change = describe_change(entry, context)
                self.stdout.write(f"  {change.timestamp:>20s}  {strip_tags(change.description)}")
