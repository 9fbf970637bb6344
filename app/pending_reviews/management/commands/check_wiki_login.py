import logging

from django.core.management.base import BaseCommand
from pending_reviews.services import WikiClient
from pending_reviews.wiki import WikiSite
from pywikibot.exceptions import NoUsernameError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Tests logging into the configured wiki with Pywikibot."

    def handle(self, *args, **options):
        wiki = WikiSite.from_settings()
        site = WikiClient(wiki).site

        try:
            site.login()
        except NoUsernameError as e:
            logger.error(f"❌ MediaWiki Login Failed: {e}")
            return

        if site.logged_in():
            logger.info(f"✅ Successfully logged into {wiki} as {site.user()}.")
            if wiki.username and site.user() != wiki.username:
                logger.warning(
                    f"⚠️ Logged in as {site.user()} but PENDING_REVIEWS_WIKI_USERNAME "
                    f"is {wiki.username}; only that account's watchlist is read without a token."
                )
        else:
            logger.error(f"❌ Could not log into {wiki}.")
