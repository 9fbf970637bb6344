"""Configuration of the wiki whose watchlists are shown."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from django.conf import settings

USER_NAMESPACE = "User"
USER_TALK_NAMESPACE = "User talk"


@dataclass(frozen=True)
class WikiSite:
    """Represents the MediaWiki project pending reviews are read from."""

    code: str
    family: str = "wikipedia"
    base_url: str = ""
    script_path: str = "/w"
    username: str = ""

    @classmethod
    def from_settings(cls) -> WikiSite:
        return cls(
            code=settings.PENDING_REVIEWS_WIKI_CODE,
            family=settings.PENDING_REVIEWS_WIKI_FAMILY,
            base_url=settings.PENDING_REVIEWS_WIKI_URL,
            script_path=settings.PENDING_REVIEWS_SCRIPT_PATH,
            username=settings.PENDING_REVIEWS_WIKI_USERNAME,
        )

    def __str__(self) -> str:
        return f"{self.family}:{self.code}"

    def page_url(self, title: str, **query) -> str:
        """Return the ``index.php`` URL of a page with optional query parameters."""
        params = {"title": title.replace(" ", "_"), **query}
        return f"{self.base_url.rstrip('/')}{self.script_path}/index.php?{urlencode(params)}"

    def user_page(self, username: str) -> str:
        return f"{USER_NAMESPACE}:{username}"

    def user_talk_page(self, username: str) -> str:
        return f"{USER_TALK_NAMESPACE}:{username}"
