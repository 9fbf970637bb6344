from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .services import WikiClient
    from .wiki import WikiSite


@dataclass
class RenderContext:
    """Shared context passed to the row and change renderers."""

    client: WikiClient
    wiki: WikiSite
    page_url: str
    # Clearing works only for the wiki account the client logs in as.
    can_clear_notifications: bool = True
