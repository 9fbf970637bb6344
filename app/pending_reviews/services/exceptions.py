from __future__ import annotations


class PendingReviewsError(Exception):
    """Base class for errors raised while collecting pending reviews."""


class WatchlistAccessError(PendingReviewsError):
    """The configured wiki account cannot read or change the requested watchlist."""
