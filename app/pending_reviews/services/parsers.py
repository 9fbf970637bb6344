from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..types import LogEntry, Revision

logger = logging.getLogger(__name__)


def parse_api_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    normalized = value.replace("Z", "+00:00")
    try:
        timestamp = datetime.fromisoformat(normalized)
    except ValueError:
        if normalized.isdigit() and len(normalized) == 14:
            try:
                timestamp = datetime.strptime(normalized, "%Y%m%d%H%M%S")
            except ValueError:
                logger.warning("Unable to parse API timestamp: %s", value)
                return None
        else:
            logger.warning("Unable to parse API timestamp: %s", value)
            return None
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def format_api_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_optional_int(value) -> int | None:
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_log_event(event: dict) -> LogEntry | None:
    """Build a LogEntry from a ``list=logevents`` result, skipping undated events."""
    timestamp = parse_api_timestamp(event.get("timestamp"))
    if timestamp is None:
        logger.warning("Skipping log event %s without a usable timestamp", event.get("logid"))
        return None
    return LogEntry(
        logid=parse_optional_int(event.get("logid")) or 0,
        timestamp=timestamp,
        user=event.get("user") or "",
        log_type=event.get("type") or "",
        log_action=event.get("action") or "",
        params=event.get("params") or {},
    )


def parse_revision(revision: dict) -> Revision | None:
    """Build a Revision from a ``prop=revisions`` result, skipping undated revisions."""
    timestamp = parse_api_timestamp(revision.get("timestamp"))
    revid = parse_optional_int(revision.get("revid"))
    if timestamp is None or revid is None:
        logger.warning("Skipping revision %s without a usable id or timestamp", revision)
        return None
    return Revision(
        revid=revid,
        parentid=parse_optional_int(revision.get("parentid")) or None,
        timestamp=timestamp,
        user=revision.get("user") or "",
        comment=revision.get("comment") or "",
    )
