"""Interleaving of a page's log entries and revisions."""

from __future__ import annotations

from collections.abc import Sequence

from .types import LogEntry, MergedEntry, Revision


def merge_log_and_revisions(
    log: Sequence[LogEntry], revisions: Sequence[Revision]
) -> list[MergedEntry]:
    """
    Merge two newest-first sequences into one newest-first timeline.

    A revision is taken only when it is strictly newer than the current log
    entry, so entries sharing a timestamp list the log entry first. The
    relative order within each input is preserved.
    """
    merged: list[MergedEntry] = []
    log_index = 0
    rev_index = 0

    while log_index < len(log) and rev_index < len(revisions):
        if revisions[rev_index].timestamp > log[log_index].timestamp:
            merged.append(revisions[rev_index])
            rev_index += 1
        else:
            merged.append(log[log_index])
            log_index += 1

    merged.extend(revisions[rev_index:])
    merged.extend(log[log_index:])
    return merged
