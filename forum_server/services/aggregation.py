"""
Row-collapsing helpers shared by every topic view.

Rows may arrive repeated when a query joins one entity against another
(one post x three members gives three copies of the post). These helpers
collapse them to one entry per id and fix the ordering, so no view has to
re-implement its own grouping loop.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any, Optional


def distinct_by_id(rows: Iterable[dict], key: str = "id") -> list[dict]:
    """Keep the first row for each id, preserving order. Rows with a null id are dropped."""
    seen: set[Any] = set()
    result: list[dict] = []
    for row in rows:
        row_id = row.get(key)
        if row_id is None or row_id in seen:
            continue
        seen.add(row_id)
        result.append(row)
    return result


def _sort_key(created_at: Optional[datetime]) -> datetime:
    if created_at is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if created_at.tzinfo is None:
        # SQLite hands back naive timestamps; they are stored as UTC
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def newest_first(posts: Iterable[dict]) -> list[dict]:
    """Distinct posts ordered by creation time, most recent first."""
    return sorted(
        distinct_by_id(posts),
        key=lambda p: _sort_key(p.get("created_at")),
        reverse=True,
    )


def group_by_topic(
    topic_ids: Sequence[uuid.UUID],
    posts: Iterable[dict],
    limit: Optional[int] = None,
) -> dict[uuid.UUID, list[dict]]:
    """Newest-first posts per topic. Every topic id gets a key, even with no posts."""
    grouped: dict[uuid.UUID, list[dict]] = {tid: [] for tid in topic_ids}
    for post in newest_first(posts):
        bucket = grouped.get(post["topic_id"])
        if bucket is None:
            continue
        if limit is None or len(bucket) < limit:
            bucket.append(post)
    return grouped
