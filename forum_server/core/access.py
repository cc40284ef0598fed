"""
Topic access policy.

One rule decides who sees a topic's content, and every read path goes
through it:

    public topic              -> everyone sees posts and members
    private topic, member     -> full content
    private topic, non-member -> metadata only (empty lists, not an error)

Admin-gated operations call require_admin before they mutate anything.
"""

from __future__ import annotations

import uuid
from typing import Optional

from forum_server.core.errors import UnauthorizedError
from forum_server.store import TopicStore
from forum_shared.schemas.common import MemberStatus, Visibility


def can_view_content(visibility: Visibility, status: Optional[MemberStatus]) -> bool:
    if visibility == Visibility.PUBLIC:
        return True
    return status is not None


async def is_member(store: TopicStore, topic_id: uuid.UUID, user_id: Optional[uuid.UUID]) -> bool:
    if user_id is None:
        return False
    return await store.is_member(topic_id, user_id)


async def is_admin(store: TopicStore, topic_id: uuid.UUID, user_id: Optional[uuid.UUID]) -> bool:
    if user_id is None:
        return False
    return await store.is_admin(topic_id, user_id)


async def require_admin(store: TopicStore, topic_id: uuid.UUID, user_id: Optional[uuid.UUID]) -> None:
    """Requires admin status in the topic."""
    if not await is_admin(store, topic_id, user_id):
        raise UnauthorizedError("Topic admin access required")

