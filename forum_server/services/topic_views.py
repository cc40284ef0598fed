"""
Topic read models.

Builds the browse page, the single-topic page and the admin panel. Each view
is read inside one store transaction, filtered through the access policy,
and collapsed with the shared aggregation helpers.
"""

from __future__ import annotations

import uuid
from typing import Optional

from forum_server.core import access
from forum_server.core.errors import NotFoundError, UnauthorizedError
from forum_server.services.aggregation import distinct_by_id, group_by_topic, newest_first
from forum_server.store import TopicStore
from forum_shared.schemas.common import MemberStatus, Visibility
from forum_shared.schemas.posts import PostRead
from forum_shared.schemas.topics import (
    AdminTopicView,
    BrowsePage,
    JoinRequestSummary,
    MemberRead,
    TopicSearchResult,
    TopicSummary,
    TopicView,
)

def _posts(rows: list[dict]) -> list[PostRead]:
    return [PostRead(**row) for row in newest_first(rows)]


def _members(rows: list[dict]) -> list[MemberRead]:
    return [MemberRead(**row) for row in distinct_by_id(rows)]


async def get_browse_page(
    store: TopicStore,
    *,
    topic_limit: int,
    posts_per_topic: int,
) -> BrowsePage:
    """Public and private topic lists plus recent posts for the first public topics.

    Private topics are listed by name only; their posts never reach this page.
    Callers pass the limits from Settings.front_page_topic_limit and
    Settings.front_page_posts_per_topic.
    """
    async with store.read() as reader:
        public = await reader.topics(Visibility.PUBLIC)
        private = await reader.topics(Visibility.PRIVATE)
        front_ids = [t["id"] for t in public[:topic_limit]]
        posts = await reader.posts(front_ids)

    grouped = group_by_topic(front_ids, posts, limit=posts_per_topic)
    return BrowsePage(
        public_topics=[TopicSummary(**t) for t in public],
        private_topics=[TopicSummary(**t) for t in private],
        recent_posts_by_topic={
            tid: [PostRead(**p) for p in rows] for tid, rows in grouped.items()
        },
    )


async def get_single_topic_view(
    topic_id: uuid.UUID,
    requester_id: Optional[uuid.UUID],
    store: TopicStore,
) -> TopicView:
    async with store.read() as reader:
        topic = await reader.topic(topic_id, requester_id)
        if topic is None:
            raise NotFoundError("Topic not found")

        visible = access.can_view_content(topic["visibility"], topic["requester_status"])
        posts = await reader.posts([topic_id]) if visible else []
        members = await reader.members(topic_id) if visible else []

    return TopicView(
        **topic,
        content_visible=visible,
        posts=_posts(posts),
        members=_members(members),
    )


async def get_admin_view(
    topic_id: uuid.UUID,
    requester_id: uuid.UUID,
    store: TopicStore,
) -> AdminTopicView:
    async with store.read() as reader:
        topic = await reader.topic(topic_id, requester_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        if topic["requester_status"] != MemberStatus.ADMIN:
            raise UnauthorizedError("Topic admin access required")

        posts = await reader.posts([topic_id])
        members = await reader.members(topic_id)
        requests = await reader.join_requests(topic_id)

    return AdminTopicView(
        **topic,
        content_visible=True,
        posts=_posts(posts),
        members=_members(members),
        pending_requests=[JoinRequestSummary(**r) for r in distinct_by_id(requests)],
    )


async def search_topics(query: str, store: TopicStore) -> TopicSearchResult:
    """Case-insensitive topic name lookup. Private topics come back as metadata only."""
    async with store.read() as reader:
        public = await reader.topics(Visibility.PUBLIC, name_contains=query)
        private = await reader.topics(Visibility.PRIVATE, name_contains=query)

    return TopicSearchResult(
        query=query,
        public_topics=[TopicSummary(**t) for t in public],
        private_topics=[TopicSummary(**t) for t in private],
    )
