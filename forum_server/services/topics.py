"""
Topic lifecycle: creation with a founding admin, admin promotion, and
direct join of public topics.
"""

from __future__ import annotations

import uuid

import structlog

from forum_server.core import access
from forum_server.core.errors import NameConflictError, NotFoundError, UnauthorizedError
from forum_server.store import TopicStore
from forum_shared.schemas.common import MemberStatus, Visibility
from forum_shared.schemas.topics import TopicCreateRequest

log = structlog.get_logger()


async def create_topic(
    req: TopicCreateRequest,
    founder_id: uuid.UUID,
    store: TopicStore,
) -> uuid.UUID:
    """Create a topic and make the founder its admin, in one transaction."""
    topic_id = await store.create_topic_with_admin(req.name, req.visibility, founder_id)
    if topic_id is None:
        raise NameConflictError(f"Topic name '{req.name}' is already taken")

    log.info(
        "topic.created",
        topic_id=str(topic_id),
        name=req.name,
        visibility=req.visibility.value,
        founder=str(founder_id),
    )
    return topic_id


async def promote_member(
    topic_id: uuid.UUID,
    target_user_id: uuid.UUID,
    requester_id: uuid.UUID,
    store: TopicStore,
) -> None:
    """Make an existing member an admin (admins only)."""
    await access.require_admin(store, topic_id, requester_id)

    updated = await store.update_membership_status(topic_id, target_user_id, MemberStatus.ADMIN)
    if not updated:
        raise NotFoundError("User is not a member of this topic")

    log.info(
        "topic.member_promoted",
        topic_id=str(topic_id),
        user_id=str(target_user_id),
        by=str(requester_id),
    )


async def join_topic(
    topic_id: uuid.UUID,
    user_id: uuid.UUID,
    store: TopicStore,
) -> bool:
    """Join a public topic directly. Returns False if the user was already a member."""
    topic = await store.get_topic(topic_id)
    if topic is None:
        raise NotFoundError("Topic not found")
    if topic["visibility"] != Visibility.PUBLIC:
        raise UnauthorizedError("Private topics can only be joined through a join request")

    joined = await store.insert_membership_if_absent(topic_id, user_id, MemberStatus.MEMBER)
    if joined:
        log.info("topic.joined", topic_id=str(topic_id), user_id=str(user_id))
    return joined
