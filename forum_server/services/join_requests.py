"""
Join-request workflow for gated topics.

Per (topic, user) pair: NONE -> PENDING -> MEMBER (approved) or back to
NONE (denied). A pending request is simply a row in topic_join_requests.
Duplicate requests and approval races are settled by the store's
uniqueness constraints, so losing a race is a normal outcome here.
"""

from __future__ import annotations

import uuid

import structlog

from forum_server.core import access
from forum_server.core.errors import AlreadyMemberError, AlreadyRequestedError, NotFoundError
from forum_server.store import TopicStore
from forum_shared.schemas.common import JOIN_TRANSITIONS, JoinState

log = structlog.get_logger()


async def get_join_state(
    topic_id: uuid.UUID, user_id: uuid.UUID, store: TopicStore
) -> JoinState:
    """Where the user stands in the join workflow for this topic."""
    async with store.read() as reader:
        topic = await reader.topic(topic_id, user_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        if topic["requester_status"] is not None:
            return JoinState.MEMBER
        if await reader.has_join_request(topic_id, user_id):
            return JoinState.PENDING
        return JoinState.NONE


async def request_join(
    topic_id: uuid.UUID, user_id: uuid.UUID, store: TopicStore
) -> uuid.UUID:
    """Open a join request. Returns the request id."""
    current = await get_join_state(topic_id, user_id, store)
    if JoinState.PENDING not in JOIN_TRANSITIONS[current]:
        if current == JoinState.MEMBER:
            raise AlreadyMemberError("You are already a member of this topic")
        raise AlreadyRequestedError("A join request for this topic is already pending")

    # The state check above is advisory; the unique (topic, user) constraint
    # decides concurrent requests.
    request_id = await store.insert_join_request(topic_id, user_id)
    if request_id is None:
        raise AlreadyRequestedError("A join request for this topic is already pending")

    log.info(
        "join_request.created",
        request_id=str(request_id),
        topic_id=str(topic_id),
        user_id=str(user_id),
    )
    return request_id


async def approve_request(
    request_id: uuid.UUID,
    topic_id: uuid.UUID,
    approver_id: uuid.UUID,
    store: TopicStore,
) -> bool:
    """Convert a pending request into a membership. Returns whether it took effect."""
    await access.require_admin(store, topic_id, approver_id)

    approved = await store.approve_join_request(request_id, topic_id)
    log.info(
        "join_request.approved" if approved else "join_request.approve_skipped",
        request_id=str(request_id),
        topic_id=str(topic_id),
        by=str(approver_id),
    )
    return approved


async def deny_request(
    request_id: uuid.UUID,
    topic_id: uuid.UUID,
    denier_id: uuid.UUID,
    store: TopicStore,
) -> bool:
    """Discard a pending request. False means it was already handled or never existed.

    Only an admin of the topic may deny, and only requests belonging to that
    topic are touched. Raises UnauthorizedError for anyone else, before any
    row is deleted; DatabaseError on store failure.
    """
    await access.require_admin(store, topic_id, denier_id)

    denied = await store.delete_join_request(request_id, topic_id)
    log.info(
        "join_request.denied" if denied else "join_request.deny_skipped",
        request_id=str(request_id),
        topic_id=str(topic_id),
        by=str(denier_id),
    )
    return denied
