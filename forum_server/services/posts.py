"""
Post service: members write posts, topic admins delete them.
"""

from __future__ import annotations

import uuid

import structlog

from forum_server.core import access
from forum_server.core.errors import NotAMemberError, NotFoundError
from forum_server.store import TopicStore
from forum_shared.schemas.posts import PostCreateRequest

log = structlog.get_logger()


async def create_post(
    topic_id: uuid.UUID,
    author_id: uuid.UUID,
    req: PostCreateRequest,
    store: TopicStore,
) -> uuid.UUID:
    """Create a post. The membership check and the insert share one transaction."""
    post_id = await store.insert_post(topic_id, author_id, req.title, req.content)
    if post_id is None:
        raise NotAMemberError("You must be a member of this topic to post")

    log.info("post.created", post_id=str(post_id), topic_id=str(topic_id), author=str(author_id))
    return post_id


async def delete_post(
    post_id: uuid.UUID,
    topic_id: uuid.UUID,
    requester_id: uuid.UUID,
    store: TopicStore,
) -> None:
    await access.require_admin(store, topic_id, requester_id)

    if not await store.delete_post(post_id, topic_id):
        raise NotFoundError("Post not found")

    log.info("post.deleted", post_id=str(post_id), topic_id=str(topic_id), by=str(requester_id))
