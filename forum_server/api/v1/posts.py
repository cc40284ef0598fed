"""
Post endpoints.

POST   /api/v1/topics/{topic_id}/posts  Create a post (members only)
DELETE /api/v1/topics/{topic_id}/posts/{post_id}  Delete a post (admins only)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from forum_server.api.deps import get_topic_store, get_user_id
from forum_server.services import posts as post_service
from forum_server.store import TopicStore
from forum_shared.schemas.posts import PostCreateRequest

router = APIRouter()


@router.post("", status_code=201)
async def create_post(
    topic_id: uuid.UUID,
    body: PostCreateRequest,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    post_id = await post_service.create_post(topic_id, user_id, body, store)
    return {"id": post_id}


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    topic_id: uuid.UUID,
    post_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    await post_service.delete_post(post_id, topic_id, user_id, store)
