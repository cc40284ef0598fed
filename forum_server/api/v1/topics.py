"""
Topic endpoints.

GET    /api/v1/topics  Browse page
GET    /api/v1/topics/search?q=  Name lookup
POST   /api/v1/topics  Create a topic (caller becomes admin)
GET    /api/v1/topics/{topic_id}  Single-topic view
GET    /api/v1/topics/{topic_id}/admin  Admin view (admins only)
POST   /api/v1/topics/{topic_id}/join  Join a public topic
POST   /api/v1/topics/{topic_id}/members/{member_id}/promote  Promote a member to admin
POST   /api/v1/topics/{topic_id}/requests  Request to join
POST   /api/v1/topics/{topic_id}/requests/{request_id}/approve
POST   /api/v1/topics/{topic_id}/requests/{request_id}/deny
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from forum_server.api.deps import get_app_settings, get_optional_user_id, get_topic_store, get_user_id
from forum_server.core.config import Settings
from forum_server.services import join_requests as join_service
from forum_server.services import topic_views
from forum_server.services import topics as topic_service
from forum_server.store import TopicStore
from forum_shared.schemas.topics import (
    AdminTopicView,
    BrowsePage,
    TopicCreateRequest,
    TopicSearchResult,
    TopicView,
)

router = APIRouter()


@router.get("", response_model=BrowsePage)
async def browse_topics(
    store: TopicStore = Depends(get_topic_store),
    settings: Settings = Depends(get_app_settings),
):
    return await topic_views.get_browse_page(
        store,
        topic_limit=settings.front_page_topic_limit,
        posts_per_topic=settings.front_page_posts_per_topic,
    )


@router.get("/search", response_model=TopicSearchResult)
async def search_topics(
    q: str = Query(..., min_length=1, max_length=40),
    store: TopicStore = Depends(get_topic_store),
):
    return await topic_views.search_topics(q, store)


@router.post("", status_code=201)
async def create_topic(
    body: TopicCreateRequest,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    topic_id = await topic_service.create_topic(body, user_id, store)
    return {"id": topic_id}


@router.get("/{topic_id}", response_model=TopicView)
async def get_topic(
    topic_id: uuid.UUID,
    user_id: Optional[uuid.UUID] = Depends(get_optional_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    return await topic_views.get_single_topic_view(topic_id, user_id, store)


@router.get("/{topic_id}/admin", response_model=AdminTopicView)
async def get_topic_admin(
    topic_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    return await topic_views.get_admin_view(topic_id, user_id, store)


@router.post("/{topic_id}/join")
async def join_topic(
    topic_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    joined = await topic_service.join_topic(topic_id, user_id, store)
    return {"joined": joined}


@router.post("/{topic_id}/members/{member_id}/promote", status_code=204)
async def promote_member(
    topic_id: uuid.UUID,
    member_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    await topic_service.promote_member(topic_id, member_id, user_id, store)


@router.post("/{topic_id}/requests", status_code=201)
async def request_join(
    topic_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    request_id = await join_service.request_join(topic_id, user_id, store)
    return {"id": request_id}


@router.post("/{topic_id}/requests/{request_id}/approve")
async def approve_request(
    topic_id: uuid.UUID,
    request_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    approved = await join_service.approve_request(request_id, topic_id, user_id, store)
    return {"approved": approved}


@router.post("/{topic_id}/requests/{request_id}/deny")
async def deny_request(
    topic_id: uuid.UUID,
    request_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_user_id),
    store: TopicStore = Depends(get_topic_store),
):
    denied = await join_service.deny_request(request_id, topic_id, user_id, store)
    return {"denied": denied}
