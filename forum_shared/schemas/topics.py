"""
Topic schemas: creation request and the read models assembled for the
browse page, the single-topic page and the admin panel.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import MemberStatus, Visibility
from .posts import PostRead

TOPIC_NAME_PATTERN = r"^[\w][\w .,'&!?()-]*$"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class TopicCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=2,
        max_length=40,
        pattern=TOPIC_NAME_PATTERN,
        description="Unique topic name",
    )
    visibility: Visibility = Visibility.PUBLIC


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class TopicSummary(BaseModel):
    id: uuid.UUID
    name: str
    visibility: Visibility

    model_config = {"from_attributes": True}


class MemberRead(BaseModel):
    id: uuid.UUID
    username: Optional[str] = None
    status: MemberStatus


class JoinRequestSummary(BaseModel):
    id: uuid.UUID
    requesting_user_id: uuid.UUID
    username: Optional[str] = None
    created_at: Optional[datetime] = None


class TopicView(BaseModel):
    """A topic as seen by one requester. Lists are empty when content is hidden."""

    id: uuid.UUID
    name: str
    visibility: Visibility
    requester_status: Optional[MemberStatus] = None
    content_visible: bool
    posts: list[PostRead] = Field(default_factory=list)
    members: list[MemberRead] = Field(default_factory=list)


class AdminTopicView(TopicView):
    pending_requests: list[JoinRequestSummary] = Field(default_factory=list)


class BrowsePage(BaseModel):
    public_topics: list[TopicSummary]
    private_topics: list[TopicSummary]
    # Every front-page topic has a key, possibly with an empty list
    recent_posts_by_topic: dict[uuid.UUID, list[PostRead]]


class TopicSearchResult(BaseModel):
    query: str
    public_topics: list[TopicSummary]
    private_topics: list[TopicSummary]
