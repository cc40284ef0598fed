"""Post schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PostCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=2, max_length=30, description="Post title")
    content: str = Field(..., min_length=1, max_length=1024, description="Post body")


class PostRead(BaseModel):
    id: uuid.UUID
    topic_id: uuid.UUID
    author_id: Optional[uuid.UUID] = None
    author_username: Optional[str] = None
    title: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
