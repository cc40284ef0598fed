"""
Request dependencies: store handles and the caller's user id.

Authentication happens upstream; by the time a request arrives the session
layer has resolved the user, and passes the id as ``Authorization: Bearer <uuid>``.
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader

from forum_server.core.config import Settings
from forum_server.store import TopicStore

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_topic_store(request: Request) -> TopicStore:
    return request.app.state.topic_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_optional_user_id(
    authorization: Optional[str] = Depends(api_key_header),
) -> Optional[uuid.UUID]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    try:
        return uuid.UUID(authorization[7:].strip())
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user token")


def get_user_id(
    user_id: Optional[uuid.UUID] = Depends(get_optional_user_id),
) -> uuid.UUID:
    if user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user_id
