"""
User service: profile records referenced by memberships and posts.
"""

from __future__ import annotations

import uuid

import structlog

from forum_server.core.errors import NameConflictError, NotFoundError
from forum_server.store import UserStore
from forum_shared.schemas.users import UserCreateRequest, UserRead

log = structlog.get_logger()


async def create_user(req: UserCreateRequest, store: UserStore) -> uuid.UUID:
    user_id = await store.insert_user(req.username, req.first_name, req.last_name)
    if user_id is None:
        raise NameConflictError("Username already exists")

    log.info("user.created", user_id=str(user_id), username=req.username)
    return user_id


async def get_user(user_id: uuid.UUID, store: UserStore) -> UserRead:
    user = await store.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)
