"""
Shared fixtures: an in-memory SQLite engine per test, with stores bound to it.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from forum_server.core.database import init_db
from forum_server.services import topics, users
from forum_server.store import TopicStore, UserStore
from forum_shared.schemas.common import Visibility
from forum_shared.schemas.topics import TopicCreateRequest
from forum_shared.schemas.users import UserCreateRequest

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine():
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def topic_store(engine) -> TopicStore:
    return TopicStore(engine)


@pytest.fixture
def user_store(engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def make_user(user_store):
    """Factory: create a user and return its id."""

    async def _make(username: str) -> uuid.UUID:
        req = UserCreateRequest(username=username, first_name="Test", last_name="User")
        return await users.create_user(req, user_store)

    return _make


@pytest.fixture
def make_topic(topic_store):
    """Factory: create a topic founded by the given user and return its id."""

    async def _make(name: str, founder_id: uuid.UUID, visibility: Visibility = Visibility.PUBLIC) -> uuid.UUID:
        req = TopicCreateRequest(name=name, visibility=visibility)
        return await topics.create_topic(req, founder_id, topic_store)

    return _make
