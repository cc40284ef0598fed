"""
Post service: members write, admins delete.
"""

from __future__ import annotations

import uuid

import pytest

from forum_server.core.errors import NotAMemberError, NotFoundError, UnauthorizedError
from forum_server.services import join_requests, posts, topics
from forum_shared.schemas.common import Visibility
from forum_shared.schemas.posts import PostCreateRequest


def _req(title="Hello there", content="First post in this topic"):
    return PostCreateRequest(title=title, content=content)


class TestCreatePost:

    @pytest.mark.asyncio
    async def test_member_can_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        topic_id = await make_topic("General", alice)

        post_id = await posts.create_post(topic_id, alice, _req(), topic_store)

        stored = await topic_store.fetch_posts([topic_id])
        assert [p["id"] for p in stored] == [post_id]
        assert stored[0]["author_username"] == "alice"
        assert stored[0]["title"] == "Hello there"

    @pytest.mark.asyncio
    async def test_non_member_cannot_post_even_in_public_topic(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)

        with pytest.raises(NotAMemberError):
            await posts.create_post(topic_id, bob, _req(), topic_store)
        assert await topic_store.fetch_posts([topic_id]) == []

    @pytest.mark.asyncio
    async def test_pending_requester_cannot_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("Staff", alice, Visibility.PRIVATE)
        await join_requests.request_join(topic_id, bob, topic_store)

        with pytest.raises(NotAMemberError):
            await posts.create_post(topic_id, bob, _req(), topic_store)

    @pytest.mark.asyncio
    async def test_joined_user_can_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)
        await topics.join_topic(topic_id, bob, topic_store)

        await posts.create_post(topic_id, bob, _req(), topic_store)
        assert len(await topic_store.fetch_posts([topic_id])) == 1


class TestDeletePost:

    @pytest.mark.asyncio
    async def test_admin_deletes_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)
        await topics.join_topic(topic_id, bob, topic_store)
        post_id = await posts.create_post(topic_id, bob, _req(), topic_store)

        await posts.delete_post(post_id, topic_id, alice, topic_store)

        assert await topic_store.fetch_posts([topic_id]) == []

    @pytest.mark.asyncio
    async def test_author_without_admin_cannot_delete(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)
        await topics.join_topic(topic_id, bob, topic_store)
        post_id = await posts.create_post(topic_id, bob, _req(), topic_store)

        with pytest.raises(UnauthorizedError):
            await posts.delete_post(post_id, topic_id, bob, topic_store)
        assert len(await topic_store.fetch_posts([topic_id])) == 1

    @pytest.mark.asyncio
    async def test_missing_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        topic_id = await make_topic("General", alice)

        with pytest.raises(NotFoundError):
            await posts.delete_post(uuid.uuid4(), topic_id, alice, topic_store)

    @pytest.mark.asyncio
    async def test_admin_of_other_topic_cannot_reach_post(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        general = await make_topic("General", alice)
        bobs_topic = await make_topic("Bobs Place", bob)
        post_id = await posts.create_post(general, alice, _req(), topic_store)

        # bob is admin of his own topic, but the post lives elsewhere
        with pytest.raises(NotFoundError):
            await posts.delete_post(post_id, bobs_topic, bob, topic_store)
        assert len(await topic_store.fetch_posts([general])) == 1
