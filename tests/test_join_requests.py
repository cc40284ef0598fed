"""
Join-request workflow: request, approve, deny, and the races between them.
"""

from __future__ import annotations

import uuid

import pytest

from forum_server.core.errors import (
    AlreadyMemberError,
    AlreadyRequestedError,
    NotFoundError,
    UnauthorizedError,
)
from forum_server.services import join_requests, topic_views, topics
from forum_shared.schemas.common import JoinState, MemberStatus, Visibility


@pytest.fixture
async def private_topic(make_user, make_topic):
    """A private topic founded by alice, plus an outsider bob."""
    alice = await make_user("alice")
    bob = await make_user("bobby")
    topic_id = await make_topic("Project Alpha", alice, Visibility.PRIVATE)
    return topic_id, alice, bob


# ---------------------------------------------------------------------------
# request_join
# ---------------------------------------------------------------------------


class TestRequestJoin:

    @pytest.mark.asyncio
    async def test_request_moves_user_to_pending(self, topic_store, private_topic):
        topic_id, _, bob = private_topic
        assert await join_requests.get_join_state(topic_id, bob, topic_store) == JoinState.NONE

        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        assert isinstance(request_id, uuid.UUID)
        assert await join_requests.get_join_state(topic_id, bob, topic_store) == JoinState.PENDING

    @pytest.mark.asyncio
    async def test_duplicate_request_is_rejected(self, topic_store, private_topic):
        topic_id, _, bob = private_topic
        await join_requests.request_join(topic_id, bob, topic_store)

        with pytest.raises(AlreadyRequestedError):
            await join_requests.request_join(topic_id, bob, topic_store)

        assert len(await topic_store.fetch_join_requests(topic_id)) == 1

    @pytest.mark.asyncio
    async def test_store_refuses_second_row_for_same_pair(self, topic_store, private_topic):
        topic_id, _, bob = private_topic

        first = await topic_store.insert_join_request(topic_id, bob)
        second = await topic_store.insert_join_request(topic_id, bob)

        assert first is not None
        assert second is None
        assert len(await topic_store.fetch_join_requests(topic_id)) == 1

    @pytest.mark.asyncio
    async def test_member_cannot_request(self, topic_store, private_topic):
        topic_id, alice, _ = private_topic

        with pytest.raises(AlreadyMemberError):
            await join_requests.request_join(topic_id, alice, topic_store)
        assert await topic_store.fetch_join_requests(topic_id) == []

    @pytest.mark.asyncio
    async def test_unknown_topic(self, topic_store, make_user):
        bob = await make_user("bobby")
        with pytest.raises(NotFoundError):
            await join_requests.request_join(uuid.uuid4(), bob, topic_store)

    @pytest.mark.asyncio
    async def test_public_topic_accepts_requests_too(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)

        await join_requests.request_join(topic_id, bob, topic_store)
        assert await join_requests.get_join_state(topic_id, bob, topic_store) == JoinState.PENDING


# ---------------------------------------------------------------------------
# approve_request
# ---------------------------------------------------------------------------


class TestApproveRequest:

    @pytest.mark.asyncio
    async def test_approve_creates_membership_and_clears_request(self, topic_store, private_topic):
        topic_id, alice, bob = private_topic
        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        assert await join_requests.approve_request(request_id, topic_id, alice, topic_store) is True

        assert await topic_store.get_membership_status(topic_id, bob) == MemberStatus.MEMBER
        assert await topic_store.fetch_join_requests(topic_id) == []
        assert await join_requests.get_join_state(topic_id, bob, topic_store) == JoinState.MEMBER

    @pytest.mark.asyncio
    async def test_second_approve_is_a_no_op(self, topic_store, private_topic):
        topic_id, alice, bob = private_topic
        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        assert await join_requests.approve_request(request_id, topic_id, alice, topic_store) is True
        assert await join_requests.approve_request(request_id, topic_id, alice, topic_store) is False

        members = await topic_store.fetch_members(topic_id)
        assert [m["id"] for m in members].count(bob) == 1

    @pytest.mark.asyncio
    async def test_store_approval_consumes_request_once(self, topic_store, private_topic):
        topic_id, _, bob = private_topic
        request_id = await topic_store.insert_join_request(topic_id, bob)

        results = [
            await topic_store.approve_join_request(request_id, topic_id),
            await topic_store.approve_join_request(request_id, topic_id),
        ]

        assert results == [True, False]
        members = await topic_store.fetch_members(topic_id)
        assert [m["id"] for m in members].count(bob) == 1

    @pytest.mark.asyncio
    async def test_non_admin_cannot_approve(self, topic_store, private_topic, make_user):
        topic_id, _, bob = private_topic
        carol = await make_user("carol")
        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        with pytest.raises(UnauthorizedError):
            await join_requests.approve_request(request_id, topic_id, carol, topic_store)

        assert await topic_store.is_member(topic_id, bob) is False
        assert len(await topic_store.fetch_join_requests(topic_id)) == 1

    @pytest.mark.asyncio
    async def test_request_of_another_topic_is_not_approved(self, topic_store, private_topic, make_topic):
        topic_id, alice, bob = private_topic
        other_topic = await make_topic("Other", alice, Visibility.PRIVATE)
        request_id = await join_requests.request_join(other_topic, bob, topic_store)

        assert await join_requests.approve_request(request_id, topic_id, alice, topic_store) is False
        assert await topic_store.is_member(topic_id, bob) is False
        assert await topic_store.is_member(other_topic, bob) is False

    @pytest.mark.asyncio
    async def test_request_kept_when_user_joined_another_way(self, topic_store, make_user, make_topic):
        alice = await make_user("alice")
        bob = await make_user("bobby")
        topic_id = await make_topic("General", alice)
        request_id = await join_requests.request_join(topic_id, bob, topic_store)
        await topics.join_topic(topic_id, bob, topic_store)

        assert await join_requests.approve_request(request_id, topic_id, alice, topic_store) is False
        assert len(await topic_store.fetch_join_requests(topic_id)) == 1


# ---------------------------------------------------------------------------
# deny_request
# ---------------------------------------------------------------------------


class TestDenyRequest:

    @pytest.mark.asyncio
    async def test_deny_returns_user_to_none(self, topic_store, private_topic):
        topic_id, alice, bob = private_topic
        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        assert await join_requests.deny_request(request_id, topic_id, alice, topic_store) is True

        assert await join_requests.get_join_state(topic_id, bob, topic_store) == JoinState.NONE
        assert await topic_store.is_member(topic_id, bob) is False

    @pytest.mark.asyncio
    async def test_user_may_request_again_after_denial(self, topic_store, private_topic):
        topic_id, alice, bob = private_topic
        first = await join_requests.request_join(topic_id, bob, topic_store)
        await join_requests.deny_request(first, topic_id, alice, topic_store)

        second = await join_requests.request_join(topic_id, bob, topic_store)
        assert second != first

    @pytest.mark.asyncio
    async def test_deny_unknown_request(self, topic_store, private_topic):
        topic_id, alice, _ = private_topic
        assert await join_requests.deny_request(uuid.uuid4(), topic_id, alice, topic_store) is False
        assert await topic_store.fetch_join_requests(topic_id) == []

    @pytest.mark.asyncio
    async def test_deny_after_approve_is_a_no_op(self, topic_store, private_topic):
        topic_id, alice, bob = private_topic
        request_id = await join_requests.request_join(topic_id, bob, topic_store)
        await join_requests.approve_request(request_id, topic_id, alice, topic_store)

        assert await join_requests.deny_request(request_id, topic_id, alice, topic_store) is False
        assert await topic_store.is_member(topic_id, bob) is True

    @pytest.mark.asyncio
    async def test_non_admin_cannot_deny(self, topic_store, private_topic):
        topic_id, _, bob = private_topic
        request_id = await join_requests.request_join(topic_id, bob, topic_store)

        with pytest.raises(UnauthorizedError):
            await join_requests.deny_request(request_id, topic_id, bob, topic_store)
        assert len(await topic_store.fetch_join_requests(topic_id)) == 1


# ---------------------------------------------------------------------------
# Full flow
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_private_topic_opens_up_after_approval(topic_store, private_topic):
    topic_id, alice, bob = private_topic

    before = await topic_views.get_single_topic_view(topic_id, bob, topic_store)
    assert before.content_visible is False
    assert before.members == []

    request_id = await join_requests.request_join(topic_id, bob, topic_store)
    admin_view = await topic_views.get_admin_view(topic_id, alice, topic_store)
    assert [r.id for r in admin_view.pending_requests] == [request_id]
    assert admin_view.pending_requests[0].username == "bobby"

    await join_requests.approve_request(request_id, topic_id, alice, topic_store)

    after = await topic_views.get_single_topic_view(topic_id, bob, topic_store)
    assert after.content_visible is True
    assert after.requester_status == MemberStatus.MEMBER
    assert {m.id for m in after.members} == {alice, bob}

    admin_view = await topic_views.get_admin_view(topic_id, alice, topic_store)
    assert admin_view.pending_requests == []
