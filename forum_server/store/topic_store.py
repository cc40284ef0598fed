"""
Topic persistence: topics, memberships, join requests and posts.

Each public TopicStore method runs in its own transaction. Operations that
touch several rows (create topic + founding admin, approve request +
membership) are single methods so a caller can never leave them half applied.

Reads for a view go through TopicStore.read(), which hands out a TopicReader
bound to one transaction. Every list is fetched with its own query and comes
back one row per entity; posts, members and requests are never cross-joined.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any, Optional

from sqlalchemy import delete, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.models import JoinRequest, Membership, Post, Topic, User, utcnow
from forum_server.store.base import BaseStore
from forum_shared.schemas.common import MemberStatus, Visibility


# ---------------------------------------------------------------------------
# Session-level helpers
# ---------------------------------------------------------------------------


async def _insert_membership(
    session: AsyncSession,
    insert: Callable[[type], Any],
    topic_id: uuid.UUID,
    user_id: uuid.UUID,
    status: MemberStatus,
) -> bool:
    """Insert-if-absent on (user_id, topic_id). Returns whether a row was created."""
    stmt = (
        insert(Membership)
        .values(
            user_id=user_id,
            topic_id=topic_id,
            status=status.value,
            joined_at=utcnow(),
        )
        .on_conflict_do_nothing(index_elements=["user_id", "topic_id"])
        .returning(Membership.user_id)
    )
    result = await session.execute(stmt)
    return result.first() is not None


async def _membership_status(
    session: AsyncSession, topic_id: uuid.UUID, user_id: uuid.UUID
) -> Optional[MemberStatus]:
    result = await session.execute(
        select(Membership.status).where(
            Membership.topic_id == topic_id, Membership.user_id == user_id
        )
    )
    status = result.scalar_one_or_none()
    return MemberStatus(status) if status is not None else None


# ---------------------------------------------------------------------------
# Transaction-scoped reader
# ---------------------------------------------------------------------------


class TopicReader:
    """Read queries sharing one session, so a view sees one consistent state."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def topic(
        self, topic_id: uuid.UUID, requester_id: Optional[uuid.UUID] = None
    ) -> Optional[dict]:
        """Topic metadata plus the requester's membership status (None if not a member)."""
        result = await self.session.execute(
            select(Topic.id, Topic.name, Topic.visibility, Membership.status)
            .outerjoin(
                Membership,
                (Membership.topic_id == Topic.id) & (Membership.user_id == requester_id),
            )
            .where(Topic.id == topic_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        tid, name, visibility, status = row
        return {
            "id": tid,
            "name": name,
            "visibility": Visibility(visibility),
            "requester_status": MemberStatus(status) if status is not None else None,
        }

    async def topics(
        self, visibility: Visibility, name_contains: Optional[str] = None
    ) -> list[dict]:
        stmt = select(Topic.id, Topic.name, Topic.visibility).where(
            Topic.visibility == visibility.value
        )
        if name_contains:
            stmt = stmt.where(
                func.lower(Topic.name).contains(name_contains.lower(), autoescape=True)
            )
        result = await self.session.execute(stmt.order_by(Topic.name.asc()))
        return [
            {"id": tid, "name": name, "visibility": Visibility(vis)}
            for tid, name, vis in result.all()
        ]

    async def posts(self, topic_ids: Sequence[uuid.UUID]) -> list[dict]:
        """Posts of the given topics, newest first, with the author's username."""
        if not topic_ids:
            return []
        result = await self.session.execute(
            select(
                Post.id,
                Post.topic_id,
                Post.author_id,
                User.username,
                Post.title,
                Post.content,
                Post.created_at,
            )
            .outerjoin(User, User.id == Post.author_id)
            .where(Post.topic_id.in_(list(topic_ids)))
            .order_by(Post.created_at.desc(), Post.id)
        )
        return [
            {
                "id": pid,
                "topic_id": tid,
                "author_id": author_id,
                "author_username": username,
                "title": title,
                "content": content,
                "created_at": created_at,
            }
            for pid, tid, author_id, username, title, content, created_at in result.all()
        ]

    async def members(self, topic_id: uuid.UUID) -> list[dict]:
        result = await self.session.execute(
            select(Membership.user_id, User.username, Membership.status)
            .outerjoin(User, User.id == Membership.user_id)
            .where(Membership.topic_id == topic_id)
            .order_by(Membership.joined_at, Membership.user_id)
        )
        return [
            {"id": uid, "username": username, "status": MemberStatus(status)}
            for uid, username, status in result.all()
        ]

    async def join_requests(self, topic_id: uuid.UUID) -> list[dict]:
        result = await self.session.execute(
            select(
                JoinRequest.id,
                JoinRequest.requesting_user_id,
                User.username,
                JoinRequest.created_at,
            )
            .outerjoin(User, User.id == JoinRequest.requesting_user_id)
            .where(JoinRequest.topic_id == topic_id)
            .order_by(JoinRequest.created_at, JoinRequest.id)
        )
        return [
            {
                "id": rid,
                "requesting_user_id": uid,
                "username": username,
                "created_at": created_at,
            }
            for rid, uid, username, created_at in result.all()
        ]

    async def membership_status(
        self, topic_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[MemberStatus]:
        return await _membership_status(self.session, topic_id, user_id)

    async def has_join_request(self, topic_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(JoinRequest.id).where(
                JoinRequest.topic_id == topic_id,
                JoinRequest.requesting_user_id == user_id,
            )
        )
        return result.first() is not None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TopicStore(BaseStore):
    """Persistence boundary for topics and everything linked to them."""

    @asynccontextmanager
    async def read(self) -> AsyncIterator[TopicReader]:
        async with self.transaction() as session:
            yield TopicReader(session)

    # -- topics --------------------------------------------------------------

    async def create_topic_with_admin(
        self, name: str, visibility: Visibility, founder_id: uuid.UUID
    ) -> Optional[uuid.UUID]:
        """Insert a topic and its founding admin together. Returns None if the name is taken."""
        async with self.transaction() as session:
            topic_id = uuid.uuid4()
            result = await session.execute(
                self.insert(Topic)
                .values(
                    id=topic_id,
                    name=name,
                    visibility=visibility.value,
                    created_at=utcnow(),
                )
                .on_conflict_do_nothing(index_elements=["name"])
                .returning(Topic.id)
            )
            if result.first() is None:
                return None
            await _insert_membership(
                session, self.insert, topic_id, founder_id, MemberStatus.ADMIN
            )
            return topic_id

    async def get_topic(
        self, topic_id: uuid.UUID, requester_id: Optional[uuid.UUID] = None
    ) -> Optional[dict]:
        async with self.read() as reader:
            return await reader.topic(topic_id, requester_id)

    async def list_topics(self, visibility: Visibility) -> list[dict]:
        async with self.read() as reader:
            return await reader.topics(visibility)

    async def fetch_posts(self, topic_ids: Sequence[uuid.UUID]) -> list[dict]:
        async with self.read() as reader:
            return await reader.posts(topic_ids)

    async def fetch_members(self, topic_id: uuid.UUID) -> list[dict]:
        async with self.read() as reader:
            return await reader.members(topic_id)

    async def fetch_join_requests(self, topic_id: uuid.UUID) -> list[dict]:
        async with self.read() as reader:
            return await reader.join_requests(topic_id)

    # -- memberships ---------------------------------------------------------

    async def get_membership_status(
        self, topic_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[MemberStatus]:
        async with self.transaction() as session:
            return await _membership_status(session, topic_id, user_id)

    async def is_member(self, topic_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        return await self.get_membership_status(topic_id, user_id) is not None

    async def is_admin(self, topic_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        return await self.get_membership_status(topic_id, user_id) == MemberStatus.ADMIN

    async def insert_membership_if_absent(
        self, topic_id: uuid.UUID, user_id: uuid.UUID, status: MemberStatus
    ) -> bool:
        async with self.transaction() as session:
            return await _insert_membership(session, self.insert, topic_id, user_id, status)

    async def update_membership_status(
        self, topic_id: uuid.UUID, user_id: uuid.UUID, status: MemberStatus
    ) -> bool:
        """Returns False when the user holds no membership in the topic."""
        async with self.transaction() as session:
            result = await session.execute(
                update(Membership)
                .where(Membership.topic_id == topic_id, Membership.user_id == user_id)
                .values(status=status.value)
            )
            return result.rowcount > 0

    # -- join requests -------------------------------------------------------

    async def insert_join_request(
        self, topic_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[uuid.UUID]:
        """Returns the new request id, or None if one already exists for the pair."""
        async with self.transaction() as session:
            result = await session.execute(
                self.insert(JoinRequest)
                .values(
                    id=uuid.uuid4(),
                    topic_id=topic_id,
                    requesting_user_id=user_id,
                    created_at=utcnow(),
                )
                .on_conflict_do_nothing(index_elements=["topic_id", "requesting_user_id"])
                .returning(JoinRequest.id)
            )
            row = result.first()
            return row[0] if row is not None else None

    async def delete_join_request(
        self, request_id: uuid.UUID, topic_id: uuid.UUID
    ) -> bool:
        async with self.transaction() as session:
            result = await session.execute(
                delete(JoinRequest).where(
                    JoinRequest.id == request_id, JoinRequest.topic_id == topic_id
                )
            )
            return result.rowcount > 0

    async def approve_join_request(
        self, request_id: uuid.UUID, topic_id: uuid.UUID
    ) -> bool:
        """Turn a pending request into a member row and clear the request, atomically.

        The request is deleted only when the membership insert took effect.
        Returns False for an unknown or already-consumed request, and when the
        requester became a member by another path in the meantime.
        """
        async with self.transaction() as session:
            result = await session.execute(
                select(JoinRequest.requesting_user_id)
                .where(JoinRequest.id == request_id, JoinRequest.topic_id == topic_id)
                .with_for_update()
            )
            requesting_user_id = result.scalar_one_or_none()
            if requesting_user_id is None:
                return False

            inserted = await _insert_membership(
                session, self.insert, topic_id, requesting_user_id, MemberStatus.MEMBER
            )
            if inserted:
                await session.execute(
                    delete(JoinRequest).where(JoinRequest.id == request_id)
                )
            return inserted

    # -- posts ---------------------------------------------------------------

    async def insert_post(
        self,
        topic_id: uuid.UUID,
        author_id: uuid.UUID,
        title: str,
        content: str,
    ) -> Optional[uuid.UUID]:
        """Returns the new post id, or None when the author is not a member of the topic."""
        async with self.transaction() as session:
            if await _membership_status(session, topic_id, author_id) is None:
                return None
            post = Post(
                topic_id=topic_id,
                author_id=author_id,
                title=title,
                content=content,
                created_at=utcnow(),
            )
            session.add(post)
            await session.flush()
            return post.id

    async def delete_post(self, post_id: uuid.UUID, topic_id: uuid.UUID) -> bool:
        async with self.transaction() as session:
            result = await session.execute(
                delete(Post).where(Post.id == post_id, Post.topic_id == topic_id)
            )
            return result.rowcount > 0
