"""
User persistence. Only the profile fields the forum shows; credentials live elsewhere.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlmodel import select

from forum_server.models import User, utcnow
from forum_server.store.base import BaseStore


class UserStore(BaseStore):

    async def insert_user(
        self, username: str, first_name: str, last_name: str
    ) -> Optional[uuid.UUID]:
        """Returns the new user id, or None if the username is taken."""
        async with self.transaction() as session:
            result = await session.execute(
                self.insert(User)
                .values(
                    id=uuid.uuid4(),
                    username=username,
                    first_name=first_name,
                    last_name=last_name,
                    created_at=utcnow(),
                )
                .on_conflict_do_nothing(index_elements=["username"])
                .returning(User.id)
            )
            row = result.first()
            return row[0] if row is not None else None

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        async with self.transaction() as session:
            return await session.get(User, user_id)

    async def username_exists(self, username: str) -> bool:
        async with self.transaction() as session:
            result = await session.execute(
                select(User.id).where(User.username == username)
            )
            return result.first() is not None
