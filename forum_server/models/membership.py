"""User-Topic membership (join table). The composite key allows one row per pair."""

from datetime import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import utcnow


class Membership(SQLModel, table=True):
    __tablename__ = "topic_memberships"

    user_id: uuid.UUID = Field(foreign_key="users.id", primary_key=True)
    topic_id: uuid.UUID = Field(foreign_key="topics.id", primary_key=True, index=True)
    status: str = Field(nullable=False, default="member")  # member | admin
    joined_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
    )
