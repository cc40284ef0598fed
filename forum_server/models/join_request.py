"""Pending request to join a topic. The row existing is the pending state."""

from datetime import datetime
import uuid

import sqlalchemy as sa
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from .base import UUIDMixin, utcnow


class JoinRequest(UUIDMixin, SQLModel, table=True):
    __tablename__ = "topic_join_requests"
    __table_args__ = (
        UniqueConstraint("topic_id", "requesting_user_id", name="uq_join_request_topic_user"),
    )

    topic_id: uuid.UUID = Field(foreign_key="topics.id", nullable=False, index=True)
    requesting_user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
    )
