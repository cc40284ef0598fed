"""Topic model."""

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import UUIDMixin, utcnow


class Topic(UUIDMixin, SQLModel, table=True):
    __tablename__ = "topics"

    name: str = Field(unique=True, index=True, nullable=False, max_length=50)
    visibility: str = Field(nullable=False, default="public")  # public | private
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
    )
