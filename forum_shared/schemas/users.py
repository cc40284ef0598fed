"""User schemas. Credentials are handled outside this package."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

PERSON_NAME_PATTERN = r"^[A-Za-z][A-Za-z -]*$"


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=4, max_length=14, pattern=r"^[A-Za-z0-9]+$")
    first_name: str = Field(..., min_length=2, max_length=30, pattern=PERSON_NAME_PATTERN)
    last_name: str = Field(..., min_length=2, max_length=40, pattern=PERSON_NAME_PATTERN)


class UserRead(BaseModel):
    id: uuid.UUID
    username: str
    first_name: str
    last_name: str
    created_at: datetime

    model_config = {"from_attributes": True}
