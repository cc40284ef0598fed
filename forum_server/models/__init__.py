# SQLModel definitions: imported here to ensure metadata is populated for Alembic.
from .base import UUIDMixin, utcnow  # noqa: F401
from .user import User  # noqa: F401
from .topic import Topic  # noqa: F401
from .membership import Membership  # noqa: F401
from .join_request import JoinRequest  # noqa: F401
from .post import Post  # noqa: F401
