from enum import Enum


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class MemberStatus(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


class JoinState(str, Enum):
    """Where a user stands with respect to joining one topic."""

    NONE = "none"  # no request, no membership
    PENDING = "pending"  # a join request row exists
    MEMBER = "member"  # a membership row exists (member or admin)


# Valid join-workflow transitions. MEMBER is terminal: membership removal
# does not exist.
JOIN_TRANSITIONS: dict[JoinState, list[JoinState]] = {
    JoinState.NONE: [JoinState.PENDING],
    JoinState.PENDING: [JoinState.MEMBER, JoinState.NONE],
    JoinState.MEMBER: [],
}
