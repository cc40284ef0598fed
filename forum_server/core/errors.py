"""
Error hierarchy for the forum core.

Every error carries a stable code and the HTTP status the API layer maps it
to. Authorization and existence errors are raised before any mutation;
DatabaseError is raised after the surrounding transaction has rolled back.
"""

from __future__ import annotations


class ForumError(Exception):
    """Base exception for all forum core errors."""

    code = "FORUM_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class NameConflictError(ForumError):
    code = "NAME_CONFLICT"
    http_status = 409


class AlreadyRequestedError(ForumError):
    code = "ALREADY_REQUESTED"
    http_status = 409


class AlreadyMemberError(ForumError):
    code = "ALREADY_MEMBER"
    http_status = 409


class NotAMemberError(ForumError):
    code = "NOT_A_MEMBER"
    http_status = 403


class UnauthorizedError(ForumError):
    code = "UNAUTHORIZED"
    http_status = 403


class NotFoundError(ForumError):
    code = "NOT_FOUND"
    http_status = 404


class DatabaseError(ForumError):
    """Transport or transaction failure, not classified further."""

    code = "DATABASE_ERROR"
    http_status = 503
