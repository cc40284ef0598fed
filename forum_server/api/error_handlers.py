"""
Maps forum core errors onto HTTP responses.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from forum_server.core.errors import DatabaseError, ForumError

log = structlog.get_logger()


async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    if isinstance(exc, DatabaseError):
        log.error("api.database_error", path=request.url.path, error=exc.message)
    else:
        log.info("api.request_rejected", path=request.url.path, code=exc.code)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ForumError, forum_error_handler)
