"""
API v1 Router

All endpoints hang off /topics.
"""

from fastapi import APIRouter

from . import posts, topics

router = APIRouter()

router.include_router(topics.router, prefix="/topics", tags=["Topics"])
router.include_router(posts.router, prefix="/topics/{topic_id}/posts", tags=["Posts"])
