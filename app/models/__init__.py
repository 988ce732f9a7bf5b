"""
Models package

Pydantic models for request/response schemas.

Modules:
    - video: Video catalog models (Video, VideoStatus, LikeResult, ContentResult)
"""

from app.models.video import (
    ContentResult,
    LikeResult,
    TitleMatch,
    Video,
    VideoState,
    VideoStatus,
)

__all__ = [
    "ContentResult",
    "LikeResult",
    "TitleMatch",
    "Video",
    "VideoState",
    "VideoStatus",
]
