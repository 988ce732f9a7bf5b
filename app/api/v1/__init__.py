"""
API v1 Package

Version 1 API endpoints.

Included routers:
    - health: Health check endpoints (/health, /health/ready)
    - videos: Video catalog endpoints (/video, /video/{id}/data, /video/{id}/like, /video/search/*)
"""

from app.api.v1 import health, videos

__all__ = ["health", "videos"]
