"""
Services package

Business logic layer for the video catalog.

Modules:
    - video_registry: id allocation and the id -> Video mapping
    - like_ledger: per-video like state
    - video_query_service: title/duration search over registry snapshots
    - video_data_service: binary upload/download gated by the registry

Note:
    Import directly from submodules when needed:
        from app.services.video_registry import VideoRegistry
"""

__all__ = []
