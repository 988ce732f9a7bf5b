"""
Clients Module

서비스 외부 자원(바이너리 저장소)과 연동하는 어댑터 계층입니다.

구성:
    - content_store: 영상 바이너리 저장소 (local / memory)
"""

from app.clients.content_store import (
    BaseContentStore,
    clear_content_store,
    get_content_store,
)

__all__ = ["BaseContentStore", "get_content_store", "clear_content_store"]
