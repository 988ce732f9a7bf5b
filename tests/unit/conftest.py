"""
pytest conftest.py - Unit Test Configuration

서비스 단위 테스트용 fixture.
전역 싱글톤 대신 테스트마다 독립된 인스턴스를 주입합니다.
"""

import pytest

from app.clients.content_store import ContentStoreConfig, InMemoryContentStore
from app.services.like_ledger import LikeLedger
from app.services.video_registry import VideoRegistry

BASE_URL = "http://unit:8080"


@pytest.fixture
def registry() -> VideoRegistry:
    """테스트용 VideoRegistry 인스턴스."""
    return VideoRegistry(base_url=BASE_URL)


@pytest.fixture
def ledger(registry: VideoRegistry) -> LikeLedger:
    """테스트용 LikeLedger 인스턴스."""
    return LikeLedger(registry)


@pytest.fixture
def memory_store() -> InMemoryContentStore:
    """작은 청크 크기의 인메모리 Content Store (청크 경계 검증용)."""
    return InMemoryContentStore(ContentStoreConfig(chunk_size=4))
