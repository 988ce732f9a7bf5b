"""
pytest conftest.py - Shared Test Configuration (Root)

테스트 전용 환경변수를 설정하고, 테스트마다 싱글톤 서비스를 초기화합니다.

- CONTENT_STORE_PROVIDER=memory: 디스크를 사용하지 않음
- SERVICE_BASE_URL=http://test:8080: data_url 검증용 고정 주소

주의: app 모듈 import 전에 환경변수를 설정해야 Settings에 반영됩니다.
"""

import os

os.environ["CONTENT_STORE_PROVIDER"] = "memory"
os.environ["SERVICE_BASE_URL"] = "http://test:8080"
os.environ["LOG_LEVEL"] = "DEBUG"

from app.core.config import clear_settings_cache

clear_settings_cache()

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """pytest-anyio 백엔드 설정"""
    return "asyncio"


# =============================================================================
# Singleton cleanup fixtures (공통)
# =============================================================================


@pytest.fixture(autouse=True)
def reset_singletons():
    """각 테스트 전후로 싱글톤 인스턴스를 정리합니다.

    Registry / Ledger / Content Store는 인메모리 상태를 가지므로
    테스트 간 id 할당과 좋아요 상태가 섞이지 않도록 매번 새로 만듭니다.
    """
    from app.clients.content_store import clear_content_store
    from app.services.like_ledger import clear_like_ledger
    from app.services.video_registry import clear_video_registry

    clear_video_registry()
    clear_like_ledger()
    clear_content_store()
    yield
    clear_video_registry()
    clear_like_ledger()
    clear_content_store()
    clear_settings_cache()
