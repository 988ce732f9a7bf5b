"""
헬스체크 API 모듈 (Health Check API Module)

쿠버네티스 및 로드밸런서의 헬스체크를 위한 엔드포인트를 제공합니다.
- /health: Liveness probe - 애플리케이션이 살아있는지 확인
- /health/ready: Readiness probe - Content Store 사용 가능 여부 확인
"""

import os
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.clients.content_store import LocalContentStore, get_content_store
from app.core.config import Settings, get_settings
from app.core.logging import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """
    헬스체크 응답 스키마

    Attributes:
        status: 서비스 상태 ("ok" 또는 "error")
        app: 애플리케이션 이름
        version: 애플리케이션 버전
        env: 실행 환경 (local/dev/prod)
    """

    status: str
    app: str
    version: str
    env: str


class ReadinessResponse(BaseModel):
    """Readiness 체크 응답 스키마"""

    ready: bool
    checks: Dict[str, bool] = {}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness Check",
    description="애플리케이션이 정상적으로 실행 중인지 확인합니다.",
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        env=settings.APP_ENV,
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness Check",
    description="Content Store가 요청을 받을 준비가 되었는지 확인합니다.",
)
def readiness_check() -> ReadinessResponse:
    """
    Readiness 헬스체크 엔드포인트

    local provider면 저장 디렉토리가 존재하는지 확인합니다.
    memory provider는 항상 준비 상태입니다.
    """
    checks: Dict[str, bool] = {}
    try:
        store = get_content_store()
        if isinstance(store, LocalContentStore):
            checks["content_store"] = os.path.isdir(store.config.local_path)
        else:
            checks["content_store"] = True
    except OSError as e:
        logger.exception("Content store readiness check error: %s", e)
        checks["content_store"] = False

    return ReadinessResponse(ready=all(checks.values()), checks=checks)
