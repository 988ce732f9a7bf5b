"""
API Dependencies

공통 의존성 함수들을 정의합니다.

주요 의존성:
- get_current_username: 인증 미들웨어(request.state) 또는 X-User-Id 헤더에서 사용자명 추출
- get_*: 서비스 싱글턴 주입 (테스트에서 app.dependency_overrides로 교체 가능)
"""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from app.core.exceptions import ErrorType
from app.core.logging import get_logger
from app.services.like_ledger import LikeLedger, get_like_ledger
from app.services.video_data_service import VideoDataService
from app.services.video_query_service import VideoQueryService
from app.services.video_registry import VideoRegistry, get_video_registry

logger = get_logger(__name__)


async def get_current_username(
    request: Request,
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> str:
    """
    호출자의 사용자명을 반환합니다.

    우선순위:
    1. 인증 미들웨어가 설정한 request.state.user_id
    2. X-User-Id 헤더

    Raises:
        HTTPException: 사용자명을 확인할 수 없으면 401
    """
    state_user_id = getattr(request.state, "user_id", None)
    if state_user_id:
        return state_user_id

    if x_user_id and x_user_id.strip():
        return x_user_id.strip()

    logger.warning(f"Unauthenticated request: path={request.url.path}")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error_type": ErrorType.UNAUTHORIZED.value,
            "message": "User identity required (X-User-Id)",
        },
    )


def get_registry() -> VideoRegistry:
    """Dependency injection for VideoRegistry."""
    return get_video_registry()


def get_ledger() -> LikeLedger:
    """Dependency injection for LikeLedger."""
    return get_like_ledger()


def get_query_service() -> VideoQueryService:
    """Dependency injection for VideoQueryService."""
    return VideoQueryService()


def get_data_service() -> VideoDataService:
    """Dependency injection for VideoDataService."""
    return VideoDataService()
