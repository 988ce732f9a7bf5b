"""
FastAPI 애플리케이션 메인 모듈

video-catalog-service의 진입점입니다.
FastAPI 인스턴스를 생성하고, 라우터를 등록하며, 미들웨어를 설정합니다.

외부 협력자:
    - 인증 계층: 호출자 사용자명 제공 (request.state.user_id 또는 X-User-Id)
    - 바이너리 저장 매체: Content Store provider (local / memory)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import health, videos
from app.core.config import get_settings
from app.core.logging import get_logger, setup_logging
from app.services.video_registry import get_video_registry

# 설정 및 로거 초기화
settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 라이프사이클 관리

    시작 시:
        - 로깅 설정
        - 설정 값 로그

    종료 시:
        - 카탈로그 요약 로그 (인메모리 카탈로그는 보존되지 않음)
    """
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.APP_ENV}")
    logger.info(f"SERVICE_BASE_URL: {settings.SERVICE_BASE_URL}")
    logger.info(
        f"CONTENT_STORE: provider={settings.CONTENT_STORE_PROVIDER}, "
        f"dir={settings.CONTENT_STORE_DIR}"
    )

    try:
        yield
    finally:
        stats = get_video_registry().stats()
        logger.info(
            f"Shutting down {settings.APP_NAME}: "
            f"videos={stats['videos']}, last_id={stats['last_id']}"
        )


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Video Catalog 서비스\n\n"
        "영상 메타데이터 등록/검색, 바이너리 업로드/다운로드, 좋아요 기능을 제공합니다."
    ),
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
# - GET /health, /health/ready
app.include_router(health.router, prefix="", tags=["Health"])

# Video Catalog API
# - GET/POST /video, GET /video/{id}
# - POST/GET /video/{id}/data
# - POST /video/{id}/like, /video/{id}/unlike, GET /video/{id}/likedby
# - GET /video/search/findByName, /video/search/findByDurationLessThan
app.include_router(videos.router, tags=["Video"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8080)
