"""
설정 모듈 (Configuration Module)

pydantic-settings를 사용하여 환경변수 및 .env 파일에서 설정 값을 로드합니다.
싱글턴 패턴으로 설정 인스턴스를 캐싱하여 애플리케이션 전체에서 재사용합니다.

실제 환경변수 이름:
- SERVICE_BASE_URL: data_url 생성에 사용하는 서비스 기본 주소
- CONTENT_STORE_PROVIDER: local | memory
- CONTENT_STORE_DIR: 로컬 저장 경로
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    애플리케이션 설정 클래스

    환경변수 또는 .env 파일에서 값을 읽어옵니다.
    모든 필드에 기본값이 있으므로 로컬 실행 시 별도 설정이 필요 없습니다.
    """

    # 앱 기본 정보
    APP_NAME: str = "video-catalog-service"
    APP_ENV: str = "local"  # local / dev / prod / docker
    APP_VERSION: str = "0.1.0"

    # =========================================================================
    # 로깅 설정
    # =========================================================================
    LOG_LEVEL: str = "INFO"

    # 시간 | 로그레벨 | 로거이름 | 메시지
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # False면 uvicorn.access 요청 로그를 WARNING 이상만 출력
    LOG_ACCESS: bool = True

    # =========================================================================
    # 서비스 주소
    # =========================================================================
    # data_url 계산에만 사용 (그 외 용도로 해석하지 않음)
    # 예: http://localhost:8080 → http://localhost:8080/video/1/data
    SERVICE_BASE_URL: str = "http://localhost:8080"

    # =========================================================================
    # Content Store 설정
    # =========================================================================
    CONTENT_STORE_PROVIDER: Literal["local", "memory"] = "local"

    # 로컬 저장 경로 (local provider 전용)
    CONTENT_STORE_DIR: str = "./data/videos"

    # 스트림 복사 단위 (bytes)
    CONTENT_STORE_CHUNK_SIZE: int = 64 * 1024

    # =========================================================================
    # CORS 설정
    # =========================================================================
    # 허용할 Origin (쉼표로 구분)
    CORS_ORIGINS: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # .env에 정의되지 않은 추가 필드 무시
    )

    @field_validator("SERVICE_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Any) -> Any:
        """끝의 '/'를 제거하여 data_url에 '//'가 생기지 않도록 합니다."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            level = v.strip().upper()
            if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ValueError(f"Unknown LOG_LEVEL: {v}")
            return level
        return v

    @field_validator("CONTENT_STORE_CHUNK_SIZE")
    @classmethod
    def positive_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("CONTENT_STORE_CHUNK_SIZE must be positive")
        return v

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGINS를 리스트로 반환합니다."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다.

    lru_cache를 사용하여 싱글턴처럼 동작하며,
    최초 호출 시에만 Settings 인스턴스를 생성합니다.

    Returns:
        Settings: 애플리케이션 설정 인스턴스

    사용 예시:
        from app.core.config import get_settings
        settings = get_settings()
        print(settings.APP_NAME)
    """
    return Settings()


def clear_settings_cache() -> None:
    """
    설정 캐시를 클리어합니다.

    테스트 환경에서 환경변수 변경 후 Settings를 다시 로드할 때 사용합니다.
    """
    get_settings.cache_clear()
