"""
로깅 설정 모듈 (Logging Configuration Module)

Python 기본 logging 모듈로 catalog 서비스의 콘솔 로그를 구성합니다.
포맷/날짜 포맷/레벨은 모두 Settings(LOG_*)에서 읽습니다.

setup_logging은 lifespan 시작마다 호출될 수 있으므로 멱등입니다:
이 모듈이 붙인 핸들러만 교체하고, uvicorn이나 pytest가 붙인 핸들러는 건드리지 않습니다.
"""

import logging
import sys
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.core.config import Settings


# 이 모듈이 설치한 핸들러 식별용 이름
CONSOLE_HANDLER_NAME = "video-catalog-console"

# 레벨만 맞춰주는 uvicorn 로거 (자체 핸들러 사용)
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error")
UVICORN_ACCESS_LOGGER = "uvicorn.access"


def _find_console_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            return handler
    return None


def build_console_handler(settings: "Settings") -> logging.Handler:
    """Settings의 포맷으로 stdout 핸들러를 생성합니다."""
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(fmt=settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)
    )
    return handler


def setup_logging(settings: "Settings") -> None:
    """
    애플리케이션 로깅을 설정합니다.

    Args:
        settings: 애플리케이션 설정 인스턴스

    설정 내용:
        - 루트 로거 레벨 = settings.LOG_LEVEL
        - 루트 로거에 catalog 콘솔 핸들러 1개 (재호출 시 교체)
        - uvicorn 로거 레벨 동기화, LOG_ACCESS=False면 access 로그 억제
    """
    log_level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    previous = _find_console_handler(root_logger)
    if previous is not None:
        root_logger.removeHandler(previous)
        previous.close()

    console_handler = build_console_handler(settings)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    for logger_name in UVICORN_LOGGERS:
        logging.getLogger(logger_name).setLevel(log_level)

    access_level = log_level if settings.LOG_ACCESS else max(log_level, logging.WARNING)
    logging.getLogger(UVICORN_ACCESS_LOGGER).setLevel(access_level)

    app_logger = logging.getLogger("app")
    app_logger.setLevel(log_level)
    app_logger.info(
        f"Logging configured: level={settings.LOG_LEVEL}, access_log={settings.LOG_ACCESS}, "
        f"app={settings.APP_NAME}, env={settings.APP_ENV}"
    )


def get_logger(name: str) -> logging.Logger:
    """이름별 로거를 반환합니다 (보통 __name__)."""
    return logging.getLogger(name)
