"""
공용 예외 및 에러 타입 정의 (Core Exceptions Module)

에러 분류:
- NOT_FOUND: 존재하지 않는 video id
- DUPLICATE_LIKE: 이미 좋아요한 영상에 다시 좋아요
- NOT_PREVIOUSLY_LIKED: 좋아요하지 않은 영상에 좋아요 취소
- CONTENT_IO_ERROR: 영상 바이너리 읽기/쓰기 실패
- UNAUTHORIZED: 호출자 식별 불가

NOT_FOUND / DUPLICATE_LIKE / NOT_PREVIOUSLY_LIKED는 서비스 계층에서
결과 값(LikeResult, ContentResult)으로 반환됩니다.
예외로 전파되는 것은 I/O 실패(ContentStoreError)뿐입니다.

사용 방법:
    from app.core.exceptions import ContentStoreError, ErrorType

    try:
        store.save(video_id, stream)
    except OSError as e:
        raise ContentStoreError("write failed", video_id, e)
"""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """
    에러 타입 분류.

    HTTP 응답의 detail.error_type 필드에 사용됩니다.
    """

    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_LIKE = "DUPLICATE_LIKE"
    NOT_PREVIOUSLY_LIKED = "NOT_PREVIOUSLY_LIKED"
    CONTENT_IO_ERROR = "CONTENT_IO_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"


class ContentStoreError(Exception):
    """
    Content Store I/O 실패 예외.

    스트림 읽기/쓰기 도중 실패했을 때 발생합니다.
    실패한 저장은 이전 콘텐츠를 그대로 남기며, 절반만 쓰인 파일은 노출되지 않습니다.

    Attributes:
        message: 에러 메시지
        video_id: 대상 영상 ID
        original_error: 원본 예외 (디버깅용)
    """

    def __init__(
        self,
        message: str,
        video_id: int,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.message = message
        self.video_id = video_id
        self.original_error = original_error
        self.error_type = ErrorType.CONTENT_IO_ERROR

        super().__init__(f"Content store failed for video {video_id}: {message}")

    def __repr__(self) -> str:
        return (
            f"ContentStoreError("
            f"video_id={self.video_id}, "
            f"message='{self.message}', "
            f"original_error={self.original_error!r})"
        )
