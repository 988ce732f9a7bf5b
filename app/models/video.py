"""
Video Catalog Models

영상 카탈로그 등록/조회/검색 및 좋아요 API에서 사용하는 데이터 모델입니다.

주요 모델:
- Video: 카탈로그 항목 (id=0이면 아직 등록되지 않은 상태)
- VideoStatus: 업로드 완료 응답
- LikeResult / ContentResult: 서비스 계층의 결과 값 (예외 대신 반환)
- TitleMatch: 제목 검색 방식

서버 소유 필드:
- id, data_url: 최초 등록 시 서버가 할당, 이후 변경 불가
- likes: Like Ledger의 사용자 집합 크기와 항상 일치
- content_type: 바이너리 업로드 시 설정 (업로드 전 빈 문자열)
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class VideoState(str, Enum):
    """영상 데이터 상태."""

    READY = "READY"


class LikeResult(str, Enum):
    """좋아요/좋아요 취소 결과.

    상태 머신: NO_LIKE(user) ⇄ LIKED_BY(user)
    같은 상태로의 전이는 거부됩니다 (멱등 처리하지 않음).
    """

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"  # 영상 없음
    DUPLICATE_LIKE = "DUPLICATE_LIKE"  # 이미 좋아요함
    NOT_PREVIOUSLY_LIKED = "NOT_PREVIOUSLY_LIKED"  # 좋아요한 적 없음


class ContentResult(str, Enum):
    """영상 바이너리 저장/조회 결과."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"  # 영상 또는 저장된 데이터 없음


class TitleMatch(str, Enum):
    """제목 검색 방식."""

    EXACT = "exact"  # 완전 일치 (기본)
    CONTAINS = "contains"  # 대소문자 무시 부분 일치


# =============================================================================
# Video
# =============================================================================


class Video(BaseModel):
    """카탈로그 영상 항목.

    Attributes:
        id: 영상 ID (0이면 미할당, 서버가 1부터 순차 할당)
        title: 표시 제목 (중복 허용)
        duration: 영상 길이 (밀리초)
        content_type: 바이너리 MIME 타입 (업로드 시 설정)
        data_url: 바이너리 다운로드 URL (최초 id 할당 시 계산, 불변)
        likes: 좋아요 수
    """

    id: int = Field(0, ge=0, description="영상 ID (0 = 미할당)")
    title: str = Field("", description="영상 제목")
    duration: int = Field(0, ge=0, description="영상 길이 (ms)")
    content_type: str = Field("", description="바이너리 MIME 타입")
    data_url: str = Field("", description="바이너리 다운로드 URL (서버 계산)")
    likes: int = Field(0, ge=0, description="좋아요 수 (서버 계산)")


class VideoStatus(BaseModel):
    """영상 데이터 업로드 응답."""

    state: VideoState = Field(VideoState.READY, description="영상 데이터 상태")
