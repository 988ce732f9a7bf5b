"""
Video Catalog API Router Module

영상 메타데이터 등록/조회, 바이너리 업로드/다운로드, 좋아요, 검색 API를 제공합니다.

Endpoints:
    - GET  /video: 영상 목록
    - POST /video: 영상 등록/갱신
    - GET  /video/{id}: 영상 조회
    - POST /video/{id}/data: 영상 바이너리 업로드 (multipart, field=data)
    - GET  /video/{id}/data: 영상 바이너리 다운로드
    - POST /video/{id}/like: 좋아요
    - POST /video/{id}/unlike: 좋아요 취소
    - GET  /video/{id}/likedby: 좋아요한 사용자 목록
    - GET  /video/search/findByName?title=: 제목 검색
    - GET  /video/search/findByDurationLessThan?duration=: 길이 검색

결과 → HTTP 상태:
    - NOT_FOUND → 404
    - DUPLICATE_LIKE / NOT_PREVIOUSLY_LIKED → 400
    - CONTENT_IO_ERROR → 500
"""

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import StreamingResponse

from app.api.v1.dependencies import (
    get_current_username,
    get_data_service,
    get_ledger,
    get_query_service,
    get_registry,
)
from app.core.exceptions import ContentStoreError, ErrorType
from app.core.logging import get_logger
from app.models.video import (
    ContentResult,
    LikeResult,
    TitleMatch,
    Video,
    VideoState,
    VideoStatus,
)
from app.services.like_ledger import LikeLedger
from app.services.video_data_service import VideoDataService, resolve_content_type
from app.services.video_query_service import VideoQueryService
from app.services.video_registry import VideoRegistry

logger = get_logger(__name__)

router = APIRouter(prefix="/video", tags=["Video"])


def _not_found(video_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error_type": ErrorType.NOT_FOUND.value,
            "message": f"Video {video_id} not found.",
        },
    )


def _content_error(e: ContentStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error_type": e.error_type.value,
            "message": f"Video data I/O failed for video {e.video_id}.",
        },
    )


_LIKE_REJECTIONS = {
    LikeResult.DUPLICATE_LIKE: "User has already liked this video.",
    LikeResult.NOT_PREVIOUSLY_LIKED: "User has not liked this video.",
}


def _raise_for_like_result(video_id: int, result: LikeResult) -> None:
    """LikeResult를 HTTP 에러로 변환합니다. OK면 아무것도 하지 않습니다."""
    if result == LikeResult.OK:
        return
    if result == LikeResult.NOT_FOUND:
        raise _not_found(video_id)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error_type": result.value, "message": _LIKE_REJECTIONS[result]},
    )


# =============================================================================
# Search (경로 충돌 방지를 위해 /{video_id}보다 먼저 등록)
# =============================================================================


@router.get(
    "/search/findByName",
    response_model=List[Video],
    summary="Find Videos By Title",
)
async def find_by_title(
    title: str = Query(..., description="검색할 제목"),
    match: TitleMatch = Query(TitleMatch.EXACT, description="exact | contains"),
    query: VideoQueryService = Depends(get_query_service),
) -> List[Video]:
    """제목이 일치하는 영상 목록. 없으면 빈 리스트."""
    return query.find_by_title(title, match)


@router.get(
    "/search/findByDurationLessThan",
    response_model=List[Video],
    summary="Find Videos Shorter Than",
)
async def find_by_duration_less_than(
    duration: int = Query(..., description="최대 길이 (ms, 미포함)"),
    query: VideoQueryService = Depends(get_query_service),
) -> List[Video]:
    """길이가 duration(ms)보다 짧은 영상 목록."""
    return query.find_by_duration_less_than(duration)


# =============================================================================
# Metadata
# =============================================================================


@router.get("", response_model=List[Video], summary="List Videos")
async def list_videos(
    registry: VideoRegistry = Depends(get_registry),
) -> List[Video]:
    return registry.list()


@router.post(
    "",
    response_model=Video,
    summary="Add or Update Video",
    responses={
        200: {"description": "Stored video including server-assigned fields"},
        404: {"description": "Update for an id that was never assigned"},
    },
)
async def add_video(
    video: Video,
    registry: VideoRegistry = Depends(get_registry),
) -> Video:
    """
    영상을 등록하거나 갱신합니다.

    - `id`가 0이면 새 id와 `data_url`을 할당합니다.
    - 기존 `id`면 제목/길이를 교체합니다 (`data_url`, `likes`, `content_type` 유지).
    """
    saved = registry.upsert(video)
    if saved is None:
        raise _not_found(video.id)
    return saved


@router.get("/{video_id}", response_model=Video, summary="Get Video")
async def get_video(
    video_id: int,
    registry: VideoRegistry = Depends(get_registry),
) -> Video:
    video = registry.get(video_id)
    if video is None:
        raise _not_found(video_id)
    return video


# =============================================================================
# Binary data
# =============================================================================


@router.post(
    "/{video_id}/data",
    response_model=VideoStatus,
    summary="Upload Video Data",
    responses={
        200: {"description": "Data stored (state=READY)"},
        404: {"description": "Video not found"},
        500: {"description": "Data could not be stored"},
    },
)
def upload_video_data(
    video_id: int,
    data: UploadFile = File(..., description="영상 바이너리"),
    service: VideoDataService = Depends(get_data_service),
) -> VideoStatus:
    """
    영상 바이너리를 업로드합니다.

    업로드 파일의 Content-Type이 영상의 `content_type`으로 기록됩니다.
    """
    content_type = resolve_content_type(data.content_type, data.filename)
    try:
        result = service.save(video_id, data.file, content_type)
    except ContentStoreError as e:
        raise _content_error(e)

    if result == ContentResult.NOT_FOUND:
        raise _not_found(video_id)
    return VideoStatus(state=VideoState.READY)


@router.get(
    "/{video_id}/data",
    summary="Download Video Data",
    responses={
        200: {"description": "Video bytes"},
        404: {"description": "Video or its data not found"},
    },
)
def download_video_data(
    video_id: int,
    service: VideoDataService = Depends(get_data_service),
) -> StreamingResponse:
    try:
        result, chunks, content_type = service.iter_content(video_id)
    except ContentStoreError as e:
        raise _content_error(e)

    if result == ContentResult.NOT_FOUND:
        raise _not_found(video_id)
    return StreamingResponse(chunks, media_type=content_type)


# =============================================================================
# Likes
# =============================================================================


@router.post(
    "/{video_id}/like",
    summary="Like Video",
    responses={
        200: {"description": "Liked"},
        400: {"description": "User has already liked the video"},
        404: {"description": "Video not found"},
    },
)
async def like_video(
    video_id: int,
    username: str = Depends(get_current_username),
    ledger: LikeLedger = Depends(get_ledger),
) -> None:
    _raise_for_like_result(video_id, ledger.like(video_id, username))


@router.post(
    "/{video_id}/unlike",
    summary="Unlike Video",
    responses={
        200: {"description": "Like removed"},
        400: {"description": "User has not previously liked the video"},
        404: {"description": "Video not found"},
    },
)
async def unlike_video(
    video_id: int,
    username: str = Depends(get_current_username),
    ledger: LikeLedger = Depends(get_ledger),
) -> None:
    _raise_for_like_result(video_id, ledger.unlike(video_id, username))


@router.get(
    "/{video_id}/likedby",
    response_model=List[str],
    summary="Users Who Liked Video",
)
async def users_who_liked(
    video_id: int,
    ledger: LikeLedger = Depends(get_ledger),
) -> List[str]:
    usernames = ledger.users_who_liked(video_id)
    if usernames is None:
        raise _not_found(video_id)
    return usernames
