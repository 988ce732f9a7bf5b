"""
Video Data Service

영상 바이너리 업로드/다운로드를 담당합니다.
Registry로 video id를 먼저 확인한 뒤 Content Store에 위임합니다.

- save: 존재하지 않는 영상이면 NOT_FOUND (Content Store에 도달하지 않음)
- copy_to / iter_content: 영상이 없거나 저장된 데이터가 없으면 NOT_FOUND
- 업로드 성공 시 Video.content_type 기록

스트리밍 중에는 Registry Lock을 잡지 않습니다.
"""

import mimetypes
from typing import BinaryIO, Iterator, Optional, Tuple

from app.clients.content_store import BaseContentStore, get_content_store
from app.core.logging import get_logger
from app.models.video import ContentResult
from app.services.video_registry import VideoRegistry, get_video_registry

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def resolve_content_type(
    content_type: Optional[str],
    filename: Optional[str] = None,
) -> str:
    """업로드 MIME 타입을 결정합니다.

    우선순위: 요청의 content_type → 파일명 추론 → application/octet-stream
    """
    if content_type:
        return content_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_CONTENT_TYPE


class VideoDataService:
    """영상 바이너리 서비스.

    Usage:
        service = VideoDataService()
        result = service.save(1, upload.file, content_type="video/mp4")
        if result == ContentResult.NOT_FOUND:
            ...
    """

    def __init__(
        self,
        registry: Optional[VideoRegistry] = None,
        store: Optional[BaseContentStore] = None,
    ) -> None:
        self._registry = registry or get_video_registry()
        self._store = store or get_content_store()

    def save(
        self,
        video_id: int,
        stream: BinaryIO,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> ContentResult:
        """영상 바이너리를 저장합니다.

        Raises:
            ContentStoreError: 저장 실패 시 (content_type은 기록되지 않음)
        """
        if not self._registry.exists(video_id):
            logger.warning(f"Upload for unknown video: video_id={video_id}")
            return ContentResult.NOT_FOUND

        replaced = self._store.exists(video_id)
        size_bytes = self._store.save(video_id, stream)
        self._registry.set_content_type(video_id, content_type)

        logger.info(
            f"Video data stored: video_id={video_id}, "
            f"content_type={content_type}, size={size_bytes}, replaced={replaced}"
        )
        return ContentResult.OK

    def copy_to(self, video_id: int, sink: BinaryIO) -> ContentResult:
        """저장된 영상 바이너리를 sink로 복사합니다."""
        if not self._registry.exists(video_id):
            return ContentResult.NOT_FOUND
        if not self._store.copy_to(video_id, sink):
            return ContentResult.NOT_FOUND
        return ContentResult.OK

    def iter_content(
        self, video_id: int
    ) -> Tuple[ContentResult, Optional[Iterator[bytes]], str]:
        """HTTP 스트리밍용 청크 이터레이터를 반환합니다.

        Returns:
            (결과, 이터레이터 또는 None, content_type)
        """
        video = self._registry.get(video_id)
        if video is None:
            return ContentResult.NOT_FOUND, None, ""

        chunks = self._store.iter_content(video_id)
        if chunks is None:
            return ContentResult.NOT_FOUND, None, ""

        return ContentResult.OK, chunks, video.content_type or DEFAULT_CONTENT_TYPE
