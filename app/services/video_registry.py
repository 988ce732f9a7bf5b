"""
Video Registry

video id → Video 메타데이터 매핑의 유일한 소유자입니다.
id 할당, 등록/갱신(upsert), 조회, 목록, 존재 여부 확인을 담당합니다.

동시성:
- IdAllocator: 자체 Lock으로 보호되는 단조 증가 카운터 (1부터 시작, 재사용 없음)
- VideoRegistry: 매핑 쓰기 시 Registry Lock 사용
- 반환 값은 항상 복사본 (호출자가 저장된 상태를 직접 수정할 수 없음)

Usage:
    registry = VideoRegistry(base_url="http://localhost:8080")
    saved = registry.upsert(Video(title="intro", duration=1000))
    saved.id        # 1
    saved.data_url  # http://localhost:8080/video/1/data
"""

import threading
from typing import Dict, List, Optional

from app.core.logging import get_logger
from app.models.video import Video

logger = get_logger(__name__)

# data_url 경로 형식
VIDEO_DATA_PATH = "/video/{video_id}/data"


# =============================================================================
# Id Allocator
# =============================================================================


class IdAllocator:
    """스레드 안전 id 할당기.

    Registry 생성 시 주입되며 Registry 수명 동안만 유효합니다.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def allocate(self) -> int:
        """다음 id를 할당합니다."""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def last_allocated(self) -> int:
        """마지막으로 할당된 id (없으면 start - 1)."""
        with self._lock:
            return self._next - 1


# =============================================================================
# Video Registry
# =============================================================================


class VideoRegistry:
    """영상 메타데이터 저장소 (인메모리).

    Registry가 정규 매핑을 소유하며 별도의 캐시 계층은 없습니다.
    프로세스 재시작 시 데이터는 유지되지 않습니다.
    """

    def __init__(
        self,
        base_url: str,
        allocator: Optional[IdAllocator] = None,
    ) -> None:
        """VideoRegistry 초기화.

        Args:
            base_url: data_url 계산에 사용할 서비스 기본 주소
            allocator: id 할당기 (None이면 새로 생성)
        """
        self._base_url = base_url.rstrip("/")
        self._allocator = allocator or IdAllocator()
        self._videos: Dict[int, Video] = {}
        self._lock = threading.Lock()

    def data_url_for(self, video_id: int) -> str:
        """id에 대한 data_url을 계산합니다."""
        return self._base_url + VIDEO_DATA_PATH.format(video_id=video_id)

    def assign_identity(self, video: Video) -> None:
        """id가 0이면 새 id와 data_url을 할당합니다. 그 외에는 변경하지 않습니다."""
        if video.id == 0:
            video.id = self._allocator.allocate()
            video.data_url = self.data_url_for(video.id)

    def upsert(self, video: Video) -> Optional[Video]:
        """영상을 등록하거나 기존 항목을 교체합니다.

        기존 항목을 교체할 때 서버 소유 필드(data_url, likes, content_type)는 유지됩니다.

        Args:
            video: 등록/갱신할 영상 (id=0이면 신규 등록)

        Returns:
            Optional[Video]: 저장된 영상의 복사본.
                할당된 적 없는 id로 갱신을 요청하면 None.
        """
        entity = video.model_copy()
        is_new = entity.id == 0

        if is_new:
            # 새 항목은 서버 소유 필드를 초기화
            entity.content_type = ""
            entity.likes = 0
            self.assign_identity(entity)

        with self._lock:
            if not is_new:
                stored = self._videos.get(entity.id)
                if stored is None:
                    logger.warning(f"Upsert rejected, unknown video id: {entity.id}")
                    return None
                entity.data_url = stored.data_url
                entity.likes = stored.likes
                entity.content_type = stored.content_type

            self._videos[entity.id] = entity
            result = entity.model_copy()

        if is_new:
            logger.info(f"Video registered: id={result.id}, title={result.title!r}")
        else:
            logger.info(f"Video updated: id={result.id}, title={result.title!r}")
        return result

    def get(self, video_id: int) -> Optional[Video]:
        """영상을 조회합니다. 없으면 None."""
        with self._lock:
            stored = self._videos.get(video_id)
            return stored.model_copy() if stored is not None else None

    def list(self) -> List[Video]:
        """현재 저장된 모든 영상의 스냅샷을 id 오름차순으로 반환합니다."""
        with self._lock:
            return [self._videos[k].model_copy() for k in sorted(self._videos)]

    def exists(self, video_id: int) -> bool:
        """영상 존재 여부를 확인합니다."""
        return video_id in self._videos

    def set_likes(self, video_id: int, likes: int) -> bool:
        """좋아요 수를 기록합니다 (Like Ledger 전용).

        Returns:
            bool: 대상 영상이 존재하면 True
        """
        with self._lock:
            stored = self._videos.get(video_id)
            if stored is None:
                return False
            stored.likes = likes
            return True

    def set_content_type(self, video_id: int, content_type: str) -> bool:
        """업로드된 바이너리의 MIME 타입을 기록합니다."""
        with self._lock:
            stored = self._videos.get(video_id)
            if stored is None:
                return False
            stored.content_type = content_type
            return True

    def stats(self) -> Dict[str, int]:
        """카탈로그 요약 (등록 수, 마지막 할당 id). 종료 로그에 사용합니다."""
        with self._lock:
            count = len(self._videos)
        return {"videos": count, "last_id": self._allocator.last_allocated}

    def clear(self) -> None:
        """모든 항목 삭제 (테스트용). 할당기는 초기화하지 않습니다."""
        with self._lock:
            self._videos.clear()


# 전역 저장소 인스턴스
_video_registry: Optional[VideoRegistry] = None
_video_registry_lock = threading.Lock()


def get_video_registry() -> VideoRegistry:
    """VideoRegistry 인스턴스 반환."""
    global _video_registry
    if _video_registry is None:
        with _video_registry_lock:
            if _video_registry is None:
                from app.core.config import get_settings

                _video_registry = VideoRegistry(base_url=get_settings().SERVICE_BASE_URL)
    return _video_registry


def clear_video_registry() -> None:
    """저장소 초기화 (테스트용)."""
    global _video_registry
    with _video_registry_lock:
        _video_registry = None
