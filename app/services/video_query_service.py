"""
Video Query Service

Registry 스냅샷 위에서 동작하는 읽기 전용 검색입니다.

- find_by_title: 제목 검색 (기본 완전 일치, 옵션으로 대소문자 무시 부분 일치)
- find_by_duration_less_than: 길이 < threshold (엄격한 부등호)

일치 항목이 없으면 빈 리스트를 반환합니다 (에러 아님).
"""

from typing import List, Optional

from app.models.video import TitleMatch, Video
from app.services.video_registry import VideoRegistry, get_video_registry


class VideoQueryService:
    """영상 검색 서비스."""

    def __init__(self, registry: Optional[VideoRegistry] = None) -> None:
        self._registry = registry or get_video_registry()

    def find_by_title(
        self,
        title: str,
        match: TitleMatch = TitleMatch.EXACT,
    ) -> List[Video]:
        """제목으로 영상을 검색합니다.

        Args:
            title: 검색어
            match: EXACT(완전 일치) 또는 CONTAINS(대소문자 무시 부분 일치)

        Returns:
            List[Video]: 일치하는 영상 목록 (id 오름차순)
        """
        snapshot = self._registry.list()
        if match == TitleMatch.CONTAINS:
            needle = title.casefold()
            return [v for v in snapshot if needle in v.title.casefold()]
        return [v for v in snapshot if v.title == title]

    def find_by_duration_less_than(self, threshold: int) -> List[Video]:
        """길이가 threshold(ms)보다 짧은 영상을 반환합니다."""
        if threshold <= 0:
            return []
        return [v for v in self._registry.list() if v.duration < threshold]
