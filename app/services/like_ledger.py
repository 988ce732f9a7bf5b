"""
Like Ledger

영상별 좋아요 사용자 집합과 좋아요 수를 관리합니다.

상태 전이 (video_id, username 단위):
- like:   NO_LIKE → LIKED_BY   (이미 LIKED_BY면 DUPLICATE_LIKE)
- unlike: LIKED_BY → NO_LIKE   (이미 NO_LIKE면 NOT_PREVIOUSLY_LIKED)

검증 순서:
1. Registry.exists(video_id) 확인 → 없으면 NOT_FOUND
2. 영상별 Lock 안에서 확인-변경-기록을 한 번에 수행

잠금 정책:
- 같은 영상에 대한 like/unlike는 직렬화
- 다른 영상끼리는 서로 다른 Lock을 사용 (서비스 전역 Lock 없음)
- 좋아요 수는 같은 임계 구역 안에서 Registry에 기록 (Ledger Lock → Registry Lock 순서)
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from app.core.logging import get_logger
from app.models.video import LikeResult
from app.services.video_registry import VideoRegistry, get_video_registry

logger = get_logger(__name__)


@dataclass
class _LedgerEntry:
    """영상 하나의 좋아요 상태."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    usernames: Set[str] = field(default_factory=set)


class LikeLedger:
    """영상 좋아요 원장.

    Usage:
        ledger = LikeLedger(registry)
        ledger.like(1, "alice")            # LikeResult.OK
        ledger.like(1, "alice")            # LikeResult.DUPLICATE_LIKE
        ledger.users_who_liked(1)          # ["alice"]
        ledger.unlike(1, "alice")          # LikeResult.OK
    """

    def __init__(self, registry: VideoRegistry) -> None:
        self._registry = registry
        self._entries: Dict[int, _LedgerEntry] = {}
        # 항목 생성 전용 Lock (상태 전이에는 사용하지 않음)
        self._entries_lock = threading.Lock()

    def _entry_for(self, video_id: int, create: bool) -> Optional[_LedgerEntry]:
        entry = self._entries.get(video_id)
        if entry is None and create:
            with self._entries_lock:
                entry = self._entries.get(video_id)
                if entry is None:
                    entry = _LedgerEntry()
                    self._entries[video_id] = entry
        return entry

    def like(self, video_id: int, username: str) -> LikeResult:
        """영상에 좋아요를 추가합니다.

        Args:
            video_id: 영상 ID
            username: 호출자 사용자명

        Returns:
            LikeResult: OK, NOT_FOUND, DUPLICATE_LIKE 중 하나
        """
        if not self._registry.exists(video_id):
            return LikeResult.NOT_FOUND

        entry = self._entry_for(video_id, create=True)
        with entry.lock:
            if username in entry.usernames:
                logger.warning(f"Duplicate like: video_id={video_id}, user={username}")
                return LikeResult.DUPLICATE_LIKE
            entry.usernames.add(username)
            self._registry.set_likes(video_id, len(entry.usernames))
            count = len(entry.usernames)

        logger.info(f"Video liked: video_id={video_id}, user={username}, likes={count}")
        return LikeResult.OK

    def unlike(self, video_id: int, username: str) -> LikeResult:
        """영상의 좋아요를 취소합니다.

        Returns:
            LikeResult: OK, NOT_FOUND, NOT_PREVIOUSLY_LIKED 중 하나
        """
        if not self._registry.exists(video_id):
            return LikeResult.NOT_FOUND

        entry = self._entry_for(video_id, create=False)
        if entry is None:
            logger.warning(f"Unlike without like: video_id={video_id}, user={username}")
            return LikeResult.NOT_PREVIOUSLY_LIKED

        with entry.lock:
            if username not in entry.usernames:
                logger.warning(f"Unlike without like: video_id={video_id}, user={username}")
                return LikeResult.NOT_PREVIOUSLY_LIKED
            entry.usernames.discard(username)
            self._registry.set_likes(video_id, len(entry.usernames))
            count = len(entry.usernames)

        logger.info(f"Video unliked: video_id={video_id}, user={username}, likes={count}")
        return LikeResult.OK

    def users_who_liked(self, video_id: int) -> Optional[List[str]]:
        """영상에 좋아요한 사용자 목록 (정렬됨). 영상이 없으면 None."""
        if not self._registry.exists(video_id):
            return None

        entry = self._entry_for(video_id, create=False)
        if entry is None:
            return []
        with entry.lock:
            return sorted(entry.usernames)


# 전역 인스턴스
_like_ledger: Optional[LikeLedger] = None
_like_ledger_lock = threading.Lock()


def get_like_ledger() -> LikeLedger:
    """LikeLedger 인스턴스 반환 (전역 VideoRegistry 사용)."""
    global _like_ledger
    if _like_ledger is None:
        with _like_ledger_lock:
            if _like_ledger is None:
                _like_ledger = LikeLedger(get_video_registry())
    return _like_ledger


def clear_like_ledger() -> None:
    """원장 초기화 (테스트용)."""
    global _like_ledger
    with _like_ledger_lock:
        _like_ledger = None
