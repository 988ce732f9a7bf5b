"""
Content Store

영상 바이너리 저장 어댑터 인터페이스 및 구현체.
video id로만 주소를 지정하며 메타데이터는 알지 못합니다.
id가 유효한지는 호출자(VideoDataService)가 Registry로 먼저 확인합니다.

지원 Provider:
- local: 로컬 파일 시스템 (임시 파일에 쓴 뒤 os.replace로 원자적 교체)
- memory: 인메모리 (전체를 버퍼링한 뒤 교체, 테스트/개발용)

저장 규칙:
- 스트림을 끝까지 읽거나 ContentStoreError로 실패
- 실패/중단된 저장은 이전 콘텐츠를 그대로 남김 (잘린 파일이 노출되지 않음)

환경변수:
- CONTENT_STORE_PROVIDER: local | memory (기본: local)
- CONTENT_STORE_DIR: 로컬 저장 경로 (기본: ./data/videos)
- CONTENT_STORE_CHUNK_SIZE: 스트림 복사 단위 (기본: 65536)
"""

import io
import os
import shutil
import tempfile
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional

from app.core.exceptions import ContentStoreError
from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


# =============================================================================
# Types and Enums
# =============================================================================


class ContentStoreProvider(str, Enum):
    """Content Store Provider 종류."""
    LOCAL = "local"
    MEMORY = "memory"


@dataclass
class ContentStoreConfig:
    """Content Store 설정."""
    provider: ContentStoreProvider = ContentStoreProvider.LOCAL
    local_path: str = "./data/videos"
    chunk_size: int = DEFAULT_CHUNK_SIZE


# =============================================================================
# Abstract Base Store
# =============================================================================


class BaseContentStore(ABC):
    """Content Store 기본 인터페이스.

    Interface:
    - save(video_id, stream) -> int (저장한 바이트 수)
    - copy_to(video_id, sink) -> bool (저장된 데이터가 없으면 False)
    - open(video_id) -> 읽기 스트림 또는 None
    """

    def __init__(self, config: Optional[ContentStoreConfig] = None):
        self.config = config or ContentStoreConfig()
        self._chunk_size = self.config.chunk_size

    @abstractmethod
    def save(self, video_id: int, stream: BinaryIO) -> int:
        """스트림 전체를 video_id의 콘텐츠로 저장합니다 (기존 콘텐츠 교체).

        Args:
            video_id: 영상 ID
            stream: 읽기 가능한 바이너리 스트림

        Returns:
            int: 저장한 바이트 수

        Raises:
            ContentStoreError: 읽기/쓰기 실패 시
        """
        pass

    @abstractmethod
    def open(self, video_id: int) -> Optional[BinaryIO]:
        """저장된 콘텐츠의 읽기 스트림을 반환합니다. 저장된 적 없으면 None."""
        pass

    @abstractmethod
    def exists(self, video_id: int) -> bool:
        """콘텐츠 저장 여부 (빈 콘텐츠도 저장된 것으로 간주)."""
        pass

    def copy_to(self, video_id: int, sink: BinaryIO) -> bool:
        """저장된 콘텐츠를 sink로 스트리밍합니다.

        Returns:
            bool: 복사했으면 True, 저장된 콘텐츠가 없으면 False

        Raises:
            ContentStoreError: 읽기/쓰기 실패 시
        """
        source = self.open(video_id)
        if source is None:
            return False
        try:
            with source:
                shutil.copyfileobj(source, sink, self._chunk_size)
        except Exception as e:
            logger.error(f"Content copy failed: video_id={video_id}, error={e}")
            raise ContentStoreError(str(e), video_id, e)
        return True

    def iter_content(self, video_id: int) -> Optional[Iterator[bytes]]:
        """저장된 콘텐츠를 청크 단위로 순회하는 이터레이터. 없으면 None.

        호출자가 순회를 중단해도 열린 스트림은 정리됩니다.
        """
        source = self.open(video_id)
        if source is None:
            return None
        return self._iter_chunks(source)

    def _iter_chunks(self, source: BinaryIO) -> Iterator[bytes]:
        with source:
            while True:
                chunk = source.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk


# =============================================================================
# Local Content Store
# =============================================================================


class LocalContentStore(BaseContentStore):
    """로컬 파일 시스템 Content Store.

    파일명: video-{id}.dat
    저장 중에는 같은 디렉토리의 임시 파일에 쓰고, 완료 후 os.replace로 교체합니다.
    동시에 읽는 쪽은 교체 전의 이전 파일 또는 완성된 새 파일만 보게 됩니다.
    """

    def __init__(self, config: Optional[ContentStoreConfig] = None):
        super().__init__(config)
        self._base_path = Path(self.config.local_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def _path_for(self, video_id: int) -> Path:
        return self._base_path / f"video-{video_id}.dat"

    def save(self, video_id: int, stream: BinaryIO) -> int:
        """스트림을 임시 파일에 기록한 뒤 원자적으로 교체합니다."""
        target = self._path_for(video_id)
        tmp = None
        committed = False
        size_bytes = 0
        try:
            tmp = tempfile.NamedTemporaryFile(
                dir=self._base_path,
                prefix=f".video-{video_id}-",
                suffix=".part",
                delete=False,
            )
            with tmp:
                while True:
                    chunk = stream.read(self._chunk_size)
                    if not chunk:
                        break
                    tmp.write(chunk)
                    size_bytes += len(chunk)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp.name, target)
            committed = True
        except Exception as e:
            logger.error(f"Local content store save failed: video_id={video_id}, error={e}")
            raise ContentStoreError(str(e), video_id, e)
        finally:
            if tmp is not None and not committed:
                # 중단/실패한 임시 파일 제거 (이전 콘텐츠는 유지)
                try:
                    os.unlink(tmp.name)
                except FileNotFoundError:
                    pass

        logger.info(f"Local content store: saved video_id={video_id}, size={size_bytes}")
        return size_bytes

    def open(self, video_id: int) -> Optional[BinaryIO]:
        try:
            return open(self._path_for(video_id), "rb")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ContentStoreError(str(e), video_id, e)

    def exists(self, video_id: int) -> bool:
        return self._path_for(video_id).is_file()


# =============================================================================
# In-Memory Content Store
# =============================================================================


class InMemoryContentStore(BaseContentStore):
    """인메모리 Content Store (테스트/개발용).

    스트림 전체를 Lock 밖에서 버퍼링한 뒤, Lock 안에서 참조만 교체합니다.
    """

    def __init__(self, config: Optional[ContentStoreConfig] = None):
        super().__init__(config)
        self._data: Dict[int, bytes] = {}
        self._lock = threading.Lock()

    def save(self, video_id: int, stream: BinaryIO) -> int:
        chunks = []
        try:
            while True:
                chunk = stream.read(self._chunk_size)
                if not chunk:
                    break
                chunks.append(chunk)
        except Exception as e:
            logger.error(f"Memory content store save failed: video_id={video_id}, error={e}")
            raise ContentStoreError(str(e), video_id, e)

        data = b"".join(chunks)
        with self._lock:
            self._data[video_id] = data

        logger.info(f"Memory content store: saved video_id={video_id}, size={len(data)}")
        return len(data)

    def open(self, video_id: int) -> Optional[BinaryIO]:
        with self._lock:
            data = self._data.get(video_id)
        if data is None:
            return None
        return io.BytesIO(data)

    def exists(self, video_id: int) -> bool:
        with self._lock:
            return video_id in self._data

    def clear(self) -> None:
        """모든 콘텐츠 삭제 (테스트용)."""
        with self._lock:
            self._data.clear()


# =============================================================================
# Factory Function
# =============================================================================


def create_content_store(
    provider: Optional[ContentStoreProvider] = None,
    config: Optional[ContentStoreConfig] = None,
) -> BaseContentStore:
    """Content Store 인스턴스를 생성합니다.

    Args:
        provider: Provider 종류. None이면 설정의 CONTENT_STORE_PROVIDER 사용.
        config: Content Store 설정. None이면 설정에서 구성.

    Returns:
        BaseContentStore: Content Store 인스턴스
    """
    if config is None:
        from app.core.config import get_settings
        settings = get_settings()

        config = ContentStoreConfig(
            provider=ContentStoreProvider(settings.CONTENT_STORE_PROVIDER),
            local_path=settings.CONTENT_STORE_DIR,
            chunk_size=settings.CONTENT_STORE_CHUNK_SIZE,
        )

    if provider is None:
        provider = config.provider

    if provider == ContentStoreProvider.MEMORY:
        return InMemoryContentStore(config)
    return LocalContentStore(config)


# =============================================================================
# Singleton for default store
# =============================================================================


_default_store: Optional[BaseContentStore] = None
_default_store_lock = threading.Lock()


def get_content_store() -> BaseContentStore:
    """기본 Content Store 싱글톤 인스턴스 반환."""
    global _default_store
    if _default_store is None:
        with _default_store_lock:
            if _default_store is None:
                _default_store = create_content_store()
    return _default_store


def clear_content_store() -> None:
    """Content Store 싱글톤 초기화 (테스트용)."""
    global _default_store
    with _default_store_lock:
        _default_store = None
