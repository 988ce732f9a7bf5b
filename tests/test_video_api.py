"""
Video Catalog API 테스트

TestClient로 라우터 → 서비스 → 결과/HTTP 상태 매핑을 검증합니다.

테스트 케이스:
1. 등록/조회/목록/갱신
2. 바이너리 업로드/다운로드
3. 좋아요/좋아요 취소/좋아요한 사용자
4. 검색
5. 에러 매핑 (404 / 400 / 401 / 500)
"""

import logging

import pytest
from fastapi.testclient import TestClient

from app.api.v1.dependencies import get_data_service
from app.core.exceptions import ContentStoreError
from app.main import app

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def client() -> TestClient:
    """테스트용 TestClient (lifespan 포함)."""
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _add(client: TestClient, title: str = "clip", duration: int = 1000) -> dict:
    response = client.post("/video", json={"title": title, "duration": duration})
    assert response.status_code == 200
    return response.json()


# =============================================================================
# 메타데이터
# =============================================================================


class TestVideoMetadata:
    def test_add_video_assigns_server_fields(self, client: TestClient):
        body = _add(client, "intro", 1500)

        assert body["id"] == 1
        assert body["title"] == "intro"
        assert body["duration"] == 1500
        assert body["data_url"] == "http://test:8080/video/1/data"
        assert body["likes"] == 0
        assert body["content_type"] == ""

    def test_get_video(self, client: TestClient):
        created = _add(client)

        response = client.get(f"/video/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_video(self, client: TestClient):
        response = client.get("/video/42")

        assert response.status_code == 404
        assert response.json()["detail"]["error_type"] == "NOT_FOUND"

    def test_list_videos(self, client: TestClient):
        assert client.get("/video").json() == []

        _add(client, "a")
        _add(client, "b")

        titles = [v["title"] for v in client.get("/video").json()]
        assert titles == ["a", "b"]

    def test_update_keeps_data_url(self, client: TestClient):
        created = _add(client, "old")

        response = client.post(
            "/video",
            json={"id": created["id"], "title": "new", "duration": 5, "data_url": "x"},
        )

        assert response.status_code == 200
        assert response.json()["title"] == "new"
        assert response.json()["data_url"] == created["data_url"]
        assert len(client.get("/video").json()) == 1

    def test_update_unknown_id(self, client: TestClient):
        response = client.post("/video", json={"id": 77, "title": "ghost"})
        assert response.status_code == 404

    def test_negative_duration_rejected(self, client: TestClient):
        response = client.post("/video", json={"title": "bad", "duration": -1})
        assert response.status_code == 422

    def test_shutdown_logs_catalog_summary(self, caplog):
        caplog.set_level(logging.INFO, logger="app.main")

        with TestClient(app) as c:
            _add(c, "a")
            _add(c, "b")

        messages = [r.getMessage() for r in caplog.records]
        assert any("videos=2, last_id=2" in m for m in messages)


# =============================================================================
# 바이너리 데이터
# =============================================================================


class TestVideoData:
    def test_upload_and_download(self, client: TestClient):
        video_id = _add(client)["id"]
        payload = b"\x00\x00\x00\x18ftypmp42" + bytes(range(200))

        upload = client.post(
            f"/video/{video_id}/data",
            files={"data": ("clip.mp4", payload, "video/mp4")},
        )
        assert upload.status_code == 200
        assert upload.json() == {"state": "READY"}

        download = client.get(f"/video/{video_id}/data")
        assert download.status_code == 200
        assert download.content == payload
        assert download.headers["content-type"] == "video/mp4"

        assert client.get(f"/video/{video_id}").json()["content_type"] == "video/mp4"

    def test_upload_to_missing_video(self, client: TestClient):
        response = client.post(
            "/video/9/data",
            files={"data": ("clip.mp4", b"abc", "video/mp4")},
        )
        assert response.status_code == 404

    def test_download_before_upload(self, client: TestClient):
        video_id = _add(client)["id"]
        assert client.get(f"/video/{video_id}/data").status_code == 404

    def test_download_missing_video(self, client: TestClient):
        assert client.get("/video/9/data").status_code == 404

    def test_upload_io_error(self, client: TestClient):
        video_id = _add(client)["id"]

        class BrokenService:
            def save(self, video_id, stream, content_type):
                raise ContentStoreError("disk full", video_id)

        app.dependency_overrides[get_data_service] = lambda: BrokenService()

        response = client.post(
            f"/video/{video_id}/data",
            files={"data": ("clip.mp4", b"abc", "video/mp4")},
        )

        assert response.status_code == 500
        assert response.json()["detail"]["error_type"] == "CONTENT_IO_ERROR"


# =============================================================================
# 좋아요
# =============================================================================


class TestLikes:
    def test_like_and_liked_by(self, client: TestClient):
        video_id = _add(client)["id"]

        assert client.post(f"/video/{video_id}/like", headers=ALICE).status_code == 200
        assert client.post(f"/video/{video_id}/like", headers=BOB).status_code == 200

        assert client.get(f"/video/{video_id}/likedby").json() == ["alice", "bob"]
        assert client.get(f"/video/{video_id}").json()["likes"] == 2

    def test_duplicate_like(self, client: TestClient):
        video_id = _add(client)["id"]
        client.post(f"/video/{video_id}/like", headers=ALICE)

        response = client.post(f"/video/{video_id}/like", headers=ALICE)

        assert response.status_code == 400
        assert response.json()["detail"]["error_type"] == "DUPLICATE_LIKE"
        assert client.get(f"/video/{video_id}").json()["likes"] == 1

    def test_unlike(self, client: TestClient):
        video_id = _add(client)["id"]
        client.post(f"/video/{video_id}/like", headers=ALICE)

        assert client.post(f"/video/{video_id}/unlike", headers=ALICE).status_code == 200
        assert client.get(f"/video/{video_id}/likedby").json() == []
        assert client.get(f"/video/{video_id}").json()["likes"] == 0

    def test_unlike_without_like(self, client: TestClient):
        video_id = _add(client)["id"]

        response = client.post(f"/video/{video_id}/unlike", headers=ALICE)

        assert response.status_code == 400
        assert response.json()["detail"]["error_type"] == "NOT_PREVIOUSLY_LIKED"

    @pytest.mark.parametrize("action", ["like", "unlike"])
    def test_like_missing_video(self, client: TestClient, action: str):
        response = client.post(f"/video/5/{action}", headers=ALICE)
        assert response.status_code == 404

    def test_liked_by_missing_video(self, client: TestClient):
        assert client.get("/video/5/likedby").status_code == 404

    def test_like_requires_identity(self, client: TestClient):
        video_id = _add(client)["id"]

        response = client.post(f"/video/{video_id}/like")

        assert response.status_code == 401
        assert response.json()["detail"]["error_type"] == "UNAUTHORIZED"


# =============================================================================
# 검색
# =============================================================================


class TestSearch:
    @pytest.fixture(autouse=True)
    def catalog(self, client: TestClient):
        _add(client, "Intro", 50)
        _add(client, "Deep Dive", 100)
        _add(client, "intro", 150)

    def test_find_by_name_exact(self, client: TestClient):
        response = client.get("/video/search/findByName", params={"title": "Intro"})

        assert response.status_code == 200
        assert [v["duration"] for v in response.json()] == [50]

    def test_find_by_name_contains(self, client: TestClient):
        response = client.get(
            "/video/search/findByName", params={"title": "intro", "match": "contains"}
        )
        assert [v["title"] for v in response.json()] == ["Intro", "intro"]

    def test_find_by_name_no_match(self, client: TestClient):
        response = client.get("/video/search/findByName", params={"title": "nope"})
        assert response.status_code == 200
        assert response.json() == []

    def test_find_by_duration_less_than(self, client: TestClient):
        response = client.get(
            "/video/search/findByDurationLessThan", params={"duration": 100}
        )
        assert [v["duration"] for v in response.json()] == [50]

    def test_find_by_duration_zero(self, client: TestClient):
        response = client.get(
            "/video/search/findByDurationLessThan", params={"duration": 0}
        )
        assert response.json() == []

    def test_find_by_name_requires_title(self, client: TestClient):
        assert client.get("/video/search/findByName").status_code == 422
