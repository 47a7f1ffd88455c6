"""Shared fixtures: an in-memory backend behind httpx.MockTransport."""

import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from scrollnet.client.api import ScrollNetAPI
from scrollnet.config import Settings

BASE_TIME = datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)


def make_video(n: int, created_at: Optional[datetime] = None, active: bool = True) -> dict:
    return {
        "id": str(uuid.UUID(int=n + 1)),
        "title": f"Video {n}",
        "description": f"Description {n}",
        "sourceUrl": f"https://storage.example.com/videos/{n}.mp4",
        "durationSeconds": 30 + n,
        "tags": ["tag-a", f"tag-{n}"],
        "thumbnailUrl": None,
        "createdAt": (created_at or BASE_TIME + timedelta(minutes=n)).isoformat(),
        "isActive": active,
    }


class FakeBackend:
    """Speaks the ScrollNet REST contract with dictionaries instead of Postgres."""

    def __init__(self, videos: Optional[List[dict]] = None):
        self.videos = list(videos or [])
        self.interactions: Dict[Tuple[Optional[str], str, str], dict] = {}
        self.feedback: List[dict] = []
        self.requests: List[httpx.Request] = []
        self.failing: set = set()
        self.unreachable = False
        self.drop_next = 0

    def feed(self) -> List[dict]:
        active = [v for v in self.videos if v.get("isActive", True)]
        return sorted(active, key=lambda v: (v["createdAt"], v["id"]), reverse=True)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.drop_next:
            self.drop_next -= 1
            raise httpx.ConnectError("connection reset", request=request)
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if path.lstrip("/").split("/")[0] in self.failing:
            return httpx.Response(500, json={"success": False, "detail": "database down"})

        if request.method == "GET" and path == "/videos":
            limit = int(request.url.params.get("limit", 10))
            offset = int(request.url.params.get("offset", 0))
            page = [
                {k: v for k, v in video.items() if k != "isActive"}
                for video in self.feed()[offset : offset + limit]
            ]
            return httpx.Response(
                200,
                json={"success": True, "videos": page, "count": len(page), "offset": offset, "limit": limit},
            )

        if request.method == "POST" and path == "/interactions":
            body = json.loads(request.content)
            key = (body.get("identityId"), body["videoId"], body["type"])
            row = self.interactions.get(key) or {"id": str(uuid.uuid4())}
            row.update(
                identityId=key[0],
                videoId=key[1],
                type=key[2],
                data=body.get("data") or {},
                createdAt=datetime.now(timezone.utc).isoformat(),
            )
            self.interactions[key] = row
            return httpx.Response(200, json={"success": True, "interaction": row})

        if request.method == "POST" and path == "/feedback":
            body = json.loads(request.content)
            record = {"id": str(uuid.uuid4()), **body}
            self.feedback.append(record)
            return httpx.Response(200, json={"success": True, "feedback": record})

        if request.method == "GET" and path == "/feedback/required":
            return httpx.Response(
                200,
                json={"success": True, "feedbackRequired": True, "videosSinceFeedback": 5, "cadence": 5},
            )

        return httpx.Response(404, json={"success": False, "detail": "not found"})

    def api(self) -> ScrollNetAPI:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler), base_url="http://scrollnet.test"
        )
        return ScrollNetAPI(client=client)

    def posted(self, path: str) -> List[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path == path
        ]


@pytest.fixture
def videos() -> List[dict]:
    return [make_video(n) for n in range(5)]


@pytest.fixture
def backend(videos) -> FakeBackend:
    return FakeBackend(videos)


@pytest.fixture
def settings() -> Settings:
    return Settings(feedback_cadence=5, feed_page_size=2, swipe_threshold=50.0)


ANON_ID = "abcabcab-0000-4000-8000-000000000abc"
USER_ID = "5f0c8a4e-2b7d-4c1e-9a3f-6d2e8b1c7a90"
