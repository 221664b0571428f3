"""Shared fixtures: a fake knowledge-base site served by httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from haeum_kb.config import reset_config

BASE_URL = "http://kb.test"


@pytest.fixture(autouse=True)
def _reset_config():
    """Each test loads configuration from its own environment."""
    reset_config()
    yield
    reset_config()


class FakeSite:
    """Serves fixed responses by path and records requested paths."""

    def __init__(self, routes: dict, delays: dict | None = None):
        self.routes = routes
        self.delays = delays or {}
        self.requests: list[str] = []
        self.completed: list[str] = []

    async def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path in self.delays:
            await asyncio.sleep(self.delays[path])
        self.completed.append(path)

        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, httpx.Response):
            return route
        if isinstance(route, (list, dict)):
            return httpx.Response(200, content=json.dumps(route).encode("utf-8"))
        return httpx.Response(200, content=route.encode("utf-8"))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=self.transport)


@pytest.fixture
def make_site():
    """Factory for FakeSite instances."""
    return FakeSite


HOURS_DOC = "# 운영 시간\n평일 오전 9시부터 오후 6시까지 운영합니다."

FEES_DOC = """# 수업료 안내

1:1 수업은 50분 기준입니다. 그룹 수업은 4명까지 참여할 수 있습니다.

## Online classes

Online lessons use Zoom. Recordings are shared after class!
"""

BLOG_DOC = """---
title: "한국어 발음 팁"
date: 2025-03-02
source: blog
external_url: https://blog.naver.com/haeumkorean/1
---
받침 발음은 천천히 연습하세요. 발음 연습은 매일 10분이면 충분합니다.
URL 복사
태그
#발음
#한국어

마지막 문단입니다.
"""


@pytest.fixture
def sample_site(make_site):
    """Site with a manifest of three documents."""
    return make_site(
        {
            "/kb/manifest.json": [
                {"url": "/kb/hours.md"},
                {"url": "/kb/fees.md", "title": "Fees"},
                {"url": "/kb/blog/2025-03-02-pronunciation.md", "type": "md"},
            ],
            "/kb/hours.md": HOURS_DOC,
            "/kb/fees.md": FEES_DOC,
            "/kb/blog/2025-03-02-pronunciation.md": BLOG_DOC,
        }
    )
