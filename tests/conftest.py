"""
Pytest fixtures for HyCom client tests.
"""

import json
from typing import Callable, List

import httpx
import pytest

from hycom.services import compat
from hycom.services.hycom_client import HycomClient

BASE_URL = "https://hycom.test"

SAMPLE_POST = {
    "url": "https://hycom.ir/p/first-post",
    "title": "First post",
    "summary": "Short summary",
    "image": "https://hycom.ir/media/first.png",
    "view_count": 120,
    "like_count": 7,
    "created_at": "2025-01-02T10:00:00Z",
    "tags": ["python", "web"],
    "reading_time": 4,
}

SAMPLE_AUTHOR = {
    "display_name": "sobhan",
    "profile_id": "123",
    "url": "https://hycom.ir/@sobhan-123",
    "article_count": 12,
    "total_views": 5400,
    "profile_image": "https://hycom.ir/media/sobhan.png",
}

SAMPLE_TAG = {"name": "Python", "slug": "python", "post_count": 42}

SAMPLE_STATS = {"total_tags": 10, "total_views": 9000, "total_posts": 300, "total_authors": 25}


def envelope(data, success: bool = True) -> dict:
    return {"success": success, "data": data}


class RecordingTransport:
    """Route requests by path to canned handlers and record every request."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"success": False, "data": None})
        if callable(handler):
            return handler(request)
        return httpx.Response(200, content=json.dumps(handler).encode(),
                              headers={"content-type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple]:
    """Build a HycomClient wired to an in-memory transport."""

    def _make(routes: dict, **client_kwargs):
        transport = RecordingTransport(routes)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        client = HycomClient(base_url=BASE_URL, http_client=http_client, **client_kwargs)
        return client, transport

    return _make


@pytest.fixture
def reset_default_client():
    """Restore the compat layer's shared client after the test."""
    original = compat._default_client
    yield
    compat.set_default_client(original)


@pytest.fixture
def sample_post() -> dict:
    return dict(SAMPLE_POST)


@pytest.fixture
def sample_author() -> dict:
    return dict(SAMPLE_AUTHOR)


@pytest.fixture
def sample_tag() -> dict:
    return dict(SAMPLE_TAG)


@pytest.fixture
def sample_stats() -> dict:
    return dict(SAMPLE_STATS)


@pytest.fixture
def wrap() -> Callable[..., dict]:
    """Wrap a payload in the {success, data} envelope."""
    return envelope
