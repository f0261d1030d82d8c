"""Shared fixtures: a fake LEADR server behind httpx.MockTransport, a fake clock."""

import asyncio
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from leadr import AsyncLeadr, MemoryStore, TokenStorage

BASE_URL = "https://api.leadr.test"
GAME_ID = "gam_123"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeLeadrServer:
    """Answers the session, refresh and nonce endpoints and any queued routes.

    Replies queued with ``on()`` are served in order; the last one repeats.
    Every request is recorded in ``requests``.
    """

    def __init__(self, expires_in: int = 3600):
        self.expires_in = expires_in
        self.latency = 0.0
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Reply]] = {}
        self._token_seq = 0
        self._nonce_seq = 0

    def on(self, method: str, path: str, *replies: Reply) -> None:
        self._routes[(method, path)] = list(replies)

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def last(self, method: str, path: str) -> httpx.Request:
        return [r for r in self.requests if r.method == method and r.url.path == path][-1]

    def issue_tokens(self) -> dict[str, Any]:
        self._token_seq += 1
        return {
            "id": "dev_1",
            "game_id": GAME_ID,
            "account_id": "acc_1",
            "status": "active",
            "expires_in": self.expires_in,
            "access_token": f"access-{self._token_seq}",
            "refresh_token": f"refresh-{self._token_seq}",
        }

    def _default(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "POST" and path in ("/v1/client/sessions", "/v1/client/sessions/refresh"):
            return httpx.Response(200, json=self.issue_tokens())
        if request.method == "GET" and path == "/v1/client/nonce":
            self._nonce_seq += 1
            return httpx.Response(200, json={"nonce_value": f"nonce-{self._nonce_seq}"})
        return httpx.Response(404, json={"error": f"no route for {request.method} {path}"})

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.latency:
            await asyncio.sleep(self.latency)
        replies = self._routes.get((request.method, request.url.path))
        if not replies:
            return self._default(request)
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        return reply(request) if callable(reply) else reply


def board_json(board_id: str = "brd_1", slug: str = "weekly", **extra: Any) -> dict[str, Any]:
    return {
        "id": board_id,
        "account_id": "acc_1",
        "game_id": GAME_ID,
        "name": slug.title(),
        "slug": slug,
        "short_code": "ABC123",
        "is_active": True,
        "is_published": True,
        "sort_direction": "descending",
        "keep_strategy": "highest",
        "tags": ["main"],
        "created_at": "2026-01-01T00:00:00Z",
        "updated_at": "2026-01-02T00:00:00Z",
        **extra,
    }


def score_json(score_id: str = "scr_1", value: float = 100, player: str = "Ada", **extra: Any) -> dict[str, Any]:
    return {
        "id": score_id,
        "account_id": "acc_1",
        "game_id": GAME_ID,
        "board_id": "brd_1",
        "player_name": player,
        "value": value,
        "created_at": "2026-01-01T00:00:00Z",
        "updated_at": "2026-01-01T00:00:00Z",
        **extra,
    }


def page_json(items: list[dict[str, Any]], **pagination: Any) -> dict[str, Any]:
    meta = {"count": len(items), "has_next": False, "has_prev": False}
    meta.update(pagination)
    return {"data": items, "pagination": meta}


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(clock: FakeClock) -> TokenStorage:
    return TokenStorage(MemoryStore(), clock=clock)


@pytest.fixture
def server() -> FakeLeadrServer:
    return FakeLeadrServer()


@pytest.fixture
def client(server: FakeLeadrServer, storage: TokenStorage) -> AsyncLeadr:
    return AsyncLeadr(
        game_id=GAME_ID,
        base_url=BASE_URL,
        storage=storage,
        transport=httpx.MockTransport(server),
    )
