"""
Boards API — list a game's leaderboards and look one up by slug or id.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from leadr.auth import AuthManager
from leadr.errors import INVALID_ARGUMENT, NOT_FOUND
from leadr.models.board import Board
from leadr.pagination import PagedResult, clamp_limit
from leadr.result import LeadrResult
from leadr.transport.http import HttpClient

BOARDS_PATH = "/v1/client/boards"


class BoardsAPI:
    def __init__(self, http: HttpClient, auth: AuthManager, game_id: str):
        self._http = http
        self._auth = auth
        self._game_id = game_id

    async def list(self, limit: int = 20, cursor: Optional[str] = None) -> LeadrResult[PagedResult[Board]]:
        """List boards for the configured game."""
        page_size = clamp_limit(limit)
        if page_size is None:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "limit must be a positive integer")
        return await self._fetch(page_size, cursor)

    async def _fetch(self, limit: int, cursor: Optional[str]) -> LeadrResult[PagedResult[Board]]:
        params: dict[str, Any] = {"game_id": self._game_id, "limit": limit}
        if cursor:
            params["cursor"] = cursor
        path = f"{BOARDS_PATH}?{httpx.QueryParams(params)}"

        return await self._auth.execute_authenticated(
            lambda headers: self._http.get(path, headers),
            lambda json: PagedResult.from_json(json, Board.model_validate, lambda c: self._fetch(limit, c)),
        )

    async def get(self, slug: str) -> LeadrResult[Board]:
        """Get a board by slug. An empty match is reported as ``not_found`` (404)."""
        if not slug:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "slug is required")

        path = f"{BOARDS_PATH}/?{httpx.QueryParams({'slug': slug, 'game_id': self._game_id})}"
        result = await self._auth.execute_authenticated(
            lambda headers: self._http.get(path, headers),
            lambda json: PagedResult.from_json(json, Board.model_validate),
        )
        if not result.is_success:
            return LeadrResult.failure(result.error)
        if not result.data.items:
            return LeadrResult.fail(404, NOT_FOUND, f"Board '{slug}' not found")
        return LeadrResult.success(result.data.items[0])

    async def get_by_id(self, board_id: str) -> LeadrResult[Board]:
        if not board_id:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "board_id is required")
        path = f"{BOARDS_PATH}/{quote(board_id, safe='')}"
        return await self._auth.execute_authenticated(
            lambda headers: self._http.get(path, headers),
            Board.model_validate,
        )
