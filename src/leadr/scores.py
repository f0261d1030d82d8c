"""
Scores API — list, look up and submit scores.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx

from leadr.auth import AuthManager
from leadr.errors import INVALID_ARGUMENT
from leadr.models.score import Score
from leadr.pagination import PagedResult, clamp_limit
from leadr.result import LeadrResult
from leadr.transport.http import HttpClient

SCORES_PATH = "/v1/client/scores"


class ScoresAPI:
    def __init__(self, http: HttpClient, auth: AuthManager):
        self._http = http
        self._auth = auth

    async def list(
        self,
        board_id: str,
        limit: int = 20,
        sort: Optional[str] = None,
        cursor: Optional[str] = None,
        around_score_id: Optional[str] = None,
        around_score_value: Optional[float] = None,
    ) -> LeadrResult[PagedResult[Score]]:
        """List scores on a board.

        ``around_score_id`` and ``around_score_value`` centre the page on a
        score instead of starting at the top; at most one may be given, and
        neither can be combined with ``cursor``. Pages reached through
        ``next_page()``/``prev_page()`` from a centred page are addressed by
        cursor alone.
        """
        if not board_id:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "board_id is required")
        page_size = clamp_limit(limit)
        if page_size is None:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "limit must be a positive integer")
        if around_score_id is not None and around_score_value is not None:
            return LeadrResult.fail(
                0, INVALID_ARGUMENT, "around_score_id and around_score_value are mutually exclusive",
            )
        centred = around_score_id is not None or around_score_value is not None
        if centred and cursor:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "cannot combine a cursor with around_score_*")
        if around_score_id is not None and not around_score_id:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "around_score_id must not be empty")
        if around_score_value is not None and not _is_number(around_score_value):
            return LeadrResult.fail(0, INVALID_ARGUMENT, "around_score_value must be a finite number")

        return await self._fetch(board_id, page_size, sort, cursor, around_score_id, around_score_value)

    async def _fetch(
        self,
        board_id: str,
        limit: int,
        sort: Optional[str],
        cursor: Optional[str],
        around_score_id: Optional[str] = None,
        around_score_value: Optional[float] = None,
    ) -> LeadrResult[PagedResult[Score]]:
        params: dict[str, Any] = {"board_id": board_id, "limit": limit}
        if sort:
            params["sort"] = sort
        if cursor:
            params["cursor"] = cursor
        if around_score_id is not None:
            params["around_score_id"] = around_score_id
        if around_score_value is not None:
            params["around_score_value"] = around_score_value
        path = f"{SCORES_PATH}?{httpx.QueryParams(params)}"

        return await self._auth.execute_authenticated(
            lambda headers: self._http.get(path, headers),
            lambda json: PagedResult.from_json(
                json, Score.model_validate, lambda c: self._fetch(board_id, limit, sort, c),
            ),
        )

    async def get(self, score_id: str) -> LeadrResult[Score]:
        if not score_id:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "score_id is required")
        path = f"{SCORES_PATH}/{quote(score_id, safe='')}"
        return await self._auth.execute_authenticated(
            lambda headers: self._http.get(path, headers),
            Score.model_validate,
        )

    async def submit(
        self,
        board_id: str,
        value: Union[int, float],
        player_name: str,
        value_display: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> LeadrResult[Score]:
        """Submit a score. Nonce-protected; a fresh nonce is fetched per attempt."""
        if not board_id:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "board_id is required")
        if not player_name:
            return LeadrResult.fail(0, INVALID_ARGUMENT, "player_name is required")
        if not _is_number(value):
            return LeadrResult.fail(0, INVALID_ARGUMENT, "value must be a finite number")
        if metadata is not None and not _is_json_object(metadata):
            return LeadrResult.fail(0, INVALID_ARGUMENT, "metadata must be a JSON-serialisable object")

        body: dict[str, Any] = {"board_id": board_id, "value": value, "player_name": player_name}
        if value_display is not None:
            body["value_display"] = value_display
        if metadata is not None:
            body["metadata"] = metadata

        return await self._auth.execute_authenticated(
            lambda headers: self._http.post(SCORES_PATH, body, headers),
            Score.model_validate,
            requires_nonce=True,
        )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_json_object(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError):
        return False
    return True
