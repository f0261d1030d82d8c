"""
Integration tests for the LEADR Python SDK — tests against a real LEADR service.

Requires environment variables:
  LEADR_GAME_ID      — game id with at least one published board
  LEADR_BOARD_SLUG   — slug of a board that accepts scores
  LEADR_BASE_URL     — (optional) defaults to https://api.leadrcloud.com

Run: LEADR_INTEGRATION=1 pytest tests/integration/ -v
"""

import os
import pytest

from leadr import AsyncLeadr, MemoryStore, TokenStorage

SKIP = not os.environ.get("LEADR_INTEGRATION")
GAME_ID = os.environ.get("LEADR_GAME_ID", "")
BOARD_SLUG = os.environ.get("LEADR_BOARD_SLUG", "")
BASE_URL = os.environ.get("LEADR_BASE_URL", "https://api.leadrcloud.com")

pytestmark = pytest.mark.skipif(SKIP, reason="LEADR_INTEGRATION not set")


def make_client() -> AsyncLeadr:
    return AsyncLeadr(game_id=GAME_ID, base_url=BASE_URL, storage=TokenStorage(MemoryStore()))


class TestSession:
    @pytest.mark.asyncio
    async def test_start_session(self):
        async with make_client() as client:
            result = await client.start_session()
            assert result.is_success, result.error
            assert client.storage.has_valid_token()

    @pytest.mark.asyncio
    async def test_rejects_unknown_game(self):
        async with AsyncLeadr(game_id="gam_does_not_exist", base_url=BASE_URL,
                              storage=TokenStorage(MemoryStore())) as client:
            result = await client.start_session()
            assert not result.is_success


class TestBoardsAndScores:
    @pytest.mark.asyncio
    async def test_list_and_get_board(self):
        async with make_client() as client:
            boards = (await client.boards.list(limit=5)).unwrap()
            assert boards.count >= len(boards.items)

            board = (await client.boards.get(BOARD_SLUG)).unwrap()
            assert board.slug == BOARD_SLUG

    @pytest.mark.asyncio
    async def test_submit_then_list(self):
        async with make_client() as client:
            board = (await client.boards.get(BOARD_SLUG)).unwrap()
            submitted = (await client.scores.submit(board.id, 1234, "sdk-integration",
                                                    metadata={"source": "pytest"})).unwrap()
            assert submitted.board_id == board.id

            page = (await client.scores.list(board.id, around_score_id=submitted.id)).unwrap()
            assert any(s.id == submitted.id for s in page.items)

    @pytest.mark.asyncio
    async def test_unknown_slug_is_not_found(self):
        async with make_client() as client:
            result = await client.boards.get("definitely-not-a-board-slug")
            assert result.error.code == "not_found"
