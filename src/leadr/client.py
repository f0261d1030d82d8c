"""
Leadr / AsyncLeadr — main SDK clients.
"""

import asyncio
from typing import Any, Optional, TypeVar, Union

import httpx

from leadr.auth import AuthManager, AuthState
from leadr.boards import BoardsAPI
from leadr.config import LeadrSettings
from leadr.errors import ConfigurationError
from leadr.models.board import Board
from leadr.models.score import Score
from leadr.models.session import Session
from leadr.pagination import PagedResult
from leadr.result import LeadrResult
from leadr.scores import ScoresAPI
from leadr.storage import JsonFileStore, TokenStorage
from leadr.transport.http import DEFAULT_BASE_URL, HttpClient

T = TypeVar("T")


class AsyncLeadr:
    """Async LEADR client (primary).

    One instance owns one session. Construct it once at startup and share it;
    tests can build independent instances with their own ``storage`` and an
    ``httpx.MockTransport`` as ``transport``.
    """

    def __init__(
        self,
        game_id: str,
        base_url: str = DEFAULT_BASE_URL,
        debug_logging: bool = False,
        timeout: float = 30.0,
        storage: Optional[TokenStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not game_id:
            raise ConfigurationError("game_id is required")
        self._game_id = game_id

        self.http = HttpClient(base_url=base_url, debug_logging=debug_logging, timeout=timeout, transport=transport)
        self.storage = storage if storage is not None else TokenStorage()
        self.auth = AuthManager(self.http, self.storage, game_id, debug_logging=debug_logging)
        self.boards = BoardsAPI(self.http, self.auth, game_id)
        self.scores = ScoresAPI(self.http, self.auth)

    @classmethod
    def from_settings(
        cls,
        settings: LeadrSettings,
        storage: Optional[TokenStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AsyncLeadr":
        if storage is None and settings.credentials_path is not None:
            storage = TokenStorage(JsonFileStore(settings.credentials_path))
        return cls(
            game_id=settings.game_id,
            base_url=settings.base_url,
            debug_logging=settings.debug_logging,
            timeout=settings.timeout,
            storage=storage,
            transport=transport,
        )

    @property
    def game_id(self) -> str:
        return self._game_id

    @property
    def auth_state(self) -> AuthState:
        return self.auth.state

    async def start_session(self) -> LeadrResult[Session]:
        """Force a new session. Other calls start one on demand."""
        return await self.auth.start_session()

    def sign_out(self) -> None:
        self.auth.sign_out()

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncLeadr":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class Leadr:
    """Sync wrapper around AsyncLeadr. Runs the event loop internally."""

    def __init__(self, *, _client: Optional[AsyncLeadr] = None, **kwargs: Any):
        self._async = _client if _client is not None else AsyncLeadr(**kwargs)
        self._loop = asyncio.new_event_loop()

    @classmethod
    def from_settings(cls, settings: LeadrSettings, **kwargs: Any) -> "Leadr":
        return cls(_client=AsyncLeadr.from_settings(settings, **kwargs))

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def auth_state(self) -> AuthState:
        return self._async.auth_state

    def start_session(self) -> LeadrResult[Session]:
        return self._run(self._async.start_session())

    def list_boards(self, limit: int = 20, cursor: Optional[str] = None) -> LeadrResult[PagedResult[Board]]:
        return self._run(self._async.boards.list(limit=limit, cursor=cursor))

    def get_board(self, slug: str) -> LeadrResult[Board]:
        return self._run(self._async.boards.get(slug))

    def get_board_by_id(self, board_id: str) -> LeadrResult[Board]:
        return self._run(self._async.boards.get_by_id(board_id))

    def list_scores(self, board_id: str, **kwargs: Any) -> LeadrResult[PagedResult[Score]]:
        return self._run(self._async.scores.list(board_id, **kwargs))

    def get_score(self, score_id: str) -> LeadrResult[Score]:
        return self._run(self._async.scores.get(score_id))

    def submit_score(
        self,
        board_id: str,
        value: Union[int, float],
        player_name: str,
        value_display: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> LeadrResult[Score]:
        return self._run(self._async.scores.submit(
            board_id, value, player_name, value_display=value_display, metadata=metadata,
        ))

    def next_page(self, page: PagedResult[T]) -> LeadrResult[PagedResult[T]]:
        return self._run(page.next_page())

    def prev_page(self, page: PagedResult[T]) -> LeadrResult[PagedResult[T]]:
        return self._run(page.prev_page())

    def sign_out(self) -> None:
        self._async.sign_out()

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
