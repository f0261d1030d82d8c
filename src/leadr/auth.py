"""
Session manager — token lifecycle, nonces and the authenticated call wrapper.

All credential writes go through this class. Refresh and bootstrap run under a
single ``asyncio.Lock`` per manager; every waiter re-checks the condition that
sent it there after acquiring the lock, so concurrent callers share one
network round trip.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger
from pydantic import ValidationError

from leadr.errors import NO_REFRESH_TOKEN, NOT_AUTHENTICATED, PARSE_ERROR
from leadr.models.session import Session
from leadr.result import LeadrResult
from leadr.storage import TokenStorage
from leadr.transport.http import HttpClient, HttpResponse

T = TypeVar("T")

REFRESH_THRESHOLD = timedelta(minutes=2)
NONCE_HEADER = "leadr-client-nonce"

SESSIONS_PATH = "/v1/client/sessions"
REFRESH_PATH = "/v1/client/sessions/refresh"
NONCE_PATH = "/v1/client/nonce"

RequestBuilder = Callable[[dict[str, str]], Awaitable[HttpResponse]]
Parser = Callable[[dict[str, Any]], T]


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_FRESH = "authenticated_fresh"
    AUTHENTICATED_STALE = "authenticated_stale"
    REFRESHING = "refreshing"


class AuthManager:
    def __init__(self, http: HttpClient, storage: TokenStorage, game_id: str, debug_logging: bool = False):
        self._http = http
        self._storage = storage
        self._game_id = game_id
        self._debug_logging = debug_logging
        self._refresh_lock = asyncio.Lock()

    @property
    def state(self) -> AuthState:
        if self._refresh_lock.locked():
            return AuthState.REFRESHING
        if not self._storage.has_valid_token():
            return AuthState.UNAUTHENTICATED
        if self._storage.is_token_expiring_soon(REFRESH_THRESHOLD):
            return AuthState.AUTHENTICATED_STALE
        return AuthState.AUTHENTICATED_FRESH

    def _log(self, message: str) -> None:
        if self._debug_logging:
            logger.debug("[LEADR] {}", message)

    async def start_session(self) -> LeadrResult[Session]:
        """Bootstrap a new session for this device and persist its tokens."""
        body = {
            "game_id": self._game_id,
            "client_fingerprint": self._storage.get_or_create_fingerprint(),
        }
        response = await self._http.post(SESSIONS_PATH, body)
        if not response.is_success:
            return LeadrResult.failure(response.to_error())

        json = response.parse_json()
        if json is None:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse session response")
        try:
            session = Session.model_validate(json)
        except ValidationError:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse session")

        expires_at = self._storage.now() + timedelta(seconds=session.expires_in)
        self._storage.save_tokens(session.access_token, session.refresh_token, expires_at)
        self._log("Session started")
        return LeadrResult.success(session)

    async def refresh_token(self) -> LeadrResult[bool]:
        """Exchange the stored refresh token for a new pair.

        Any non-2xx answer clears the stored tokens so the next call bootstraps
        a fresh session.
        """
        refresh_token = self._storage.get_refresh_token()
        if not refresh_token:
            return LeadrResult.fail(0, NO_REFRESH_TOKEN, "No refresh token available")

        response = await self._http.post(REFRESH_PATH, None, {"Authorization": f"Bearer {refresh_token}"})
        if not response.is_success:
            self._storage.clear_tokens()
            self._log(f"Token refresh failed ({response.status_code})")
            return LeadrResult.failure(response.to_error())

        json = response.parse_json()
        if json is None:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse refresh response")

        access_token = json.get("access_token")
        new_refresh_token = json.get("refresh_token")
        if not (isinstance(access_token, str) and access_token
                and isinstance(new_refresh_token, str) and new_refresh_token):
            return LeadrResult.fail(0, PARSE_ERROR, "Missing tokens in refresh response")
        expires_in = json.get("expires_in")
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
            expires_in = 0
        try:
            expires_at = self._storage.now() + timedelta(seconds=int(expires_in))
        except (OverflowError, ValueError):
            return LeadrResult.fail(0, PARSE_ERROR, "Invalid expires_in in refresh response")
        self._storage.save_tokens(access_token, new_refresh_token, expires_at)
        self._log("Token refreshed")
        return LeadrResult.success(True)

    async def get_nonce(self) -> LeadrResult[str]:
        """Fetch a one-time nonce for a mutating call."""
        access_token = await self.get_valid_access_token()
        if not access_token:
            return LeadrResult.fail(0, NOT_AUTHENTICATED, "Not authenticated")
        return await self._fetch_nonce(access_token)

    async def _fetch_nonce(self, access_token: str) -> LeadrResult[str]:
        response = await self._http.get(NONCE_PATH, {"Authorization": f"Bearer {access_token}"})
        if not response.is_success:
            return LeadrResult.failure(response.to_error())

        json = response.parse_json()
        nonce = json.get("nonce_value") if json else None
        if not isinstance(nonce, str) or not nonce:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse nonce")
        return LeadrResult.success(nonce)

    async def get_valid_access_token(self) -> Optional[str]:
        await self.ensure_authenticated()
        return self._storage.get_access_token()

    async def ensure_authenticated(self) -> None:
        if not self._storage.has_valid_token():
            async with self._refresh_lock:
                if self._storage.has_valid_token():
                    return
                if self._storage.get_refresh_token():
                    await self.refresh_token()
                    if self._storage.has_valid_token():
                        return
                await self.start_session()
            return

        if self._storage.is_token_expiring_soon(REFRESH_THRESHOLD):
            await self._safe_refresh()

    async def _safe_refresh(self) -> None:
        async with self._refresh_lock:
            if not self._storage.is_token_expiring_soon(REFRESH_THRESHOLD):
                return
            result = await self.refresh_token()
            if not result.is_success:
                await self.start_session()

    async def _reauthenticate(self, rejected_token: str) -> Optional[str]:
        """Replace a token the server rejected with 401. Returns the new token, or None."""
        async with self._refresh_lock:
            current = self._storage.get_access_token()
            if current and current != rejected_token and self._storage.has_valid_token():
                # Another caller already replaced it while we waited.
                return current
            result = await self.refresh_token()
            if not result.is_success:
                session = await self.start_session()
                if not session.is_success:
                    return None
            return self._storage.get_access_token()

    async def execute_authenticated(
        self,
        request: RequestBuilder,
        parser: Parser[T],
        requires_nonce: bool = False,
    ) -> LeadrResult[T]:
        """Run ``request`` with auth headers and parse the JSON body with ``parser``.

        Retries once after re-authenticating on 401 and, for nonce-protected
        calls, once more with a fresh nonce on 412.
        """
        await self.ensure_authenticated()

        access_token = self._storage.get_access_token()
        if not access_token:
            return LeadrResult.fail(0, NOT_AUTHENTICATED, "Failed to authenticate")

        headers = {"Authorization": f"Bearer {access_token}"}
        if requires_nonce:
            nonce = await self.get_nonce()
            if not nonce.is_success:
                return LeadrResult.failure(nonce.error)
            headers[NONCE_HEADER] = nonce.data

        response = await request(dict(headers))

        if response.status_code == 401:
            new_token = await self._reauthenticate(access_token)
            if new_token:
                headers["Authorization"] = f"Bearer {new_token}"
                if requires_nonce:
                    nonce = await self._fetch_nonce(new_token)
                    if nonce.is_success:
                        headers[NONCE_HEADER] = nonce.data
                response = await request(dict(headers))

        if response.status_code == 412 and requires_nonce:
            nonce = await self.get_nonce()
            if nonce.is_success:
                headers[NONCE_HEADER] = nonce.data
                headers["Authorization"] = f"Bearer {self._storage.get_access_token() or access_token}"
                response = await request(dict(headers))

        if not response.is_success:
            return LeadrResult.failure(response.to_error())

        json = response.parse_json()
        if json is None:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse response")
        try:
            data = parser(json)
        except (ValidationError, ValueError, TypeError, KeyError):
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse data")
        if data is None:
            return LeadrResult.fail(0, PARSE_ERROR, "Failed to parse data")
        return LeadrResult.success(data)

    def sign_out(self) -> None:
        """Drop the stored tokens; the fingerprint is kept."""
        self._storage.clear_tokens()
