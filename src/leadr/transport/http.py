"""
REST HTTP transport for the LEADR API.

Every call returns an ``HttpResponse``; transport failures become status 0
instead of raising.
"""

import json
import time
from typing import Any, Optional

import httpx
from loguru import logger

from leadr.errors import NETWORK_ERROR, LeadrError

DEFAULT_BASE_URL = "https://api.leadrcloud.com"
USER_AGENT = "leadr-sdk/0.1.0"
REDACTED = "[REDACTED]"
_SENSITIVE_HEADER_PARTS = ("authorization", "nonce")


def redact_headers(headers: Optional[dict[str, str]]) -> dict[str, str]:
    """Copy of ``headers`` with credential and nonce values replaced."""
    if not headers:
        return {}
    return {
        key: REDACTED if any(part in key.lower() for part in _SENSITIVE_HEADER_PARTS) else value
        for key, value in headers.items()
    }


class HttpResponse:
    def __init__(self, status_code: int, body: Optional[str], network_success: bool):
        self.status_code = status_code
        self.body = body or ""
        self.network_success = network_success

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def parse_json(self) -> Optional[dict[str, Any]]:
        """Decode the body as a JSON object. None for an empty or non-object body."""
        if not self.body:
            return None
        try:
            data = json.loads(self.body)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def to_error(self) -> LeadrError:
        if self.status_code == 0:
            return LeadrError(status_code=0, code=NETWORK_ERROR, message="Network request failed")
        return LeadrError.from_body(self.status_code, self.body)

    def __repr__(self) -> str:
        return f"HttpResponse(status_code={self.status_code}, network_success={self.network_success})"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        debug_logging: bool = False,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._debug_logging = debug_logging
        self._client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get(self, path: str, headers: Optional[dict[str, str]] = None) -> HttpResponse:
        return await self._send("GET", self.build_url(path), None, headers)

    async def post(
        self, path: str, body: Optional[dict[str, Any]] = None, headers: Optional[dict[str, str]] = None,
    ) -> HttpResponse:
        content = json.dumps(body) if body is not None else None
        return await self._send("POST", self.build_url(path), content, headers)

    async def _send(
        self, method: str, url: str, content: Optional[str], headers: Optional[dict[str, str]],
    ) -> HttpResponse:
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        if self._debug_logging:
            self._log_request(method, url, headers)

        started = time.monotonic()
        try:
            resp = await self._client.request(method, url, content=content, headers=request_headers)
            response = HttpResponse(resp.status_code, resp.text, network_success=True)
        except httpx.HTTPError as e:
            if self._debug_logging:
                logger.debug("[LEADR] {} {} failed: {}", method, _path_and_query(url), type(e).__name__)
            response = HttpResponse(0, None, network_success=False)

        if self._debug_logging:
            elapsed_ms = (time.monotonic() - started) * 1000
            status = str(response.status_code) if response.status_code > 0 else NETWORK_ERROR
            logger.debug("[LEADR] {} ({:.0f}ms)", status, elapsed_ms)
        return response

    def _log_request(self, method: str, url: str, headers: Optional[dict[str, str]]) -> None:
        sanitized = ", ".join(f"{k}: {v}" for k, v in redact_headers(headers).items())
        suffix = f" ({sanitized})" if sanitized else ""
        logger.debug("[LEADR] {} {}{}", method, _path_and_query(url), suffix)

    async def close(self) -> None:
        await self._client.aclose()


def _path_and_query(url: str) -> str:
    try:
        return httpx.URL(url).raw_path.decode("ascii", errors="replace")
    except httpx.InvalidURL:
        return url
