"""
leadr — LEADR leaderboard SDK for Python.

List boards, page through scores and submit new ones.
Async REST client for the LEADR client API.
"""

from leadr.client import Leadr, AsyncLeadr
from leadr.auth import AuthManager, AuthState
from leadr.config import LeadrSettings
from leadr.errors import LeadrError, LeadrException, LeadrAPIError, StorageError, ConfigurationError
from leadr.models.board import Board
from leadr.models.score import Score
from leadr.models.session import Session
from leadr.pagination import PagedResult
from leadr.result import LeadrResult
from leadr.storage import TokenStorage, JsonFileStore, MemoryStore

__version__ = "0.1.0"
__all__ = [
    "Leadr",
    "AsyncLeadr",
    "AuthManager",
    "AuthState",
    "LeadrSettings",
    "LeadrError",
    "LeadrException",
    "LeadrAPIError",
    "StorageError",
    "ConfigurationError",
    "Board",
    "Score",
    "Session",
    "PagedResult",
    "LeadrResult",
    "TokenStorage",
    "JsonFileStore",
    "MemoryStore",
]
