"""
LeadrResult — success-or-error wrapper returned by every public operation.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from leadr.errors import LeadrAPIError, LeadrError

T = TypeVar("T")


class LeadrResult(Generic[T]):
    __slots__ = ("is_success", "data", "error")

    def __init__(self, is_success: bool, data: Optional[T] = None, error: Optional[LeadrError] = None):
        self.is_success = is_success
        self.data = data
        self.error = error

    @classmethod
    def success(cls, data: T) -> "LeadrResult[T]":
        return cls(True, data=data)

    @classmethod
    def failure(cls, error: LeadrError) -> "LeadrResult[T]":
        return cls(False, error=error)

    @classmethod
    def fail(cls, status_code: int, code: str, message: str) -> "LeadrResult[T]":
        return cls.failure(LeadrError(status_code=status_code, code=code, message=message))

    def unwrap(self) -> T:
        """Return the payload, or raise ``LeadrAPIError`` for a failed result."""
        if not self.is_success:
            assert self.error is not None
            raise LeadrAPIError(self.error)
        return self.data  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"LeadrResult.success({self.data!r})"
        return f"LeadrResult.failure({self.error})"
