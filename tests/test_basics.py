"""Basic unit tests for the leadr package."""

from leadr import (
    AsyncLeadr,
    Leadr,
    LeadrError,
    LeadrException,
    LeadrAPIError,
    LeadrResult,
    StorageError,
    ConfigurationError,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Leadr is not None
    assert AsyncLeadr is not None


def test_error_hierarchy():
    assert issubclass(LeadrAPIError, LeadrException)
    assert issubclass(StorageError, LeadrException)
    assert issubclass(ConfigurationError, LeadrException)


def test_error_attributes():
    error = LeadrError(status_code=404, code="not_found", message="Board 'x' not found")
    assert str(error) == "[404] not_found: Board 'x' not found"

    exc = LeadrAPIError(error)
    assert exc.code == "not_found"
    assert str(exc) == "Board 'x' not found"
    assert exc.details == {"status_code": 404}


def test_result_variants():
    ok = LeadrResult.success(3)
    assert ok.is_success and bool(ok)
    assert ok.unwrap() == 3
    assert ok.error is None

    failed = LeadrResult.fail(0, "invalid_argument", "board_id is required")
    assert not failed
    assert failed.data is None
    assert failed.error.code == "invalid_argument"
