"""Tests for relres.core.errors module."""

from relres.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the CLI contract."""

    def test_values(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.NOT_FOUND == 3
        assert ErrorCode.FEED_ERROR == 4
        assert ErrorCode.IO_ERROR == 5

    def test_str(self) -> None:
        assert str(ErrorCode.NOT_FOUND) == "not found"
        assert str(ErrorCode.FEED_ERROR) == "feed error"


class TestErrorCodeUsage:
    def test_usable_as_int(self) -> None:
        code: int = ErrorCode.NOT_FOUND
        assert int(code) == 3
