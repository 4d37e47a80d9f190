"""
Tests for the Ok/Err result types.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.result import Ok, Err, FileIOError, UnwrapError


class TestFileIOError:
    """Test FileIOError value."""

    def test_str_is_message(self):
        assert str(FileIOError("disk full")) == "disk full"

    def test_from_exception(self):
        """Test the message comes from the exception text."""
        error = FileIOError.from_exception(FileNotFoundError(2, "No such file or directory", "/x"))

        assert error.message == "[Errno 2] No such file or directory: '/x'"

    def test_from_exception_without_text(self):
        """Test an exception with no text still gives a non-empty message."""
        assert FileIOError.from_exception(OSError()).message == "OSError"


class TestOk:
    """Test Ok results."""

    def test_tags(self):
        result = Ok("content")

        assert result.is_ok()
        assert not result.is_err()

    def test_default_value_is_none(self):
        assert Ok().value is None

    def test_unwrap(self):
        assert Ok(5).unwrap() == 5
        assert Ok(5).unwrap_or(0) == 5

    def test_map(self):
        assert Ok("abc").map(len) == Ok(3)

    def test_to_dict(self):
        assert Ok("x").to_dict() == {"ok": True, "value": "x"}


class TestErr:
    """Test Err results."""

    @pytest.fixture
    def err(self):
        return Err(FileIOError("permission denied"))

    def test_tags(self, err):
        assert err.is_err()
        assert not err.is_ok()

    def test_unwrap_raises(self, err):
        """Test unwrapping an error raises with the error attached."""
        with pytest.raises(UnwrapError) as excinfo:
            err.unwrap()

        assert excinfo.value.error is err.error
        assert "permission denied" in str(excinfo.value)

    def test_unwrap_or(self, err):
        assert err.unwrap_or("fallback") == "fallback"

    def test_map_passes_through(self, err):
        assert err.map(len) is err

    def test_to_dict(self, err):
        assert err.to_dict() == {"ok": False, "error": {"message": "permission denied"}}

    def test_equality(self):
        assert Err(FileIOError("a")) == Err(FileIOError("a"))
        assert Err(FileIOError("a")) != Err(FileIOError("b"))
        assert Err(FileIOError("a")) != Ok("a")
