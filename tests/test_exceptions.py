"""Tests for sexpkit.exceptions module."""

import pytest

from sexpkit.exceptions import (
    InvalidTypeError,
    SexpError,
    SexpIOError,
    UnexpectedEOFError,
    UnsupportedShapeError,
)


class TestSexpError:
    """Tests for the base exception class."""

    def test_basic_message(self):
        err = SexpError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.context == {}
        assert err.suggestions == []

    def test_with_context(self):
        err = SexpError("Read failed", context={"depth": 2, "encoding": "utf-8"})
        msg = str(err)
        assert "Read failed" in msg
        assert "Context:" in msg
        assert "depth: 2" in msg
        assert "encoding: utf-8" in msg

    def test_with_suggestions(self):
        err = SexpError("Bad input", suggestions=["Close every list"])
        msg = str(err)
        assert "Suggestions:" in msg
        assert "- Close every list" in msg


class TestErrorKinds:
    """Tests for the specific error kinds."""

    def test_unsupported_shape(self):
        err = UnsupportedShapeError("Not implemented", target=list[int])
        assert isinstance(err, SexpError)
        assert isinstance(err, NotImplementedError)
        assert err.context["target"] == "list[int]"

    def test_invalid_type(self):
        err = InvalidTypeError("Invalid integer", target=int, value="abc")
        assert isinstance(err, TypeError)
        assert err.context == {"target": "int", "value": "'abc'"}

    def test_io_error_keeps_cause(self):
        cause = OSError("broken pipe")
        err = SexpIOError("Write failed", cause=cause)
        assert err.cause is cause
        assert "OSError: broken pipe" in str(err)

    def test_unexpected_eof(self):
        err = UnexpectedEOFError(depth=2)
        assert isinstance(err, SexpIOError)
        assert err.message == "Unexpected end of input"
        assert err.context["depth"] == 2
        assert err.suggestions

    def test_catch_all_via_base(self):
        with pytest.raises(SexpError):
            raise UnexpectedEOFError()
