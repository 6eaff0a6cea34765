"""
Exception hierarchy for sexpkit.

Every failure raised by the reader, writer and serde bridge derives from
:class:`SexpError`. Errors carry optional context and suggestions that are
folded into the formatted message.

Example::

    from sexpkit.exceptions import InvalidTypeError

    raise InvalidTypeError(
        "Expected an atom",
        context={"target": "int", "got": "(1 2)"},
        suggestions=["Decode lists with the Any or Optional targets"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class SexpError(Exception):
    """
    Base exception for all sexpkit errors.

    Also used directly for free-form failures that fit none of the more
    specific kinds (for example reusing a consumed reader).

    Attributes:
        context: Dictionary of contextual information (target, position, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UnsupportedShapeError(SexpError, NotImplementedError):
    """
    Decoding was requested for a target shape the format does not support.

    Sequences, tuples, maps, structs with fields, enums and newtypes are
    never decoded; the bridge only round-trips scalars, options and unit.

    Example::

        raise UnsupportedShapeError(
            "Decoding into list[int] is not implemented",
            context={"target": "list[int]"},
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        target: Any = None,
    ):
        ctx = context or {}
        if target is not None and "target" not in ctx:
            ctx["target"] = _describe_target(target)
        super().__init__(message, ctx, suggestions)


class InvalidTypeError(SexpError, TypeError):
    """
    A value is present but its shape or content does not match the target.

    Raised for an atom where a list was required (or the reverse), numeric
    text that does not parse, and malformed boolean tokens.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        target: Any = None,
        value: Any = None,
    ):
        ctx = context or {}
        if target is not None and "target" not in ctx:
            ctx["target"] = _describe_target(target)
        if value is not None and "value" not in ctx:
            ctx["value"] = repr(value)
        super().__init__(message, ctx, suggestions)


class SexpIOError(SexpError):
    """
    The underlying byte source or sink failed.

    Attributes:
        cause: The wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.cause = cause
        ctx = context or {}
        if cause is not None and "cause" not in ctx:
            ctx["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, ctx, suggestions)


class UnexpectedEOFError(SexpIOError):
    """
    Input ended before the outermost closing parenthesis.

    Unterminated input is never closed implicitly.
    """

    def __init__(
        self,
        message: str = "Unexpected end of input",
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        depth: Optional[int] = None,
    ):
        ctx = context or {}
        if depth is not None and "depth" not in ctx:
            ctx["depth"] = depth
        super().__init__(
            message,
            ctx,
            suggestions or ["Check for a missing ')' or an unclosed quote"],
        )


def _describe_target(target: Any) -> str:
    name = getattr(target, "__name__", None)
    if name is not None and not getattr(target, "__args__", None):
        return name
    return repr(target)


__all__ = [
    "SexpError",
    "UnsupportedShapeError",
    "InvalidTypeError",
    "SexpIOError",
    "UnexpectedEOFError",
]
