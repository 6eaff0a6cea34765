"""
S-expression printer.

Writes the canonical single-line form of a tree: lists are parenthesised
with children separated by one space, and atoms containing a space or a
parenthesis are quote-delimited.

Quoting rules:
- single quotes are preferred, and are only used when the atom holds no ``'``
- if the atom contains ``'`` the delimiter switches to ``"`` and the text is
  written verbatim, so an embedded ``"`` will not read back unless
  ``WriterConfig.escape_double_quotes`` is set
"""

from __future__ import annotations

import io
import logging
from typing import IO, Any, Optional, Union

from sexpkit.config import WriterConfig
from sexpkit.exceptions import InvalidTypeError, SexpIOError

from .model import Atom, List, Sexp

logger = logging.getLogger(__name__)

STRUCTURAL_CHARS = (" ", "(", ")")


def _is_binary_sink(sink: Any) -> bool:
    """
    Decide whether a sink takes bytes.

    Binary streams are recognised by class or by a ``b`` in ``mode``; any
    other sink gets text.
    """
    if isinstance(sink, io.TextIOBase):
        return False
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(sink, "mode", None)
    return isinstance(mode, str) and "b" in mode


def needs_quoting(text: str) -> bool:
    """Check if an atom must be quote-delimited when printed."""
    return any(c in text for c in STRUCTURAL_CHARS)


def format_atom(text: str, escape_double_quotes: bool = False) -> str:
    """Format a single atom for output."""
    if not needs_quoting(text):
        return text

    if "'" in text:
        if escape_double_quotes:
            text = text.replace('"', '\\"')
        return f'"{text}"'

    return f"'{text}'"


class Writer:
    """
    Streaming printer over a binary or text sink.

    Output is emitted piece by piece as the tree is walked; nothing beyond
    the sink's own buffering is held back. Binary sinks (by class, or a
    ``b`` in their ``mode``) receive encoded bytes; any other sink gets
    ``str``.

    Example::

        with open("out.sexp", "wb") as f:
            Writer(f).write(expr)
    """

    def __init__(self, sink: IO, config: Optional[WriterConfig] = None):
        self.config = config or WriterConfig()
        self._sink = sink
        self._binary = _is_binary_sink(sink)

    def write(self, expr: Sexp) -> None:
        """
        Write one expression tree to the sink.

        Raises:
            SexpIOError: If the sink fails
        """
        try:
            self._write_node(expr)
        except OSError as e:
            raise SexpIOError("Failed to write s-expression", cause=e) from e
        except UnicodeEncodeError as e:
            raise SexpIOError(
                "Cannot encode s-expression text",
                context={"encoding": self.config.encoding},
                cause=e,
            ) from e
        logger.debug(f"Wrote {type(expr).__name__} to {type(self._sink).__name__}")

    def flush(self) -> None:
        """Flush the underlying sink."""
        try:
            self._sink.flush()
        except OSError as e:
            raise SexpIOError("Failed to flush s-expression sink", cause=e) from e

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()

    def _emit(self, text: str) -> None:
        data = text.encode(self.config.encoding) if self._binary else text
        try:
            self._sink.write(data)
        except TypeError as e:
            raise SexpIOError(
                "Sink rejected s-expression output",
                context={"sink": type(self._sink).__name__, "binary": self._binary},
                suggestions=["Open the sink in text mode, or in binary mode with a 'b' in its mode"],
                cause=e,
            ) from e

    def _write_node(self, expr: Sexp) -> None:
        if isinstance(expr, Atom):
            self._emit(format_atom(expr.text, self.config.escape_double_quotes))
        elif isinstance(expr, List):
            self._emit("(")
            for n, item in enumerate(expr.items):
                if n > 0:
                    self._emit(" ")
                self._write_node(item)
            self._emit(")")
        else:
            raise InvalidTypeError(
                f"Cannot write {type(expr).__name__}; expected Atom or List",
                value=expr,
            )


def to_string(expr: Sexp, config: Optional[WriterConfig] = None) -> str:
    """Render an expression tree to a string."""
    buf = io.StringIO()
    Writer(buf, config).write(expr)
    return buf.getvalue()


def to_bytes(expr: Sexp, config: Optional[WriterConfig] = None) -> bytes:
    """Render an expression tree to bytes in the configured encoding."""
    buf = io.BytesIO()
    Writer(buf, config).write(expr)
    return buf.getvalue()


def write(expr: Sexp, sink: Union[IO[str], IO[bytes]], config: Optional[WriterConfig] = None) -> None:
    """Write an expression tree to a sink and flush it."""
    with Writer(sink, config) as writer:
        writer.write(expr)
