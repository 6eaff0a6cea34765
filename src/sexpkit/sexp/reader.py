"""
S-expression reader.

Single-pass recursive descent over a character stream with no lookahead
beyond the current character. One call reads exactly one top-level
expression:

- the first ``(`` of the outermost call opens the implicit outer form;
  every later ``(`` outside quotes starts a nested list
- whitespace outside quotes ends the pending token
- ``)`` outside quotes ends the current list
- ``'`` and ``"`` open and close quoted atoms; the other quote character is
  literal inside a quoted atom
- inside quotes a backslash escapes ``n``, ``t``, ``r``, ``'`` and ``"``;
  any other escaped character is dropped (or kept, per ``ReaderConfig``)

Input that ends before the outermost ``)`` raises
:class:`~sexpkit.exceptions.UnexpectedEOFError`.

Usage:
    from sexpkit.sexp import Reader, from_string

    expr = from_string("(a b (1 2) 'c d')")

    with open("data.sexp", "rb") as f:
        expr = Reader(f).read()
"""

from __future__ import annotations

import codecs
import io
import logging
from typing import IO, TYPE_CHECKING, Any, Iterator, Optional, Union

from sexpkit.config import ReaderConfig
from sexpkit.exceptions import SexpError, SexpIOError, UnexpectedEOFError

from .model import Atom, List, Sexp

if TYPE_CHECKING:
    from sexpkit.serde.decode import T

logger = logging.getLogger(__name__)

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "'": "'",
    '"': '"',
}


class Reader:
    """
    Single-use parser over a byte or character source.

    ``source`` may be a binary stream, a text stream, ``bytes`` or ``str``.
    Streams are told apart by what ``read(1)`` returns, so any object with
    a ``read`` method works.
    Binary input is decoded one byte at a time, so the stream is left
    positioned just after the expression that was read.

    Each reader performs one logical operation: a second ``read()`` or
    ``decode()`` raises :class:`~sexpkit.exceptions.SexpError`.
    """

    def __init__(
        self,
        source: Union[IO[bytes], IO[str], bytes, bytearray, str],
        config: Optional[ReaderConfig] = None,
    ):
        self.config = config or ReaderConfig()
        if isinstance(source, str):
            source = io.StringIO(source)
        elif isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        self._source = source
        self._consumed = False

    def read(self) -> Sexp:
        """
        Read one top-level expression.

        Raises:
            UnexpectedEOFError: If input ends before the closing parenthesis
            SexpIOError: If the source fails or cannot be decoded
            SexpError: If this reader was already used
        """
        if self._consumed:
            raise SexpError(
                "Reader already consumed",
                suggestions=["Create a new Reader for each expression"],
            )
        self._consumed = True

        parser = _Parser(self._chars(), self.config.unknown_escape == "keep")
        expr = parser.parse(root=True)
        logger.debug(f"Read list with {len(expr.items)} top-level children")
        return expr

    def decode(self, target: type[T]) -> T:
        """Read one expression and decode it into ``target``."""
        from sexpkit.serde.decode import SexpDecoder

        return SexpDecoder(self.read()).decode(target)

    def _chars(self) -> Iterator[str]:
        # The first read decides the mode: str means text, anything else is bytes
        first = self._read_one()
        if isinstance(first, str):
            yield from self._text_chars(first)
        else:
            yield from self._byte_chars(first)

    def _read_one(self) -> Union[str, bytes]:
        try:
            return self._source.read(1)
        except OSError as e:
            raise SexpIOError("Failed to read s-expression source", cause=e) from e

    def _text_chars(self, c: str) -> Iterator[str]:
        while c:
            if not isinstance(c, str):
                raise SexpIOError(
                    "Source mixed text and bytes",
                    context={"got": type(c).__name__},
                )
            yield c
            c = self._read_one()

    def _byte_chars(self, b: bytes) -> Iterator[str]:
        try:
            decoder = codecs.getincrementaldecoder(self.config.encoding)()
        except LookupError as e:
            raise SexpIOError(
                "Unknown source encoding",
                context={"encoding": self.config.encoding},
                cause=e,
            ) from e

        while True:
            try:
                text = decoder.decode(b, final=not b)
            except UnicodeDecodeError as e:
                raise SexpIOError(
                    "Cannot decode s-expression source",
                    context={"encoding": self.config.encoding},
                    cause=e,
                ) from e
            except TypeError as e:
                raise SexpIOError(
                    "Source returned neither text nor bytes",
                    context={"got": type(b).__name__},
                    cause=e,
                ) from e
            yield from text
            if not b:
                return
            b = self._read_one()


class _Parser:
    """Recursive-descent state shared by the nested parse calls."""

    def __init__(self, chars: Iterator[str], keep_unknown_escapes: bool = False):
        self.chars = chars
        self.keep_unknown_escapes = keep_unknown_escapes
        self.depth = 0

    def parse(self, root: bool = False) -> List:
        """Parse until the ``)`` closing the current list."""
        expr: list[Sexp] = []
        token: list[str] = []
        opened = not root
        in_single = False
        in_double = False

        self.depth += 1
        for c in self.chars:
            if c == "\\" and (in_single or in_double):
                escaped = next(self.chars, None)
                if escaped in ESCAPES:
                    token.append(ESCAPES[escaped])
                elif escaped is not None and self.keep_unknown_escapes:
                    token.append(escaped)
            elif c == "'":
                if in_double:
                    token.append(c)
                elif in_single:
                    expr.append(Atom("".join(token)))
                    token = []
                    in_single = False
                else:
                    in_single = True
            elif c == '"':
                if in_single:
                    token.append(c)
                elif in_double:
                    expr.append(Atom("".join(token)))
                    token = []
                    in_double = False
                else:
                    in_double = True
            elif in_single or in_double:
                token.append(c)
            elif c == "(":
                if opened:
                    expr.append(self.parse())
                else:
                    opened = True
            elif c == ")":
                if token:
                    expr.append(Atom("".join(token)))
                self.depth -= 1
                return List(expr)
            elif c.isspace():
                if token:
                    expr.append(Atom("".join(token)))
                    token = []
            else:
                token.append(c)

        raise UnexpectedEOFError(depth=self.depth)


def from_string(text: str, config: Optional[ReaderConfig] = None) -> Sexp:
    """Parse one expression from a string."""
    return Reader(text, config).read()


def from_bytes(data: bytes, config: Optional[ReaderConfig] = None) -> Sexp:
    """Parse one expression from bytes in the configured encoding."""
    return Reader(data, config).read()


def read(source: Any, config: Optional[ReaderConfig] = None) -> Sexp:
    """Parse one expression from a stream or in-memory data."""
    return Reader(source, config).read()
