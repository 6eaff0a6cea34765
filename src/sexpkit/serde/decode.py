"""
Typed decoding of s-expressions.

:class:`SexpDecoder` turns a parsed tree into a value of a requested target
type. Supported targets:

=====================================  =========================================
Target                                 Accepted input
=====================================  =========================================
``Any`` / ``object``                   atom -> ``str``, list -> ``list`` (recursive)
``Sexp`` / ``Atom`` / ``List``         the node itself
``bool``                               ``true``/``TRUE``/``1``, ``false``/``FALSE``/``0``
``int``, ``float``, numpy widths       atom holding decimal text
``Char``                               atom of exactly one character
``str``, ``Identifier``                atom
``bytes``, ``bytearray``               atom (UTF-8 encoded)
``Optional[X]``                        ``(x)`` -> decoded ``x``; any other shape -> None
``None``, unit structs                 ``()`` only
``IgnoredAny``                         anything, discarded
=====================================  =========================================

Sequences, tuples, mappings, enums, newtypes and structs with fields are not
decoded and raise :class:`~sexpkit.exceptions.UnsupportedShapeError`.

Example::

    from typing import Optional
    from sexpkit.serde import loads

    loads("(42)", Optional[int])   # 42
    loads("()", Optional[int])     # None
    loads("(TRUE)", Optional[bool])  # True
"""

from __future__ import annotations

import dataclasses
import logging
import re
import types
import typing
from enum import Enum
from typing import Annotated, Any, Optional, TypeVar, Union, get_args, get_origin

import numpy as np
from pydantic import BaseModel

from sexpkit.config import ReaderConfig
from sexpkit.exceptions import InvalidTypeError, UnsupportedShapeError
from sexpkit.sexp.model import Atom, List, Sexp
from sexpkit.sexp.reader import Reader
from sexpkit.sexp.writer import to_string

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUE_TOKENS = frozenset({"true", "TRUE", "1"})
FALSE_TOKENS = frozenset({"false", "FALSE", "0"})

_INT_RE = re.compile(r"[+-]?[0-9]+")


class Char(str):
    """Decode target for a single character."""


class Identifier(str):
    """Decode target for an identifier (field or variant name)."""


class IgnoredAny:
    """Decode target that consumes one expression and discards it."""


class SexpDecoder:
    """
    Decoder bound to one already-parsed tree.

    Optional values are decoded by binding a new decoder to the wrapped child;
    the child is never printed and re-read.
    """

    def __init__(self, expr: Sexp):
        self.expr = expr

    def decode(self, target: Any) -> Any:
        """
        Decode the bound tree into ``target``.

        Raises:
            InvalidTypeError: If the tree does not match the target
            UnsupportedShapeError: If the target is a composite shape
        """
        if target is Any or target is object:
            return self.decode_any()
        if target is None or target is type(None):
            return self.decode_unit()
        if target is IgnoredAny:
            return self.decode_ignored()

        origin = get_origin(target)
        if origin is Annotated:
            return self.decode(get_args(target)[0])
        if origin is Union or origin is types.UnionType:
            args = get_args(target)
            inner = [a for a in args if a is not type(None)]
            if len(args) == 2 and len(inner) == 1:
                return self.decode_option(inner[0])
            raise UnsupportedShapeError(
                "Decoding into a union other than Optional[X] is not implemented",
                target=target,
            )
        if origin is not None or not isinstance(target, type):
            raise UnsupportedShapeError(
                f"Decoding into a {_shape_name(target)} is not implemented",
                target=target,
            )

        if issubclass(target, Sexp):
            return self.decode_sexp(target)
        if issubclass(target, Enum):
            raise UnsupportedShapeError("Decoding into an enum is not implemented", target=target)
        if issubclass(target, (bool, np.bool_)):
            return target(self.decode_bool())
        if issubclass(target, Char):
            return self.decode_char(target)
        if issubclass(target, Identifier):
            return self.decode_identifier()
        if issubclass(target, str):
            return self.decode_str(target)
        if issubclass(target, (bytes, bytearray)):
            return self.decode_bytes(target)
        if issubclass(target, (int, np.integer)):
            return self.decode_int(target)
        if issubclass(target, (float, np.floating)):
            return self.decode_float(target)
        if _is_unit_struct(target):
            return self.decode_unit_struct(target)

        raise UnsupportedShapeError(
            f"Decoding into a {_shape_name(target)} is not implemented",
            target=target,
            suggestions=["Decode into Any or Sexp and convert the result yourself"],
        )

    def decode_any(self) -> Any:
        """Atoms become strings, lists become lists of decoded children."""
        if isinstance(self.expr, Atom):
            return self.expr.text
        return [SexpDecoder(child).decode_any() for child in self.expr.items]

    def decode_sexp(self, target: type[Sexp] = Sexp) -> Sexp:
        if not isinstance(self.expr, target):
            raise InvalidTypeError(
                f"Expected {target.__name__}", target=target, value=self._describe()
            )
        return self.expr

    def decode_bool(self) -> bool:
        text = self._atom_text(bool)
        if text in TRUE_TOKENS:
            return True
        if text in FALSE_TOKENS:
            return False
        raise InvalidTypeError(
            "Invalid boolean",
            target=bool,
            value=text,
            suggestions=["Use one of: true, TRUE, 1, false, FALSE, 0"],
        )

    def decode_int(self, target: type = int) -> Any:
        text = self._atom_text(target)
        if not _INT_RE.fullmatch(text):
            raise InvalidTypeError("Invalid integer", target=target, value=text)
        value = int(text)
        if issubclass(target, np.integer):
            info = np.iinfo(target)
            if value < info.min or value > info.max:
                raise InvalidTypeError(
                    f"Integer out of range for {target.__name__}",
                    target=target,
                    value=text,
                    context={"min": int(info.min), "max": int(info.max)},
                )
        return target(value)

    def decode_float(self, target: type = float) -> Any:
        text = self._atom_text(target)
        if not text or "_" in text or text != text.strip():
            raise InvalidTypeError("Invalid float", target=target, value=text)
        try:
            value = float(text)
        except ValueError as e:
            raise InvalidTypeError("Invalid float", target=target, value=text) from e
        return target(value)

    def decode_char(self, target: type = Char) -> str:
        text = self._atom_text(target)
        if len(text) != 1:
            raise InvalidTypeError("Expected a single character", target=target, value=text)
        return target(text)

    def decode_str(self, target: type = str) -> str:
        text = self._atom_text(target)
        return text if target is str else target(text)

    def decode_identifier(self) -> Identifier:
        return Identifier(self.decode_str())

    def decode_bytes(self, target: type = bytes) -> Any:
        return target(self._atom_text(target).encode("utf-8"))

    def decode_option(self, inner: Any) -> Any:
        """
        A one-element list is a present value; every other shape is None.

        Malformed input (a bare atom, two or more children) also gives None
        rather than an error.
        """
        if isinstance(self.expr, List) and len(self.expr.items) == 1:
            return SexpDecoder(self.expr.items[0]).decode(inner)
        return None

    def decode_unit(self) -> None:
        if not self.expr.is_unit():
            raise InvalidTypeError("Expected ()", target=type(None), value=self._describe())
        return None

    def decode_unit_struct(self, target: type[T]) -> T:
        self.decode_unit()
        return target()

    def decode_ignored(self) -> None:
        return None

    def _atom_text(self, target: Any) -> str:
        if not isinstance(self.expr, Atom):
            raise InvalidTypeError("Expected an atom", target=target, value=self._describe())
        return self.expr.text

    def _describe(self) -> str:
        return to_string(self.expr)


def _is_unit_struct(target: type) -> bool:
    if issubclass(target, BaseModel):
        return not target.model_fields
    if dataclasses.is_dataclass(target):
        return not dataclasses.fields(target)
    return False


def _shape_name(target: Any) -> str:
    origin = get_origin(target) or target
    if isinstance(target, typing.NewType):
        return "newtype struct"
    if origin in (list, set, frozenset) or (
        isinstance(origin, type) and issubclass(origin, (list, set, frozenset))
    ):
        return "sequence"
    if isinstance(origin, type) and issubclass(origin, tuple):
        if hasattr(origin, "_fields"):
            return "tuple struct"
        return "tuple"
    if isinstance(origin, type) and issubclass(origin, dict):
        return "map"
    if isinstance(origin, type) and (
        issubclass(origin, BaseModel) or dataclasses.is_dataclass(origin)
    ):
        return "struct"
    return f"target {target!r}"


def decode(source: Any, target: Any, config: Optional[ReaderConfig] = None) -> Any:
    """Read one expression from ``source`` and decode it into ``target``."""
    value = Reader(source, config).decode(target)
    logger.debug(f"Decoded {getattr(target, '__name__', target)!s}")
    return value


def loads(text: str, target: Any = Sexp, config: Optional[ReaderConfig] = None) -> Any:
    """Parse a string and decode it into ``target`` (the tree itself by default)."""
    return decode(text, target, config)
