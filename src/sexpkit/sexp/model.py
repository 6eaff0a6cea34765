"""
S-expression value model.

A tree is made of two node kinds:

- ``Atom``: a leaf holding a text value
- ``List``: an ordered, possibly empty sequence of child nodes

The empty list doubles as the unit value ("no value"), and a one-element
list is the wrapper the serde bridge uses for a present optional value.

Example::

    from sexpkit.sexp import Atom, List, Sexp

    expr = Sexp.list(["a", "b", Sexp.list([1, 2, 3])])
    expr[2].to_list()     # [Atom(text='1'), Atom(text='2'), Atom(text='3')]
    List([Atom("42")]).as_int()  # 42
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Union

from sexpkit.exceptions import InvalidTypeError

# Values accepted by Sexp.from_value
SexpLike = Union["Sexp", str, int, float, bool, None, list, tuple]

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


class Sexp:
    """
    Base class for S-expression nodes.

    Never instantiated directly; every node is an :class:`Atom` or a
    :class:`List`. Usable as a pydantic field type.
    """

    __slots__ = ()

    @property
    def is_atom(self) -> bool:
        """True if this is a leaf node."""
        return isinstance(self, Atom)

    @property
    def is_list(self) -> bool:
        """True if this is a list node."""
        return isinstance(self, List)

    def is_unit(self) -> bool:
        """True only for the empty list."""
        return isinstance(self, List) and len(self.items) == 0

    def to_list(self) -> list[Sexp]:
        """Flatten one level: an atom yields itself, a list yields its children."""
        if isinstance(self, Atom):
            return [self]
        return list(self.items)

    def as_str(self) -> Optional[str]:
        """
        Collapse to a string.

        An atom gives its text and a single-element list recurses into its
        child. Anything else gives None.
        """
        node = self
        while isinstance(node, List):
            if len(node.items) != 1:
                return None
            node = node.items[0]
        return node.text

    def as_int(self) -> Optional[int]:
        """Collapse to a signed 64-bit integer, or None if that is not possible."""
        text = self.as_str()
        if text is None or not _INT_RE.fullmatch(text):
            return None
        value = int(text)
        if value < I64_MIN or value > I64_MAX:
            return None
        return value

    def as_float(self) -> Optional[float]:
        """Collapse to a float, or None if that is not possible."""
        text = self.as_str()
        if not text or "_" in text or text != text.strip():
            return None
        try:
            return float(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        from sexpkit.sexp.writer import to_string

        return to_string(self)

    # Convenience constructors
    @staticmethod
    def atom(value: Any) -> Atom:
        """Create an atom from any string-like value."""
        if isinstance(value, bytes):
            return Atom(value.decode("utf-8"))
        return Atom(str(value))

    @staticmethod
    def list(values: Iterable[SexpLike] = ()) -> List:
        """Create a list node, converting each value with :meth:`from_value`."""
        return List([Sexp.from_value(v) for v in values])

    @staticmethod
    def unit() -> List:
        """Create the empty list."""
        return List([])

    @staticmethod
    def from_value(value: SexpLike) -> Sexp:
        """
        Convert a native value into a node.

        Strings become atoms verbatim, numbers use their decimal text, bools
        become ``true``/``false``, None becomes the unit list and lists or
        tuples convert element-wise.

        Raises:
            InvalidTypeError: For any other type
        """
        if isinstance(value, Sexp):
            return value
        if isinstance(value, str):
            return Atom(value)
        if isinstance(value, bool):
            return Atom("true" if value else "false")
        if isinstance(value, (int, float)):
            return Atom(str(value))
        if value is None:
            return List([])
        if isinstance(value, (list, tuple)):
            return List([Sexp.from_value(v) for v in value])
        raise InvalidTypeError(
            f"Cannot convert {type(value).__name__} to an s-expression",
            value=value,
            suggestions=["Use sexpkit.serde.to_sexp for arbitrary Python values"],
        )

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from sexpkit.serde.schema import sexp_core_schema

        return sexp_core_schema(cls)


@dataclass(eq=True)
class Atom(Sexp):
    """A leaf node holding text."""

    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InvalidTypeError(
                "Atom text must be a string",
                context={"got": type(self.text).__name__},
            )


@dataclass(eq=True)
class List(Sexp):
    """An ordered sequence of child nodes."""

    items: list[Sexp] = field(default_factory=list)

    def __post_init__(self):
        self.items = list(self.items)
        for item in self.items:
            if not isinstance(item, Sexp):
                raise InvalidTypeError(
                    "List children must be Sexp nodes",
                    context={"got": type(item).__name__},
                    suggestions=["Build lists with Sexp.list() to convert native values"],
                )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Sexp]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Sexp:
        return self.items[index]
