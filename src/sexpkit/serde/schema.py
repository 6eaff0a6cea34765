"""
pydantic integration for the value model.

Makes :class:`~sexpkit.sexp.Sexp` (and ``Atom`` / ``List``) usable as field
types in pydantic models and ``TypeAdapter``:

- validation visits the input: strings become atoms, sequences become lists
  with each element visited in order, existing nodes pass through
- serialization dumps atoms as strings and lists as nested lists

Example::

    from pydantic import BaseModel
    from sexpkit.sexp import Sexp

    class Form(BaseModel):
        body: Sexp

    Form(body=["define", ["x", "1"]]).body   # List(items=[Atom(...), List(...)])
    Form(body=...).model_dump()              # {"body": ["define", ["x", "1"]]}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic_core import core_schema

from sexpkit.sexp.model import Atom, List, Sexp


def visit(value: Any) -> Sexp:
    """
    Build a node from str/sequence data.

    Raises:
        ValueError: If the input is neither a string nor a sequence
    """
    if isinstance(value, Sexp):
        return value
    if isinstance(value, str):
        return Atom(value)
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray, Mapping)):
        return List([visit(elem) for elem in value])
    raise ValueError(f"expected a valid s-expression, got {type(value).__name__}")


def dump(node: Sexp) -> Any:
    """Dump a node to plain data: atoms to str, lists to list."""
    if isinstance(node, Atom):
        return node.text
    return [dump(child) for child in node.items]


def sexp_core_schema(cls: type[Sexp]) -> core_schema.CoreSchema:
    """Core schema for ``cls`` (Sexp or one of its variants)."""

    def validate(value: Any) -> Sexp:
        node = visit(value)
        if not isinstance(node, cls):
            raise ValueError(f"expected {cls.__name__}, got {type(node).__name__}")
        return node

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(dump),
    )
