"""
Encoding of Python values into s-expressions.

Scalars become atoms and sequences become lists whose children are the
encoded elements, in iteration order. Values that are neither (models,
dataclasses, dates, UUIDs, ...) are first dumped to JSON-compatible data with
pydantic, then mapped structurally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter
from pydantic_core import PydanticSerializationError

from sexpkit.config import WriterConfig
from sexpkit.exceptions import InvalidTypeError
from sexpkit.sexp.model import Atom, List, Sexp
from sexpkit.sexp.writer import to_string

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def _adapter(tp: type) -> TypeAdapter:
    return TypeAdapter(tp)


def to_sexp(value: Any) -> Sexp:
    """
    Convert a Python value into an s-expression tree.

    Mappings (including dumped models and dataclasses) become lists of
    ``(key value)`` pairs.

    Raises:
        InvalidTypeError: If the value has no s-expression representation
    """
    if isinstance(value, Sexp):
        return value
    if isinstance(value, Enum):
        return to_sexp(value.value)
    if isinstance(value, str):
        return Atom(str(value))
    if isinstance(value, bool):
        return Atom("true" if value else "false")
    if isinstance(value, (int, float)):
        return Atom(str(value))
    if value is None:
        return List([])
    if isinstance(value, (bytes, bytearray)):
        try:
            return Atom(bytes(value).decode("utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidTypeError("Byte string is not valid UTF-8", value=value) from e
    if isinstance(value, np.ndarray):
        return to_sexp(value.tolist())
    if isinstance(value, np.generic):
        return to_sexp(value.item())
    if isinstance(value, BaseModel):
        return to_sexp(value.model_dump(mode="json"))
    if isinstance(value, Mapping):
        return List([List([to_sexp(k), to_sexp(v)]) for k, v in value.items()])
    if isinstance(value, Iterable):
        return List([to_sexp(elem) for elem in value])

    try:
        data = _adapter(type(value)).dump_python(value, mode="json")
    except (PydanticSchemaGenerationError, PydanticSerializationError, TypeError) as e:
        raise InvalidTypeError(
            f"Cannot encode {type(value).__name__} as an s-expression",
            value=value,
            suggestions=["Convert the value to str, numbers, sequences or mappings first"],
        ) from e
    return to_sexp(data)


def dumps(value: Any, config: Optional[WriterConfig] = None) -> str:
    """
    Encode a Python value and render it as text.

    A scalar renders as a bare atom (``dumps(5) == "5"``), which the reader
    cannot read back: it only reads parenthesised forms. Wrap values that
    must round-trip, for example with :func:`sexpkit.sexp.option`::

        loads(dumps(option(5)), Optional[int])   # 5
    """
    text = to_string(to_sexp(value), config)
    logger.debug(f"Encoded {type(value).__name__} to {len(text)} characters")
    return text
