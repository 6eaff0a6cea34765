"""
Bridge between the s-expression value model and typed Python data.

- :func:`to_sexp` / :func:`dumps` encode Python values (including pydantic
  models, dataclasses and numpy arrays) as s-expressions
- :class:`SexpDecoder`, :func:`decode` and :func:`loads` decode text into
  scalar, optional and unit targets
- ``Sexp`` is a pydantic field type (see :mod:`sexpkit.serde.schema`)

Usage:
    from typing import Optional
    from sexpkit.serde import dumps, loads

    dumps(["a", 1, [2.5, None]])   # "(a 1 (2.5 ()))"
    loads("(7)", Optional[int])    # 7
"""

from .decode import (
    Char,
    Identifier,
    IgnoredAny,
    SexpDecoder,
    decode,
    loads,
)
from .encode import dumps, to_sexp
from .schema import dump, visit

__all__ = [
    # Encoding
    "to_sexp",
    "dumps",
    # Decoding
    "SexpDecoder",
    "decode",
    "loads",
    "Char",
    "Identifier",
    "IgnoredAny",
    # pydantic schema helpers
    "visit",
    "dump",
]
