"""
sexpkit: a minimal s-expression format for Python.

Text is made of parenthesised lists and whitespace-separated atoms; atoms
containing spaces or parentheses are quoted with ``'`` or ``"``.

Modules:
    sexp: Value model (Atom / List), reader and writer
    serde: Encoding of Python values and typed decoding, pydantic integration
    config: TOML configuration for readers and writers
    exceptions: Error hierarchy

Quick Start::

    from sexpkit import from_string, to_string, dumps, loads

    expr = from_string("(a b c (1 2 3) (x) 't e s t')")
    to_string(expr)                 # "(a b c (1 2 3) (x) 't e s t')"

    dumps(["x y", 1, True])         # "('x y' 1 true)"
    loads("(TRUE)", bool | None)    # True
"""

__version__ = "0.1.0"

from sexpkit.config import Config, ConfigError, ReaderConfig, WriterConfig
from sexpkit.exceptions import (
    InvalidTypeError,
    SexpError,
    SexpIOError,
    UnexpectedEOFError,
    UnsupportedShapeError,
)
from sexpkit.serde import (
    Char,
    Identifier,
    IgnoredAny,
    SexpDecoder,
    decode,
    dumps,
    loads,
    to_sexp,
)
from sexpkit.sexp import (
    Atom,
    List,
    Reader,
    Sexp,
    Writer,
    from_bytes,
    from_string,
    sexp_list,
    to_bytes,
    to_string,
)

__all__ = [
    "__version__",
    # Value model
    "Sexp",
    "Atom",
    "List",
    "sexp_list",
    # Reader / writer
    "Reader",
    "Writer",
    "from_string",
    "from_bytes",
    "to_string",
    "to_bytes",
    # Serde bridge
    "to_sexp",
    "dumps",
    "SexpDecoder",
    "decode",
    "loads",
    "Char",
    "Identifier",
    "IgnoredAny",
    # Configuration
    "Config",
    "ReaderConfig",
    "WriterConfig",
    "ConfigError",
    # Errors
    "SexpError",
    "UnsupportedShapeError",
    "InvalidTypeError",
    "SexpIOError",
    "UnexpectedEOFError",
]
