"""
S-expression value model, reader and writer.

Usage:
    from sexpkit.sexp import Atom, List, Sexp, from_string, to_string

    expr = from_string("(a b c (1 2 3) (x) 't e s t')")
    expr[3]            # List(items=[Atom(text='1'), Atom(text='2'), Atom(text='3')])
    to_string(expr)    # "(a b c (1 2 3) (x) 't e s t')"
"""

from .builders import atom, option, pair, sexp_list
from .model import Atom, List, Sexp
from .reader import Reader, from_bytes, from_string, read
from .writer import Writer, format_atom, needs_quoting, to_bytes, to_string, write

__all__ = [
    # Value model
    "Sexp",
    "Atom",
    "List",
    # Builders
    "atom",
    "sexp_list",
    "pair",
    "option",
    # Reader
    "Reader",
    "from_string",
    "from_bytes",
    "read",
    # Writer
    "Writer",
    "to_string",
    "to_bytes",
    "write",
    "format_atom",
    "needs_quoting",
]
