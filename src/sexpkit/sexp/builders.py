"""
S-expression builders.

Shorthand for building trees from native values.

Usage:
    from sexpkit.sexp.builders import sexp_list

    expr = sexp_list("a", "b", "c", sexp_list(1, 2, 3), "x y z")
    # (a b c (1 2 3) 'x y z')
"""

from sexpkit.exceptions import InvalidTypeError

from .model import Atom, List, Sexp, SexpLike


def atom(value) -> Atom:
    """Build an atom from a string, number or bool."""
    node = Sexp.from_value(value)
    if not isinstance(node, Atom):
        raise InvalidTypeError(f"atom() needs a scalar value, got {type(value).__name__}", value=value)
    return node


def sexp_list(*values: SexpLike) -> List:
    """Build a list node; each argument goes through Sexp.from_value."""
    return List([Sexp.from_value(v) for v in values])


def pair(key: SexpLike, value: SexpLike) -> List:
    """Build a two-element (key value) list."""
    return sexp_list(key, value)


def option(value: SexpLike = None) -> List:
    """
    Build the optional-value wrapper.

    None gives the empty list (absent); anything else gives a
    one-element list holding the converted value (present).
    """
    if value is None:
        return List([])
    return List([Sexp.from_value(value)])
