"""Tests for the top-level sexpkit API."""

from typing import Optional

import sexpkit


class TestQuickStart:
    """The documented quick-start flows."""

    def test_parse_and_print(self):
        expr = sexpkit.from_string("(a b c (1 2 3) (x) 't e s t')")
        assert sexpkit.to_string(expr) == "(a b c (1 2 3) (x) 't e s t')"

    def test_encode_and_decode(self):
        assert sexpkit.dumps(["x y", 1, True]) == "('x y' 1 true)"
        assert sexpkit.loads("(TRUE)", Optional[bool]) is True

    def test_bytes_round_trip(self):
        expr = sexpkit.sexp_list("ä", sexpkit.sexp_list("b c"))
        assert sexpkit.from_bytes(sexpkit.to_bytes(expr)) == expr

    def test_exports(self):
        for name in sexpkit.__all__:
            assert hasattr(sexpkit, name)
