"""Tests for the s-expression writer."""

import io
import tempfile

import pytest

from sexpkit.config import WriterConfig
from sexpkit.exceptions import InvalidTypeError, SexpIOError
from sexpkit.sexp import (
    Atom,
    List,
    Writer,
    format_atom,
    needs_quoting,
    sexp_list,
    to_bytes,
    to_string,
    write,
)


class TestAtomFormatting:
    """Tests for atom quoting rules."""

    @pytest.mark.parametrize("text", ["a b", "(", ")", "f(x)", " "])
    def test_structural_characters_need_quoting(self, text):
        assert needs_quoting(text) is True

    @pytest.mark.parametrize("text", ["abc", "a\tb", "it's", 'say"', ""])
    def test_other_text_does_not_need_quoting(self, text):
        assert needs_quoting(text) is False

    def test_plain_atom_verbatim(self):
        assert format_atom("hello") == "hello"

    def test_single_quote_preferred(self):
        assert format_atom("a b") == "'a b'"

    def test_double_quote_when_atom_has_single_quote(self):
        assert format_atom("it's here") == '"it\'s here"'

    def test_double_quote_content_written_verbatim(self):
        assert format_atom("x y z'\"") == '"x y z\'""'

    def test_double_quote_escaped_when_configured(self):
        assert format_atom("x y z'\"", escape_double_quotes=True) == '"x y z\'\\""'

    def test_double_quote_in_single_quoted_atom(self):
        assert format_atom('a "b"') == "'a \"b\"'"

    def test_quote_chars_without_structural_chars_verbatim(self):
        assert format_atom("it's") == "it's"


class TestListFormatting:
    """Tests for list output."""

    def test_empty_list(self):
        assert to_string(List([])) == "()"

    def test_children_separated_by_single_space(self):
        assert to_string(sexp_list("a", "b", "c")) == "(a b c)"

    def test_nested(self):
        assert to_string(sexp_list("a", sexp_list(), sexp_list("b", sexp_list("c")))) == "(a () (b (c)))"

    def test_mixed_list(self):
        expr = sexp_list("a", "b", "c", sexp_list(1, 2, 3), "x y z'\"")
        assert to_string(expr) == "(a b c (1 2 3) \"x y z'\"\")"

    def test_single_atom(self):
        assert to_string(Atom("a b")) == "'a b'"


class TestSinks:
    """Tests for the supported sink kinds."""

    def test_binary_sink(self):
        buf = io.BytesIO()
        Writer(buf).write(sexp_list("é", "a b"))
        assert buf.getvalue() == "(é 'a b')".encode("utf-8")

    def test_text_sink(self):
        buf = io.StringIO()
        Writer(buf).write(sexp_list("a"))
        assert buf.getvalue() == "(a)"

    def test_to_bytes_encoding(self):
        assert to_bytes(sexp_list("café"), WriterConfig(encoding="latin-1")) == "(café)".encode("latin-1")

    def test_unencodable_text(self):
        with pytest.raises(SexpIOError, match="Cannot encode"):
            to_bytes(sexp_list("€"), WriterConfig(encoding="ascii"))

    def test_sequential_writes(self):
        buf = io.StringIO()
        writer = Writer(buf)
        writer.write(sexp_list("a"))
        writer.write(sexp_list("b"))
        assert buf.getvalue() == "(a)(b)"

    def test_write_helper_flushes(self, tmp_path):
        path = tmp_path / "out.sexp"
        with open(path, "wb") as f:
            write(sexp_list("a", "b c"), f)
            assert path.read_bytes() == b"(a 'b c')"

    def test_context_manager(self):
        buf = io.StringIO()
        with Writer(buf) as writer:
            writer.write(sexp_list("x"))
        assert buf.getvalue() == "(x)"

    def test_sink_error_wrapped(self):
        class Broken(io.RawIOBase):
            def writable(self):
                return True

            def write(self, b):
                raise OSError("no space left")

        with pytest.raises(SexpIOError) as exc:
            Writer(Broken()).write(sexp_list("a"))
        assert isinstance(exc.value.cause, OSError)

    def test_rejects_non_nodes(self):
        with pytest.raises(InvalidTypeError):
            Writer(io.StringIO()).write("not a node")


class TestSinkDetection:
    """Tests that sinks get str or bytes according to their kind."""

    def test_text_mode_spooled_file(self):
        with tempfile.SpooledTemporaryFile(mode="w+") as f:
            Writer(f).write(sexp_list("a", "b c"))
            f.seek(0)
            assert f.read() == "(a 'b c')"

    def test_binary_spooled_file(self):
        with tempfile.SpooledTemporaryFile() as f:
            Writer(f).write(sexp_list("é"))
            f.seek(0)
            assert f.read() == "(é)".encode("utf-8")

    def test_duck_typed_text_sink(self):
        class Collector:
            def __init__(self):
                self.chunks = []

            def write(self, s):
                if not isinstance(s, str):
                    raise TypeError("str expected")
                self.chunks.append(s)

        sink = Collector()
        Writer(sink).write(sexp_list("a", "b c"))
        assert "".join(sink.chunks) == "(a 'b c')"

    def test_mode_attribute_selects_bytes(self):
        class ByteCollector:
            mode = "wb"

            def __init__(self):
                self.data = b""

            def write(self, b):
                self.data += b

        sink = ByteCollector()
        Writer(sink).write(sexp_list("a"))
        assert sink.data == b"(a)"

    def test_rejected_output_wrapped(self):
        class BytesOnly:
            def write(self, b):
                return b"" + b

        with pytest.raises(SexpIOError, match="Sink rejected") as exc:
            Writer(BytesOnly()).write(sexp_list("a"))
        assert isinstance(exc.value.cause, TypeError)
