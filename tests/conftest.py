"""Pytest fixtures for sexpkit tests."""

import io

import pytest

from sexpkit.sexp import sexp_list

# Reference form covering nesting, a single-atom list and a quoted atom
SAMPLE_TEXT = "(a b c (1 2 3) (x) 't e s t')"


@pytest.fixture
def sample_text():
    """Canonical text of the sample form."""
    return SAMPLE_TEXT


@pytest.fixture
def sample_tree():
    """Parsed tree of the sample form."""
    return sexp_list("a", "b", "c", sexp_list(1, 2, 3), sexp_list("x"), "t e s t")


@pytest.fixture
def byte_source():
    """Factory for binary streams holding encoded text."""

    def _make(text: str, encoding: str = "utf-8") -> io.BytesIO:
        return io.BytesIO(text.encode(encoding))

    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Project directory with no user config and a .git boundary."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sexpkit.config.USER_CONFIG_PATH", tmp_path / "no-user-config.toml")
    return tmp_path
