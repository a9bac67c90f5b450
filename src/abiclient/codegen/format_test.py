"""Tests for format.py"""

from __future__ import annotations

import pytest

from .format import avoid_python_keywords, capitalize_first_letter_only, format_code, write_code


@pytest.mark.parametrize(
    "name,expected",
    [("from", "_from"), ("match", "_match"), ("id", "_id"), ("amount", "amount"), ("tokenId", "tokenId")],
)
def test_avoid_python_keywords(name, expected):
    """Keywords, soft keywords and builtins are prefixed."""
    assert avoid_python_keywords(name) == expected


def test_avoid_reserved_names():
    """Names taken by the enclosing scope are prefixed too."""
    assert avoid_python_keywords("value", frozenset({"value"})) == "_value"


def test_capitalize_first_letter_only():
    """The rest of the string keeps its case."""
    assert capitalize_first_letter_only("getTokenInfo") == "GetTokenInfo"
    assert capitalize_first_letter_only("") == ""


def test_format_code():
    """Blank lines are normalized by Black."""
    code = "def f(a,b):\n\n\n    return a+b\n"
    assert format_code(code, 80) == "def f(a, b):\n    return a + b\n"


def test_format_code_invalid():
    """Source Black cannot parse is reported."""
    with pytest.raises(ValueError):
        format_code("def f(:\n", 80)


def test_write_code(tmp_path):
    """Parent directories are created."""
    path = tmp_path / "nested" / "Client.py"
    write_code(path, "x = 1\n")
    assert path.read_text() == "x = 1\n"
