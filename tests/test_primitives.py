"""Literal coercion, stringification and comparison semantics."""
from __future__ import annotations

import pytest

from markfill.engine.primitives import compare, loose_equals, strict_equals, stringify, to_primitive
from markfill.errors import InvalidPrimitiveLiteral

# ─── to_primitive ───

@pytest.mark.parametrize(("token", "expected"), [
    ("true", True),
    ("false", False),
    ("  true  ", True),
    ("'hello'", "hello"),
    ('"hello world"', "hello world"),
    ("''", ""),
    ("42", 42),
    ("-7", -7),
    ("3.5", 3.5),
    ("1e3", 1000.0),
])
def test_to_primitive(token, expected):
    value = to_primitive(token)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize("token", ["hello", "True", "'unbalanced", "\"mixed'", "", "12abc", "nan", "inf"])
def test_to_primitive_rejects_bare_words(token):
    with pytest.raises(InvalidPrimitiveLiteral):
        to_primitive(token)


def test_quotes_are_stripped_once():
    assert to_primitive("'\"inner\"'") == '"inner"'


# ─── stringify ───

@pytest.mark.parametrize(("value", "expected"), [
    (5, "5"),
    (5.0, "5"),
    (2.5, "2.5"),
    (True, "true"),
    (False, "false"),
    (None, "null"),
    ("text", "text"),
    ([1, 2, 3], "1,2,3"),
    (["a", None, True], "a,,true"),
])
def test_stringify(value, expected):
    assert stringify(value) == expected


# ─── equality ───

def test_strict_equality_requires_same_kind():
    assert strict_equals(1, 1.0)
    assert strict_equals("a", "a")
    assert not strict_equals(1, "1")
    assert not strict_equals(1, True)
    assert not strict_equals(None, False)


def test_loose_equality_coerces_numbers_and_booleans():
    assert loose_equals(5, "5")
    assert loose_equals("5", 5.0)
    assert loose_equals(True, 1)
    assert loose_equals("1", True)
    assert loose_equals(0, "")
    assert not loose_equals(None, 0)
    assert not loose_equals(None, False)
    assert loose_equals(None, None)
    assert not loose_equals("abc", 0)


# ─── ordering ───

def test_compare_numbers_and_strings():
    assert compare(">", 4, 3)
    assert compare("<=", 3, 3)
    assert compare(">=", "10", 9)
    assert compare("<", "apple", "banana")
    # lexicographic when both sides are strings
    assert compare("<", "10", "9")


def test_compare_non_numeric_is_false():
    assert not compare(">", "abc", 1)
    assert not compare("<", "abc", 1)
