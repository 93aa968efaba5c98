"""Restricted condition language used by <if cond="...">."""
from __future__ import annotations

import pytest

from markfill.engine.conditions import (
    AND,
    OR,
    evaluate_comparison,
    evaluate_condition,
    reduce_logic,
    split_condition,
)
from markfill.errors import InvalidInputType, InvalidPrimitiveLiteral, MalformedAccessor, UndefinedVariable

DATA = {"num": 5, "name": "bob", "flag": True, "empty": "", "zero": 0, "items": [1], "none": []}


@pytest.mark.parametrize(("condition", "expected"), [
    ("{{ num }} > 3", True),
    ("{{ num }} < 3", False),
    ("{{ num }} >= 5", True),
    ("{{ num }} <= 4", False),
    ("{{ num }} == 5", True),
    ("{{ num }} == '5'", True),
    ("{{ num }} === '5'", False),
    ("{{ num }} === 5", True),
    ("{{ name }} == 'bob'", True),
    ("'bob' === {{ name }}", True),
    ("{{ flag }} === true", True),
    ("{{ flag }} == 1", True),
    ("3 < 4", True),
])
def test_single_comparison(condition, expected):
    assert evaluate_condition(condition, DATA) is expected


@pytest.mark.parametrize(("condition", "expected"), [
    ("{{ flag }}", True),
    ("{{ empty }}", False),
    ("{{ zero }}", False),
    ("{{ items }}", True),
    ("{{ none }}", False),
    ("true", True),
    ("'text'", True),
    ("0", False),
])
def test_bare_operand_uses_truthiness(condition, expected):
    assert evaluate_condition(condition, DATA) is expected


def test_multi_character_operators_are_not_split():
    # ">=" must win over ">" and "===" over "=="
    assert evaluate_comparison("{{ num }} >= 5", DATA) is True
    assert evaluate_comparison("{{ num }} === 5", DATA) is True


def test_and_or():
    assert evaluate_condition("{{ num }} > 3 && {{ name }} == 'bob'", DATA) is True
    assert evaluate_condition("{{ num }} > 9 && {{ name }} == 'bob'", DATA) is False
    assert evaluate_condition("{{ num }} > 9 || {{ name }} == 'bob'", DATA) is True
    assert evaluate_condition("{{ num }} > 9 || {{ name }} == 'al'", DATA) is False


def test_every_comparison_is_evaluated():
    # Every comparison is evaluated, so an undefined name fails even after a false AND.
    with pytest.raises(UndefinedVariable):
        evaluate_condition("{{ num }} > 9 && {{ missing }} == 1", DATA)


def test_left_to_right_reduction_hand_trace():
    """a=4, b=3, c=1: [a>3, AND, b<2, OR, c==1] = [T, AND, F, OR, T].

    Folding left to right: (T and F) -> F, then (F or T) -> T.
    """
    data = {"a": 4, "b": 3, "c": 1}
    segments, combinators = split_condition("{{a}}>3 && {{b}}<2 || {{c}}==1")
    assert segments == ["{{a}}>3", "{{b}}<2", "{{c}}==1"]
    assert combinators == [AND, OR]
    values = [evaluate_comparison(s, data) for s in segments]
    assert values == [True, False, True]
    assert evaluate_condition("{{a}}>3 && {{b}}<2 || {{c}}==1", data) is True


def test_no_precedence_between_and_or():
    # Conventional precedence would read "T || F && F" as T || (F && F) = T.
    # Left to right it is (T || F) && F = F.
    data = {"a": 1, "b": 2, "c": 3}
    assert evaluate_condition("{{a}} == 1 || {{b}} == 9 && {{c}} == 9", data) is False


def test_reduce_logic_folds_left():
    assert reduce_logic([True], []) is True
    assert reduce_logic([True, False, True], [AND, OR]) is True
    assert reduce_logic([True, True, False], [OR, AND]) is False
    assert reduce_logic([False, True, True], [AND, AND]) is False


def test_split_continues_on_remainder():
    segments, combinators = split_condition("{{ a_rather_long_name }} == 1 && {{b}} || {{c}} && 1")
    assert segments == ["{{ a_rather_long_name }} == 1", "{{b}}", "{{c}}", "1"]
    assert combinators == [AND, OR, AND]


# ─── Forbidden syntax ───

@pytest.mark.parametrize("condition", [
    "!{{ flag }}",
    "{{ num }} != 3",
    "({{ num }} > 3)",
    "{{ items[0] }} == 1",
    "{{ user.name }} == 'x'",
    "{{ num }} + 1 > 3",
    "{{ num }} - 1 > 3",
    "{{ num }} * 2 > 3",
    "{{ num }} / 2 > 3",
    "{{ num }} > -1",
    "{{ name }} == 'a,b'",
])
def test_forbidden_characters(condition):
    with pytest.raises(MalformedAccessor):
        evaluate_condition(condition, DATA)


def test_dot_inside_reference_is_rejected():
    data = {"user": {"name": "x"}}
    with pytest.raises(MalformedAccessor):
        evaluate_condition("{{ user.name }}", data)


def test_bare_word_operand_is_invalid_literal():
    with pytest.raises(InvalidPrimitiveLiteral):
        evaluate_condition("{{ name }} == bob", DATA)


def test_missing_operand_is_invalid_literal():
    with pytest.raises(InvalidPrimitiveLiteral):
        evaluate_condition("== 3", DATA)


def test_undefined_reference():
    with pytest.raises(UndefinedVariable):
        evaluate_condition("{{ nope }} > 1", DATA)


def test_condition_must_be_string():
    with pytest.raises(InvalidInputType):
        evaluate_condition(None, DATA)
