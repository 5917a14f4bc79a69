import pytest

from romanmath.operator_lexicon import (
    ADDITIVE_OPS,
    MULTIPLICATIVE_OPS,
    PRECEDENCE_LEVELS,
    ASSOCIATIVITY,
    BINARY_OPS,
    ALL_OPS,
    precedence_of,
)


def test_levels_ordered_loosest_first():
    assert PRECEDENCE_LEVELS == (ADDITIVE_OPS, MULTIPLICATIVE_OPS)
    assert precedence_of("*") > precedence_of("+")
    assert precedence_of("+") == precedence_of("-")


def test_all_operators_left_associative():
    assert set(ASSOCIATIVITY) == ALL_OPS == {"+", "-", "*"}
    assert set(ASSOCIATIVITY.values()) == {"left"}


def test_every_operator_has_semantics():
    assert set(BINARY_OPS) == ALL_OPS
    assert BINARY_OPS["-"](10, 5) == 5
    assert BINARY_OPS["*"](5, 4) == 20


def test_unknown_operator():
    with pytest.raises(KeyError):
        precedence_of("/")
