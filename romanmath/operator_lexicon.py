"""
Roman Math Operator Lexicon (Single Source of Truth)

This module defines the operator table for the expression grammar.
The parser grammar and the evaluator both import from this module
so the matched symbols and their semantics cannot drift apart.
"""
import operator

# Lowest precedence: additive operators
ADDITIVE_OPS = ("+", "-")

# Higher precedence: multiplicative operators
MULTIPLICATIVE_OPS = ("*",)

# Ordered from loosest to tightest binding
PRECEDENCE_LEVELS = (ADDITIVE_OPS, MULTIPLICATIVE_OPS)

# Every level folds left to right
ASSOCIATIVITY = {op: "left" for level in PRECEDENCE_LEVELS for op in level}

BINARY_OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
}

# All operators (for grammar and validation)
ALL_OPS = frozenset(ASSOCIATIVITY)


def precedence_of(op: str) -> int:
    """Binding strength of an operator; higher binds tighter."""
    for level, ops in enumerate(PRECEDENCE_LEVELS):
        if op in ops:
            return level
    raise KeyError(op)
