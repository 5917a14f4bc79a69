"""
roman_runtime.py

Roman Math Runtime
------------------

`evaluate` is the unified entrypoint for evaluating Roman numeral
arithmetic expressions.

It connects:
    - canonicalization (separator stripping)
    - RomanParser     (PEG parser -> parse tree)
    - RomanEvaluator  (parse tree -> integer)
    - error translation (empty input / parse failure)
"""

from __future__ import annotations

import sys
import traceback
from typing import Optional, Tuple

from arpeggio import NoMatch

from .canonical import strip_separators
from .roman_parser import parse_calculation, evaluate_tree, _DEBUG_ENABLED


class RomanMathError(Exception):
    pass


class EmptyInputError(RomanMathError, ValueError):
    """The expression was None or the empty string."""


class ParseError(RomanMathError):
    """
    The expression is not a well-formed calculation.

    Attributes:
        position: index into the separator-stripped text where the
                  furthest parse attempt failed.
        expected: descriptions of the constructs tried at that position.
        text:     the separator-stripped text that was parsed.
    """

    def __init__(self, message: str, position: int = 0,
                 expected: Tuple[str, ...] = (), text: Optional[str] = None):
        super().__init__(message)
        self.position = position
        self.expected = expected
        self.text = text


def _describe_rule(rule) -> str:
    # String and regex matches describe themselves; rules fall back to a name.
    return getattr(rule, "to_match", None) or rule.rule_name or rule.name


class RomanParser:
    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse(self, text: str):
        try:
            return parse_calculation(text)
        except NoMatch as e:
            if self.debug or _DEBUG_ENABLED:
                traceback.print_exc()
            expected = tuple(sorted({_describe_rule(r) for r in e.rules}))
            raise ParseError(str(e), position=e.position, expected=expected, text=text) from e

    def evaluate(self, text: str) -> int:
        parse_tree = self.parse(text)
        result = evaluate_tree(parse_tree, debug=self.debug)
        if self.debug:
            sys.stderr.write(f"[RomanParser] {text!r} -> {result}\n")
        return result


def evaluate(expression: Optional[str], debug: bool = False) -> int:
    """
    Evaluate a Roman numeral arithmetic expression.

    Supports `+`, `-` and `*` (with `*` binding tighter), parentheses of
    any depth, and separator characters anywhere in the text.

    Raises:
        EmptyInputError: expression is None or empty.
        TypeError:       expression is not a string.
        ParseError:      expression is malformed or has trailing input.
    """
    if expression is None or expression == "":
        raise EmptyInputError("expression is None or empty")
    if not isinstance(expression, str):
        raise TypeError(f"expression must be a str, not {type(expression).__name__}")

    canonical = strip_separators(expression)
    return RomanParser(debug=debug).evaluate(canonical)
