"""
Roman Math - arithmetic over Roman numerals.

Public API:
- evaluate: Canonical entrypoint (text -> int)
- RomanParser: Parser wrapper with error translation
- RomanEvaluator: Parse tree visitor producing the integer result
- ParseError / EmptyInputError: Errors surfaced to callers
"""

from .roman_runtime import (
    evaluate,
    RomanParser,
    RomanMathError,
    ParseError,
    EmptyInputError,
)
from .roman_parser import RomanEvaluator
from .canonical import strip_separators

# Derive version from package metadata
try:
    from importlib.metadata import version
    __version__ = version("romanmath")
except Exception:
    __version__ = "1.0.0"

__all__ = [
    "evaluate",
    "RomanParser",
    "RomanEvaluator",
    "RomanMathError",
    "ParseError",
    "EmptyInputError",
    "strip_separators",
]
