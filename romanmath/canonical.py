"""
romanmath/canonical.py - Shared Canonicalization Logic
"""
import unicodedata


def is_separator(ch: str) -> bool:
    """True for Unicode separators (Zs, Zl, Zp)."""
    return unicodedata.category(ch).startswith("Z")


def strip_separators(expression: str) -> str:
    """
    Canonicalize an expression before grammar matching.

    Rules:
        - Every Unicode separator character is removed, wherever it appears.
        - Nothing else is touched (tabs and newlines are control characters,
          not separators, and are left for the grammar to reject).

    Separators are deleted rather than skipped between tokens, so "X I"
    canonicalizes to "XI".
    """
    if expression is None:
        return ""
    return "".join(ch for ch in expression if not is_separator(ch))
