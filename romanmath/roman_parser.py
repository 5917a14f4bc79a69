import os
import re
import sys
import threading
from arpeggio import ParserPython, PTNodeVisitor, visit_parse_tree, ZeroOrMore, Optional, And, EOF
from arpeggio import RegExMatch as _

from .operator_lexicon import ADDITIVE_OPS, MULTIPLICATIVE_OPS, BINARY_OPS

# ==========================================
# PARSER INSTANCES
# ==========================================
# Arpeggio parsers carry per-parse state (position, results), so a single
# instance must never be driven by two threads at once. Each thread builds
# its own parser on first use and reuses it afterwards.

# Grammar version tracking (increment when grammar changes)
GRAMMAR_VERSION = "1.0.0"

_THREAD_STATE = threading.local()


def _get_or_create_parser():
    """Get this thread's parser instance, creating it if needed."""
    parser = getattr(_THREAD_STATE, "parser", None)
    if parser is None:
        # Separators are stripped before parsing, so the grammar never skips
        # whitespace on its own.
        parser = ParserPython(calculation, skipws=False, reduce_tree=False)
        _THREAD_STATE.parser = parser
    return parser

# ==========================================
# DEBUGGING INSTRUMENTATION
# ==========================================
# Enable debug prints by setting ROMANMATH_DEBUG=1 (default is 0)
_DEBUG_ENABLED = os.getenv("ROMANMATH_DEBUG", "0") == "1"


def _debug_print(*args, **kwargs):
    """Print to stderr only if debug is enabled."""
    if _DEBUG_ENABLED:
        print(*args, file=sys.stderr, **kwargs)

# ==========================================
# COMBINATORS
# ==========================================

def up_to(n, expr):
    """
    Match `expr` greedily between zero and `n` times.

    Built as nested optionals, so it always succeeds; only the number of
    consumed repetitions varies. A fresh expression tree is built on every
    call because arpeggio attaches parsed nodes to the expression objects.
    """
    if n <= 0:
        raise ValueError("up_to() needs a positive repetition count")
    if n == 1:
        return Optional(expr)
    return Optional(expr, up_to(n - 1, expr))


def _place(low, mid, top):
    # Ordered choice: the first alternative that matches wins.
    return [
        (low, top),                 # IX, XC, CM
        (mid, up_to(3, low)),       # V..VIII, L..LXXX, D..DCCC
        (low, mid),                 # IV, XL, CD
        (low, up_to(2, low)),       # I..III, X..XXX, C..CCC
    ]

# ==========================================
# GRAMMAR
# ==========================================
# Precedence (tightest first):
#  1. numeral / parenthesized group
#  2. multiplicative_op (*)
#  3. additive_op (+ -)

def thousands():
    return "M", up_to(2, "M")


def hundreds():
    return _place("C", "D", "M")


def tens():
    return _place("X", "L", "C")


def ones():
    return _place("I", "V", "X")


def numeral():
    # Every place is optional, but a numeral must consume at least one
    # symbol: the lookahead rules out the all-empty match.
    return And(_(r'[MDCLXVI]')), Optional(thousands), Optional(hundreds), Optional(tens), Optional(ones)


def _op_pattern(ops):
    return "|".join(re.escape(op) for op in ops)


def additive_op():
    return _(_op_pattern(ADDITIVE_OPS))


def multiplicative_op():
    return _(_op_pattern(MULTIPLICATIVE_OPS))


def factor():
    return [numeral, ("(", expression, ")")]


def term():
    # factor (* factor)*
    return factor, ZeroOrMore(multiplicative_op, factor)


def expression():
    # term ((+|-) term)*
    return term, ZeroOrMore(additive_op, term)


def calculation():
    # The whole input must be consumed.
    return expression, EOF

# ==========================================
# EVALUATION
# ==========================================
# (base, low, mid, top) per decimal place below the thousands.
PLACE_SYMBOLS = {
    "hundreds": (100, "C", "D", "M"),
    "tens": (10, "X", "L", "C"),
    "ones": (1, "I", "V", "X"),
}


def place_value(text, base, low, mid, top):
    """
    Value of one already-matched decimal place.

    The grammar guarantees `text` is one of the four alternatives
    accepted by a place rule.
    """
    if text == low + top:
        return 9 * base
    if text.startswith(mid):
        return (len(text) - 1 + 5) * base
    if text == low + mid:
        return 4 * base
    return len(text) * base


def _flatten(children):
    # Arpeggio may hand repetition results over as nested lists.
    flat = []
    for x in children:
        if isinstance(x, (list, tuple)):
            flat.extend(_flatten(x))
        else:
            flat.append(x)
    return flat


class RomanEvaluator(PTNodeVisitor):
    """
    Folds a `calculation` parse tree into its integer value.

    Place rules are valued from their matched text, numerals sum their
    places, and `term` / `expression` apply their operators left to right.
    """

    def __init__(self, debug=False):
        super().__init__(debug=debug)
        self.debug = debug

    def _trace(self, message):
        if self.debug:
            print(f"DEBUG RomanEvaluator: {message}", file=sys.stderr)

    # --- Numerals ---

    def visit_thousands(self, node, children):
        return len(node.flat_str()) * 1000

    def _visit_place(self, node):
        text = node.flat_str()
        value = place_value(text, *PLACE_SYMBOLS[node.rule_name])
        self._trace(f"{node.rule_name} {text!r} -> {value}")
        return value

    def visit_hundreds(self, node, children):
        return self._visit_place(node)

    def visit_tens(self, node, children):
        return self._visit_place(node)

    def visit_ones(self, node, children):
        return self._visit_place(node)

    def visit_numeral(self, node, children):
        return sum(c for c in _flatten(children) if isinstance(c, int))

    # --- Operators ---

    def visit_additive_op(self, node, children):
        return node.value

    def visit_multiplicative_op(self, node, children):
        return node.value

    def visit_factor(self, node, children):
        # Either a numeral value or the value of a parenthesized group;
        # the bracket terminals are the only non-integer children.
        values = [c for c in _flatten(children) if isinstance(c, int)]
        return values[0]

    def _fold_left(self, children):
        """
        Left-associative fold over [v0, op1, v1, op2, v2, ...]:

            ((v0 op1 v1) op2 v2) ...
        """
        flat = _flatten(children)
        result = flat[0]
        i = 1
        while i < len(flat):
            op = flat[i]
            rhs = flat[i + 1]
            folded = BINARY_OPS[op](result, rhs)
            self._trace(f"{result} {op} {rhs} -> {folded}")
            result = folded
            i += 2
        return result

    def visit_term(self, node, children):
        return self._fold_left(children)

    def visit_expression(self, node, children):
        return self._fold_left(children)

    def visit_calculation(self, node, children):
        return _flatten(children)[0]

    def visit__default__(self, node, children):
        # Terminals (brackets, symbols) become their text; anything else
        # passes its children through for the parent rule to flatten.
        if not children and hasattr(node, 'value'):
            return node.value
        return children


def parse_calculation(text):
    """Parse `text` as a whole calculation; raises arpeggio NoMatch on failure."""
    parser = _get_or_create_parser()
    _debug_print(f"DEBUG parse_calculation: {text!r}")
    return parser.parse(text)


def evaluate_tree(parse_tree, debug=False):
    """Evaluate a `calculation` parse tree to an integer."""
    return visit_parse_tree(parse_tree, RomanEvaluator(debug=debug))
