# Evaluator.py
"""""
Operator precedence (shunting-yard) evaluation of annotated tokens.

One pass over the tokens with two explicit stacks:
- values:    Rational operands
- operators: (Operator, pos) pairs, brackets included as markers

Nothing here recurses, so the nesting depth of the input only costs list
entries, never Python stack frames.
"""""

import sys
from dataclasses import dataclass
from enum import Enum

from .Scanner import TokenType
from . import Rational as R
from . import ScientificEngine
from . import error as E


# Literals (up to max_precision digits) and results (factorials, powers) are
# converted between int and decimal text far beyond the interpreter's default
# 4300 digit cap (Python >= 3.11, and 3.10.7+); the Limits below bound the sizes instead
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)


class Operator(Enum):
    """Stack entries: (symbol, precedence, right associative, arity)."""
    LPAREN = ("(", 0, False, "marker")
    ABS_OPEN = ("|", 0, False, "marker")
    ADD = ("+", 1, False, "binary")
    SUBTRACT = ("-", 1, False, "binary")
    MULTIPLY = ("*", 2, False, "binary")
    DIVIDE = ("/", 2, False, "binary")
    UNARY_PLUS = ("u+", 4, True, "prefix")
    UNARY_MINUS = ("u-", 4, True, "prefix")
    POWER = ("^", 6, True, "binary")
    IMPLICIT_MULTIPLY = ("implicit *", 8, False, "binary")
    ABS = ("abs", 9, True, "prefix")
    FACTORIAL = ("!", 10, False, "postfix")

    def __init__(self, symbol, precedence, right_associative, arity):
        self.symbol = symbol
        self.precedence = precedence
        self.right_associative = right_associative
        self.arity = arity


TOKEN_OPERATORS = {
    TokenType.PLUS: Operator.ADD,
    TokenType.MINUS: Operator.SUBTRACT,
    TokenType.MUL: Operator.MULTIPLY,
    TokenType.DIV: Operator.DIVIDE,
    TokenType.POW: Operator.POWER,
    TokenType.IMPLICIT_MUL: Operator.IMPLICIT_MULTIPLY,
    TokenType.FACTORIAL: Operator.FACTORIAL,
    TokenType.UNARY_PLUS: Operator.UNARY_PLUS,
    TokenType.UNARY_MINUS: Operator.UNARY_MINUS,
    TokenType.FUNC: Operator.ABS,
}

MARKERS = (Operator.LPAREN, Operator.ABS_OPEN)


@dataclass(frozen=True)
class Limits:
    max_precision: int = 50_000
    simplify_threshold: int = R.SIMPLIFY_THRESHOLD
    max_factorial: int = 100_000
    max_result_bits: int = 2 ** 25


DEFAULT_LIMITS = Limits()


def number_value(token, limits):
    """Exact value of a NUMBER token."""
    fraction = token.fraction or ""
    if len(fraction) > limits.max_precision:
        raise E.MaximumPrecisionError(len(fraction), limits.max_precision, token.pos)

    numerator = int((token.whole or "0") + fraction)
    denominator = 10 ** len(fraction)

    if token.exponent is not None:
        # Leading zeros ("1e0005") do not change the magnitude
        digits = token.exponent.lstrip("-").lstrip("0")
        # Compare the digit count first so absurd exponents are never converted
        if len(digits) > len(str(limits.max_precision)):
            raise E.MaximumPrecisionError(len(digits), limits.max_precision, token.pos)
        exponent = int(token.exponent)
        if abs(exponent) > limits.max_precision:
            raise E.MaximumPrecisionError(abs(exponent), limits.max_precision, token.pos)
        if exponent >= 0:
            numerator *= 10 ** exponent
        else:
            denominator *= 10 ** -exponent

    if denominator == 1:
        return R.Rational(numerator, 1)
    # Reducing literals right away keeps the starting denominators small
    return R.simplify(R.Rational(numerator, denominator))


class Evaluation:
    """State of one evaluate() call."""

    def __init__(self, limits):
        self.limits = limits
        self.values = []
        self.operators = []

    def apply(self, operator, pos):
        """Pop the operands of operator from the value stack and push its result."""
        values = self.values

        if not values:
            raise E.UnexpectedEndOfExpressionError(pos)
        right = values.pop()

        if operator.arity == "prefix":
            if operator is Operator.UNARY_MINUS:
                values.append(R.negate(right))
            elif operator is Operator.ABS:
                values.append(R.absolute(right))
            else:
                values.append(right)
            return

        if operator.arity == "postfix":
            values.append(self.factorial(right, pos))
            return

        if not values:
            raise E.InsufficientOperandsError(pos)
        left = values.pop()

        try:
            if operator is Operator.ADD:
                result = R.add(left, right, self.limits.simplify_threshold)
            elif operator is Operator.SUBTRACT:
                result = R.subtract(left, right, self.limits.simplify_threshold)
            elif operator is Operator.MULTIPLY or operator is Operator.IMPLICIT_MULTIPLY:
                result = R.multiply(left, right)
            elif operator is Operator.DIVIDE:
                result = R.divide(left, right)
            elif operator is Operator.POWER:
                result = R.power(left, right, self.limits.max_result_bits)
            else:
                raise E.SemanticError(f"Unknown operator: {operator.name}", offset=pos)
        except E.SemanticError as e:
            # Arithmetic helpers do not know where the operator was
            if e.offset is None:
                e.offset = pos
            raise

        values.append(result)

    def factorial(self, value, pos):
        if value.denominator != 1:
            value = R.simplify(value)
        if value.denominator != 1 or value.numerator < 0:
            raise E.FactorialDomainError(pos)
        if value.numerator > self.limits.max_factorial:
            raise E.MaximumPrecisionError(value.numerator, self.limits.max_factorial, pos)
        return R.Rational(ScientificEngine.factorial(value.numerator), 1)

    def push_operator(self, operator, pos):
        """Apply stacked operators that bind at least as tight, then push."""
        operators = self.operators
        # Prefix operators stand where an operand belongs; nothing on the
        # stack can be complete yet, so they never pop
        if operator.arity != "prefix":
            precedence = operator.precedence
            while operators:
                top, top_pos = operators[-1]
                if top in MARKERS:
                    break
                if top.precedence > precedence or \
                        (top.precedence == precedence and not operator.right_associative):
                    operators.pop()
                    self.apply(top, top_pos)
                else:
                    break
        operators.append((operator, pos))

    def close(self, marker, pos):
        """Apply everything down to the matching marker and drop the marker."""
        operators = self.operators
        while operators:
            top, top_pos = operators[-1]
            if top is marker:
                operators.pop()
                return
            if top in MARKERS:
                # '(' closed by '|' or the other way round
                raise E.MismatchedDelimiterError(pos)
            operators.pop()
            self.apply(top, top_pos)
        raise E.MismatchedDelimiterError(pos)

    def finish(self, pos, auto_close):
        operators = self.operators
        while operators:
            top, top_pos = operators.pop()
            if top is Operator.LPAREN:
                if auto_close:
                    continue
                raise E.MismatchedDelimiterError(pos, "Missing closing ')'")
            if top is Operator.ABS_OPEN:
                raise E.MismatchedDelimiterError(pos, "Missing closing '|'")
            self.apply(top, top_pos)

        if not self.values:
            raise E.UnexpectedEndOfExpressionError(pos)
        if len(self.values) > 1:
            raise E.InsufficientOperandsError(pos)
        return R.simplify(self.values[0])


def evaluate(tokens, limits=DEFAULT_LIMITS, auto_close=False):
    """Evaluate annotated tokens to a canonical Rational.

    Args:
        tokens: output of Normalizer.normalize()
        limits: precision / size limits
        auto_close: close brackets left open at the end instead of failing
    """
    if not tokens:
        raise E.EmptyExpressionError()

    state = Evaluation(limits)

    for token in tokens:
        kind = token.type

        if kind is TokenType.NUMBER:
            state.values.append(number_value(token, limits))

        elif kind is TokenType.CONST:
            state.values.append(ScientificEngine.constant(token.name))

        elif kind is TokenType.LPAREN:
            state.operators.append((Operator.LPAREN, token.pos))

        elif kind is TokenType.ABS_OPEN:
            state.operators.append((Operator.ABS_OPEN, token.pos))

        elif kind is TokenType.RPAREN:
            state.close(Operator.LPAREN, token.pos)

        elif kind is TokenType.ABS_CLOSE:
            state.close(Operator.ABS_OPEN, token.pos)
            if not state.values:
                raise E.UnexpectedEndOfExpressionError(token.pos)
            state.values.append(R.absolute(state.values.pop()))

        elif kind in TOKEN_OPERATORS:
            state.push_operator(TOKEN_OPERATORS[kind], token.pos)

        else:
            raise E.SyntaxError(f"Unexpected token {kind.name}", token.pos)

    return state.finish(tokens[-1].pos, auto_close)
