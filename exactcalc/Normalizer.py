# Normalizer.py
"""""
Second pass over the scanner output.

- Decides whether '+' / '-' are unary or binary
- Inserts implicit multiplication ('2(3)', '2 pi', '(1)(2)', '3!2')
- Resolves '|' into opening / closing absolute-value bars
- Rejects token orders that can never form a valid expression
"""""

from .Scanner import Token, TokenType
from .Serializer import symbol
from . import error as E


# Tokens that leave a complete value behind them
OPERAND_TERMINAL = frozenset({
    TokenType.NUMBER,
    TokenType.CONST,
    TokenType.RPAREN,
    TokenType.ABS_CLOSE,
    TokenType.FACTORIAL,
})

# Tokens after which a value has to follow
OPERATORS = frozenset({
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.MUL,
    TokenType.DIV,
    TokenType.POW,
    TokenType.UNARY_PLUS,
    TokenType.UNARY_MINUS,
    TokenType.IMPLICIT_MUL,
})

BINARY_ONLY = frozenset({TokenType.MUL, TokenType.DIV, TokenType.POW})

# Starts of an operand that may directly follow another operand (implicit '*')
IMPLICIT_FOLLOWERS = frozenset({
    TokenType.NUMBER,
    TokenType.CONST,
    TokenType.LPAREN,
    TokenType.FUNC,
})


def isOperandTerminal(token):
    return token is not None and token.type in OPERAND_TERMINAL


def isUnaryContext(previous):
    """True if the next token has to start a new operand."""
    return (previous is None
            or previous.type in OPERATORS
            or previous.type in (TokenType.LPAREN, TokenType.ABS_OPEN, TokenType.FUNC))


def normalize(tokens):
    """Return the annotated token list for the evaluator.

    Raises:
        SyntaxError (or a subclass) at the offset of the offending token.
    """
    annotated = []
    open_abs_scopes = 0

    for token in tokens:
        previous = annotated[-1] if annotated else None
        kind = token.type

        # --- Unary or binary sign ---
        if kind is TokenType.PLUS or kind is TokenType.MINUS:
            if isUnaryContext(previous):
                unary = TokenType.UNARY_PLUS if kind is TokenType.PLUS else TokenType.UNARY_MINUS
                annotated.append(Token(unary, token.pos))
            else:
                annotated.append(token)

        # --- Operators that need a left operand ---
        elif kind in BINARY_ONLY:
            if isUnaryContext(previous):
                raise E.UnexpectedOperatorError(kind.value, token.pos)
            annotated.append(token)

        elif kind is TokenType.FACTORIAL:
            if not isOperandTerminal(previous):
                raise E.UnexpectedOperatorError("!", token.pos)
            annotated.append(token)

        # --- Absolute value bars ---
        elif kind is TokenType.PIPE:
            if isOperandTerminal(previous) and open_abs_scopes > 0:
                open_abs_scopes -= 1
                annotated.append(Token(TokenType.ABS_CLOSE, token.pos))
            else:
                if isOperandTerminal(previous):
                    annotated.append(Token(TokenType.IMPLICIT_MUL, token.pos))
                open_abs_scopes += 1
                annotated.append(Token(TokenType.ABS_OPEN, token.pos))

        elif kind is TokenType.RPAREN:
            if previous is not None:
                if previous.type is TokenType.LPAREN:
                    raise E.EmptyParensError(token.pos)
                if previous.type is TokenType.ABS_OPEN:
                    raise E.MismatchedDelimiterError(token.pos)
                if previous.type in OPERATORS or previous.type is TokenType.FUNC:
                    raise E.IncompleteExpressionError(f"trailing operator '{symbol(previous)}'", previous.pos)
            annotated.append(token)

        # --- Operand starts (numbers, constants, '(' and functions) ---
        elif kind in IMPLICIT_FOLLOWERS:
            if kind is TokenType.NUMBER and previous is not None \
                    and previous.type in (TokenType.NUMBER, TokenType.CONST):
                raise E.MissingOperatorError(token.pos)
            if isOperandTerminal(previous):
                annotated.append(Token(TokenType.IMPLICIT_MUL, token.pos))
            annotated.append(token)

        else:
            raise E.SyntaxError(f"Unexpected token '{symbol(token)}'", token.pos)

    # --- End of stream validation ---
    if annotated:
        last = annotated[-1]
        if last.type in OPERATORS or last.type is TokenType.FUNC:
            raise E.IncompleteExpressionError(f"trailing operator '{symbol(last)}'", last.pos)
        if open_abs_scopes > 0:
            raise E.IncompleteExpressionError("missing closing '|'", last.pos)

    return annotated
