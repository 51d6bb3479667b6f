# Serializer.py
"""""
Turns tokens back into source text. Only used for debug output and messages.

Works on scanner output as well as on annotated tokens; implicit
multiplication is rendered as juxtaposition ('2(3)').
"""""

from .Scanner import TokenType


SYMBOLS = {
    TokenType.PLUS: "+",
    TokenType.UNARY_PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.UNARY_MINUS: "-",
    TokenType.MUL: "*",
    TokenType.DIV: "/",
    TokenType.POW: "^",
    TokenType.FACTORIAL: "!",
    TokenType.PIPE: "|",
    TokenType.ABS_OPEN: "|",
    TokenType.ABS_CLOSE: "|",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.IMPLICIT_MUL: "",
}

SIGN_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
UNARY_OPERATORS = (TokenType.UNARY_PLUS, TokenType.UNARY_MINUS)
INFIX_OPERATORS = (TokenType.PLUS, TokenType.MINUS, TokenType.MUL, TokenType.DIV, TokenType.POW)

# No space after these ...
OPENERS = (TokenType.LPAREN, TokenType.ABS_OPEN, TokenType.FUNC, TokenType.IMPLICIT_MUL)
# ... and none before these
CLOSERS = (TokenType.RPAREN, TokenType.ABS_CLOSE, TokenType.FACTORIAL, TokenType.IMPLICIT_MUL)


def symbol(token, decimal_separator="."):
    """Source spelling of a single token."""
    if token.type is TokenType.NUMBER:
        text = token.whole
        if token.fraction is not None:
            text += decimal_separator + token.fraction
        if token.exponent is not None:
            text += "e" + token.exponent
        return text
    if token.name is not None:
        return token.name
    return SYMBOLS[token.type]


def isUnary(token, previous, previous_unary):
    if token.type in UNARY_OPERATORS:
        return True
    if token.type not in SIGN_OPERATORS:
        return False
    # Scanner output: a sign is unary at the start, after an opener or after another operator
    return (previous is None
            or previous.type in OPENERS
            or previous.type in INFIX_OPERATORS
            or previous_unary)


def serialize(tokens, decimal_separator="."):
    """Render tokens as text: '5 + -1', '-(1 + 1)', '2(3)'."""
    parts = []
    previous = None
    previous_unary = False

    for token in tokens:
        segment = symbol(token, decimal_separator)
        unary = isUnary(token, previous, previous_unary)

        if previous is None:
            parts.append(segment)
        elif previous.type in OPENERS or token.type in CLOSERS or previous_unary:
            parts.append(segment)
        # Implicit multiplication in scanner output: 2(3), (2)(3), (2)3
        elif (token.type is TokenType.LPAREN and previous.type in (TokenType.NUMBER, TokenType.RPAREN)) or \
                (token.type is TokenType.NUMBER and previous.type is TokenType.RPAREN):
            parts.append(segment)
        else:
            parts.append(" " + segment)

        previous, previous_unary = token, unary

    return "".join(parts)
