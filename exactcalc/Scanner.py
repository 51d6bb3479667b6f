# Scanner.py
"""""
Lexical scanner: turns the raw input string into a flat list of positioned tokens.

Every token remembers the character offset it started at, so later stages can
point at the offending character when something goes wrong.
"""""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

from . import error as E


class TokenType(Enum):
    # --- produced by the scanner ---
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    FACTORIAL = "!"
    PIPE = "|"
    LPAREN = "("
    RPAREN = ")"
    CONST = "const"
    FUNC = "func"

    # --- synthesized by the normalizer ---
    UNARY_PLUS = "unary +"
    UNARY_MINUS = "unary -"
    IMPLICIT_MUL = "implicit *"
    ABS_OPEN = "abs ("
    ABS_CLOSE = "abs )"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical unit. Only NUMBER uses the digit fields, only CONST/FUNC use name."""
    type: TokenType
    pos: int
    whole: str = ""
    fraction: Optional[str] = None
    exponent: Optional[str] = None
    name: Optional[str] = None

    def __repr__(self):
        if self.type is TokenType.NUMBER:
            return f"Token(NUMBER, {self.whole!r}, {self.fraction!r}, {self.exponent!r}, pos={self.pos})"
        if self.name is not None:
            return f"Token({self.type.name}, {self.name!r}, pos={self.pos})"
        return f"Token({self.type.name}, pos={self.pos})"


SINGLE_CHARACTERS = MappingProxyType({
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "^": TokenType.POW,
    "!": TokenType.FACTORIAL,
    "|": TokenType.PIPE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
})

IDENTIFIERS = MappingProxyType({
    "pi": TokenType.CONST,
    "e": TokenType.CONST,
    "abs": TokenType.FUNC,
})

DECIMAL_SEPARATORS = (".", ",")


def isDigit(char):
    """ASCII digits only; str.isdigit() would also accept superscripts."""
    return "0" <= char <= "9"


def isLetter(char):
    return "a" <= char <= "z"


def read_digits(text, b):
    """Return the index of the first non-digit at or after b."""
    while b < len(text) and isDigit(text[b]):
        b += 1
    return b


def read_number(text, start, separator):
    """Read a numeric literal beginning at start.

    Returns:
        (Token, position_after_literal)
    """
    b = read_digits(text, start)
    whole = text[start:b]
    fraction = None
    exponent = None

    if b < len(text) and text[b] == separator:
        b += 1
        fraction_end = read_digits(text, b)
        # "1." has no fraction at all, "1.0" has the fraction "0"
        if fraction_end > b:
            fraction = text[b:fraction_end]
        b = fraction_end

    if whole == "" and fraction is None:
        raise E.LexicalError(f"Malformed number: '{separator}' without digits", start, code="3103")

    # Exponent only when 'e' is followed by an optional sign and at least one digit,
    # otherwise the 'e' is left for the identifier scanner (2e -> 2 * e)
    if b < len(text) and text[b] in "eE":
        sign_end = b + 1
        if sign_end < len(text) and text[sign_end] in "+-":
            sign_end += 1
        digits_end = read_digits(text, sign_end)
        if digits_end > sign_end:
            exponent = text[b + 1:digits_end]
            if exponent[0] == "+":
                exponent = exponent[1:]
            b = digits_end

    if b < len(text) and text[b] == separator:
        raise E.LexicalError(f"More than one '{separator}' in one number", b, code="3102")

    return Token(TokenType.NUMBER, start, whole=whole, fraction=fraction, exponent=exponent), b


def scan(text, decimal_separator="."):
    """Convert the input string into a list of tokens.

    Raises:
        LexicalError: unexpected character, malformed literal or unknown identifier.
    """
    if decimal_separator not in DECIMAL_SEPARATORS:
        raise E.ConfigurationError(f"Unsupported decimal separator: {decimal_separator!r}")

    tokens = []
    b = 0
    length = len(text)

    while b < length:
        current_char = text[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1

        # --- Numbers: digits and decimal separator ---
        elif isDigit(current_char) or current_char == decimal_separator:
            token, b = read_number(text, b, decimal_separator)
            tokens.append(token)

        # --- Operators and brackets ---
        elif current_char in SINGLE_CHARACTERS:
            tokens.append(Token(SINGLE_CHARACTERS[current_char], b))
            b += 1

        # --- Constants and functions: the whole letter run must be known ---
        elif isLetter(current_char):
            end = b
            while end < length and isLetter(text[end]):
                end += 1
            word = text[b:end]
            if word not in IDENTIFIERS:
                raise E.LexicalError(f"Unknown identifier '{word}'", b, code="3104")
            tokens.append(Token(IDENTIFIERS[word], b, name=word))
            b = end

        else:
            raise E.LexicalError(f"Unexpected character '{current_char}'", b)

    return tokens
