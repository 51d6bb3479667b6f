# test_Scanner.py

import pytest

from exactcalc.Scanner import scan, Token, TokenType
from exactcalc import error as E


def kinds(tokens):
    return [token.type for token in tokens]


def test_scan_simple_expression():
    tokens = scan("1 + 2")
    assert kinds(tokens) == [TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER]
    assert [token.pos for token in tokens] == [0, 2, 4]


def test_scan_all_single_characters():
    tokens = scan("()+-*/^!|")
    assert kinds(tokens) == [
        TokenType.LPAREN, TokenType.RPAREN, TokenType.PLUS, TokenType.MINUS, TokenType.MUL,
        TokenType.DIV, TokenType.POW, TokenType.FACTORIAL, TokenType.PIPE
    ]


def test_scan_skips_whitespace():
    tokens = scan("  1\t+\n2  ")
    assert kinds(tokens) == [TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER]
    assert tokens[2].pos == 7


@pytest.mark.parametrize("text, whole, fraction", [
    ("12", "12", None),
    ("1.5", "1", "5"),
    (".1", "", "1"),
    ("1.", "1", None),
    ("1.0", "1", "0"),
])
def test_scan_number_parts(text, whole, fraction):
    (token,) = scan(text)
    assert token.type is TokenType.NUMBER
    assert token.whole == whole
    assert token.fraction == fraction
    assert token.exponent is None


@pytest.mark.parametrize("text, exponent", [
    ("1e5", "5"),
    ("1E5", "5"),
    ("1e+5", "5"),
    ("2.5e-3", "-3"),
])
def test_scan_exponent(text, exponent):
    (token,) = scan(text)
    assert token.exponent == exponent


def test_scan_e_without_digits_is_constant():
    tokens = scan("2e")
    assert kinds(tokens) == [TokenType.NUMBER, TokenType.CONST]
    assert tokens[1].name == "e"
    assert tokens[1].pos == 1


def test_scan_e_sign_without_digits_leaves_sign():
    assert kinds(scan("2e+1")) == [TokenType.NUMBER]
    tokens = scan("2e+")
    assert kinds(tokens) == [TokenType.NUMBER, TokenType.CONST, TokenType.PLUS]


def test_scan_identifiers():
    tokens = scan("pi e abs")
    assert kinds(tokens) == [TokenType.CONST, TokenType.CONST, TokenType.FUNC]
    assert [token.name for token in tokens] == ["pi", "e", "abs"]


def test_scan_comma_separator():
    (token,) = scan("1,5", decimal_separator=",")
    assert token.whole == "1"
    assert token.fraction == "5"


def test_scan_dot_is_unexpected_with_comma_separator():
    with pytest.raises(E.LexicalError) as e:
        scan("1.5", decimal_separator=",")
    assert e.value.offset == 1


def test_scan_second_separator():
    with pytest.raises(E.LexicalError) as e:
        scan("1.2.3")
    assert e.value.code == "3102"
    assert e.value.offset == 3


def test_scan_separator_after_exponent():
    with pytest.raises(E.LexicalError) as e:
        scan("1e5.2")
    assert e.value.offset == 3


def test_scan_lone_separator():
    with pytest.raises(E.LexicalError) as e:
        scan("1 + .")
    assert e.value.code == "3103"
    assert e.value.offset == 4


def test_scan_unknown_identifier():
    with pytest.raises(E.LexicalError) as e:
        scan("2 * sin(1)")
    assert e.value.code == "3104"
    assert e.value.offset == 4
    assert "sin" in str(e.value)


def test_scan_unexpected_character():
    with pytest.raises(E.LexicalError) as e:
        scan("1 + $")
    assert "Unexpected character '$'" in str(e.value)
    assert e.value.offset == 4


def test_scan_rejects_non_ascii_digits():
    with pytest.raises(E.LexicalError):
        scan("2²")


def test_scan_unsupported_separator():
    with pytest.raises(E.ConfigurationError):
        scan("1", decimal_separator=";")


def test_token_repr():
    assert repr(Token(TokenType.PLUS, 3)) == "Token(PLUS, pos=3)"
    assert repr(Token(TokenType.CONST, 0, name="pi")) == "Token(CONST, 'pi', pos=0)"
