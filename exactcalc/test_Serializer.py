# test_Serializer.py

import pytest

from exactcalc.Scanner import scan, Token, TokenType
from exactcalc.Normalizer import normalize
from exactcalc.Serializer import serialize, symbol


@pytest.mark.parametrize("text, expected", [
    ("1+1", "1 + 1"),
    ("-(1+1)", "-(1 + 1)"),
    ("--1", "--1"),
    ("+-1", "+-1"),
    ("5+-1", "5 + -1"),
    ("2*-3", "2 * -3"),
    ("2(3)", "2(3)"),
    ("(2)(3)", "(2)(3)"),
    ("(1+1)*2", "(1 + 1) * 2"),
])
def test_serialize_scanner_output(text, expected):
    assert serialize(scan(text)) == expected


@pytest.mark.parametrize("text, expected", [
    ("5+-1", "5 + -1"),
    ("2(3)", "2(3)"),
    ("2 pi", "2pi"),
    ("|-3|!", "|-3|!"),
    ("abs(2) ^ 2", "abs(2) ^ 2"),
])
def test_serialize_annotated(text, expected):
    assert serialize(normalize(scan(text))) == expected


def test_symbol_of_number():
    token = Token(TokenType.NUMBER, 0, whole="1", fraction="5", exponent="-3")
    assert symbol(token) == "1.5e-3"
    assert symbol(token, ",") == "1,5e-3"
    assert symbol(Token(TokenType.NUMBER, 0, whole="", fraction="1")) == ".1"
