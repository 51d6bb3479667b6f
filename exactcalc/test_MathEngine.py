# test_MathEngine.py

import math

import pytest

from exactcalc import MathEngine
from exactcalc.MathEngine import evaluate, calculate, calculate_exact, exact_value, Options
from exactcalc.Rational import Rational
from exactcalc import error as E


# ---------------------------
# evaluate()
# ---------------------------

@pytest.mark.parametrize("problem, expected", [
    (".1", "0.1"),
    ("1.", "1"),
    ("1.0", "1"),
    ("0.1 + 0.2", "0.3"),
    ("1 + 2 * 3", "7"),
    ("2 * 3 + 1", "7"),
    ("2^3^2", "512"),
    ("-2^2", "-4"),
    ("2(1+2)^3", "216"),
    ("2^3(1+2)", "512"),
    ("1/3", "0.33333333333333333333"),
    ("2^-3", "0.125"),
    ("|3 - 5| + abs(-1)", "3"),
    ("5!", "120"),
    ("1e-2", "0.01"),
])
def test_evaluate_default_options(problem, expected):
    assert evaluate(problem) == expected


def test_evaluate_fraction_output():
    assert evaluate("1/3 + 1/6", {"output_format": "fraction"}) == "1/2"
    assert evaluate("6/3", {"output_format": "fraction"}) == "2"


def test_evaluate_mixed_output():
    assert evaluate("-7/2", {"output_format": "mixed"}) == "-3 1/2"


def test_evaluate_max_decimals():
    assert evaluate("2/3", Options(max_decimals=3)) == "0.666"


def test_evaluate_comma_separator():
    options = {"decimal_separator": ","}
    assert evaluate("1,5 + 1", options) == "2,5"
    assert evaluate("0,1 + 0,2", options) == "0,3"


def test_evaluate_auto_close_brackets():
    with pytest.raises(E.MismatchedDelimiterError):
        evaluate("2 * (1 + 2")
    assert evaluate("2 * (1 + 2", {"auto_close_brackets": True}) == "6"


def test_evaluate_deep_nesting():
    depth = 10 ** 6
    assert evaluate("(" * depth + "0" + ")" * depth) == "0"


# ---------------------------
# Numbers beyond 4300 digits
# ---------------------------

def test_evaluate_large_factorial():
    assert evaluate("2000!") == str(math.factorial(2000))


def test_evaluate_large_power_as_fraction():
    assert evaluate("2^20000", {"output_format": "fraction"}) == str(2 ** 20000)
    assert evaluate("2^-20000", {"output_format": "fraction"}) == "1/" + str(2 ** 20000)


def test_evaluate_long_literal():
    assert evaluate("0." + "1" * 5000, {"max_decimals": 3}) == "0.111"
    assert evaluate("1" * 5000 + " - " + "1" * 4999 + "0") == "1"


def test_exact_value():
    value = exact_value("0.1 + 0.2")
    assert (value.numerator, value.denominator) == (3, 10)
    assert exact_value("4/8") == Rational(1, 2)


def test_debug_prints(monkeypatch, capsys):
    monkeypatch.setattr(MathEngine, "debug", True)
    exact_value("2(3)")
    output = capsys.readouterr().out
    assert "Normalized: 2(3)" in output
    assert "Result: Rational(6, 1)" in output


# ---------------------------
# Errors
# ---------------------------

@pytest.mark.parametrize("problem, error, offset", [
    ("", E.EmptyExpressionError, None),
    ("5 +", E.IncompleteExpressionError, 2),
    ("1 + 2)", E.MismatchedDelimiterError, 5),
    ("5 * * 3", E.UnexpectedOperatorError, 4),
    ("()", E.EmptyParensError, 1),
    ("1 # 2", E.LexicalError, 2),
    ("1 / 0", E.DivisionByZeroError, 2),
])
def test_evaluate_errors(problem, error, offset):
    with pytest.raises(error) as e:
        evaluate(problem)
    assert e.value.offset == offset


def test_evaluate_precision_error():
    with pytest.raises(E.MaximumPrecisionError) as e:
        evaluate("0." + "1" * 50_001)
    assert e.value.kind == "MaximumPrecisionError"


def test_error_string_has_position():
    with pytest.raises(E.MathError) as e:
        evaluate("5 * * 3")
    assert str(e.value) == "UnexpectedOperatorError: Unexpected operator '*' at position 4"


# ---------------------------
# Options
# ---------------------------

@pytest.mark.parametrize("kwargs", [
    {"decimal_separator": ";"},
    {"output_format": "hex"},
    {"max_decimals": -1},
    {"max_decimals": "20"},
    {"max_decimals": True},
])
def test_invalid_options(kwargs):
    with pytest.raises(E.ConfigurationError):
        Options(**kwargs)


def test_options_from_settings(default_settings):
    default_settings["decimal_places"] = 4
    default_settings["output_format"] = "fraction"
    options = Options.from_settings(default_settings)
    assert options.max_decimals == 4
    assert options.output_format == "fraction"
    assert options.auto_close_brackets is False


# ---------------------------
# calculate() (UI entry point)
# ---------------------------

def test_calculate_modes(default_settings):
    assert calculate("1/4", default_settings) == ("0.25", MathEngine.MODE_EXACT)
    assert calculate("1/3", default_settings) == ("0.33333333333333333333", MathEngine.MODE_ROUNDED)


def test_calculate_attaches_equation(default_settings):
    with pytest.raises(E.MathError) as e:
        calculate("5 +", default_settings)
    assert e.value.equation == "5 +"
    assert E.format_diagnostic(e.value.equation, e.value.offset) == "5 +\n  ^"


def test_calculate_invalid_settings(default_settings):
    default_settings["output_format"] = "roman"
    with pytest.raises(E.ConfigurationError) as e:
        calculate("1", default_settings)
    assert e.value.equation == "1"


def test_calculate_wraps_unexpected_errors(default_settings, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(MathEngine.Formatter, "format_result", broken)
    with pytest.raises(E.MathError) as e:
        calculate("1", default_settings)
    assert e.value.code == "9999"
    assert isinstance(e.value.__cause__, RuntimeError)


def test_calculate_reads_config(config_files):
    config_json, _ = config_files
    config_json.write_text('{"output_format": "fraction"}', encoding="utf-8")
    assert calculate("0.5") == ("1/2", MathEngine.MODE_EXACT)


# ---------------------------
# Ans
# ---------------------------

def test_calculate_exact_returns_value(default_settings):
    ausgabe, mode, ergebnis = calculate_exact("1/3", default_settings)
    assert mode == MathEngine.MODE_ROUNDED
    assert (ergebnis.numerator, ergebnis.denominator) == (1, 3)


@pytest.mark.parametrize("value, expected", [
    (Rational(3, 2), "3/2"),
    (Rational(-6, 4), "-3/2"),
    (Rational(8, 2), "4"),
])
def test_answer_text(value, expected):
    assert MathEngine.answer_text(value) == expected


def test_ans_reuses_mixed_result(default_settings):
    default_settings["output_format"] = "mixed"
    ausgabe, _, ergebnis = calculate_exact("3/2", default_settings)
    assert ausgabe == "1 1/2"
    problem = MathEngine.substitute_ans("Ans * 2", ergebnis)
    assert problem == "(3/2) * 2"
    assert calculate(problem, default_settings) == ("3", MathEngine.MODE_EXACT)


def test_ans_keeps_cut_off_digits(default_settings):
    ausgabe, mode, ergebnis = calculate_exact("1/3", default_settings)
    assert mode == MathEngine.MODE_ROUNDED
    problem = MathEngine.substitute_ans("Ans * 3", ergebnis)
    assert calculate(problem, default_settings) == ("1", MathEngine.MODE_EXACT)


def test_ans_with_comma_separator(default_settings):
    default_settings["decimal_separator"] = ","
    _, _, ergebnis = calculate_exact("1,5", default_settings)
    assert calculate(MathEngine.substitute_ans("Ans + Ans", ergebnis), default_settings)[0] == "3"


# ---------------------------
# Error areas
# ---------------------------

@pytest.mark.parametrize("code, area", [
    ("3304", "Calculator Error"),
    ("4002", "UI Error"),
    ("5001", "Configuration Error"),
    ("9999", "Runtime Error"),
    ("7000", "Runtime Error"),
])
def test_error_area(code, area):
    assert E.error_area(code) == area


def test_error_area_of_raised_error():
    with pytest.raises(E.MathError) as e:
        evaluate("1 / 0")
    assert E.error_area(e.value.code) == "Calculator Error"
