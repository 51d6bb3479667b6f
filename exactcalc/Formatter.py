# Formatter.py
"""""
Renders a Rational for display.

- decimal: exact long division, cut off after max_decimals digits
- fraction: 'numerator/denominator'
- mixed: '1 1/2' for improper fractions
"""""

from . import error as E


OUTPUT_FORMATS = ("decimal", "fraction", "mixed")


def to_fraction(value):
    if value.denominator == 0:
        return "NaN"
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


def to_mixed(value):
    """Improper fractions as whole part plus proper fraction, e.g. -3/2 -> '-1 1/2'."""
    if value.denominator == 0:
        return "NaN"
    zaehler, nenner = value.numerator, value.denominator
    if nenner == 1 or abs(zaehler) < nenner:
        return to_fraction(value)

    ganzzahl, rest_zaehler = divmod(abs(zaehler), nenner)
    sign = "-" if zaehler < 0 else ""
    if rest_zaehler == 0:
        return f"{sign}{ganzzahl}"
    return f"{sign}{ganzzahl} {rest_zaehler}/{nenner}"


def decimal_parts(value, max_decimals):
    """Decimal rendering plus a flag telling whether digits were cut off.

    Returns:
        (text, rounded)
    """
    if value.denominator == 0:
        return "NaN", False

    numerator, denominator = value.numerator, value.denominator
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    negative = numerator < 0
    integer_part, remainder = divmod(abs(numerator), denominator)

    if remainder == 0:
        if integer_part == 0:
            return "0", False
        return ("-" if negative else "") + str(integer_part), False

    # --- Long division, one digit at a time ---
    digits = []
    while remainder != 0 and len(digits) < max_decimals:
        remainder *= 10
        digit, remainder = divmod(remainder, denominator)
        digits.append(str(digit))
    rounded = remainder != 0

    fractional = "".join(digits).rstrip("0")
    if fractional:
        text = f"{integer_part}.{fractional}"
    else:
        text = str(integer_part)

    # Cut-off results like -0.0000001 at 3 places show as plain 0
    if text == "0":
        return text, rounded
    return ("-" + text if negative else text), rounded


def to_decimal(value, max_decimals=20):
    return decimal_parts(value, max_decimals)[0]


def format_result(value, output_format="decimal", max_decimals=20):
    """Render value in the requested output format.

    Returns:
        (text, rounded) where rounded is only ever True for decimal output.
    """
    if output_format == "decimal":
        return decimal_parts(value, max_decimals)
    elif output_format == "fraction":
        return to_fraction(value), False
    elif output_format == "mixed":
        return to_mixed(value), False
    raise E.ConfigurationError(f"Unknown output format: {output_format!r}")
