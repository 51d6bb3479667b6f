# MathEngine.py
"""""
Core calculation engine for the exact calculator.

Pipeline
--------
1) Scanner: converts a raw input string into a flat list of positioned tokens.
2) Normalizer: marks unary signs, inserts implicit multiplication, matches '|' bars.
3) Evaluator: shunting-yard evaluation to an exact Rational (no floats anywhere).
4) Formatter: renders the Rational as decimal, fraction or mixed fraction.
"""""

from dataclasses import dataclass

from . import config_manager as config_manager
from . import Scanner
from . import Normalizer
from . import Evaluator
from . import Formatter
from . import Rational as R
from . import Serializer
from . import error as E

# Debug toggle for optional prints in this module
debug = False

# Result modes handed to the UI
MODE_ROUNDED = 3
MODE_EXACT = 4


@dataclass(frozen=True)
class Options:
    decimal_separator: str = "."
    output_format: str = "decimal"
    max_decimals: int = 20
    auto_close_brackets: bool = False

    def __post_init__(self):
        if self.decimal_separator not in Scanner.DECIMAL_SEPARATORS:
            raise E.ConfigurationError(f"decimal_separator must be '.' or ',', not {self.decimal_separator!r}")
        if self.output_format not in Formatter.OUTPUT_FORMATS:
            raise E.ConfigurationError(f"output_format must be one of {Formatter.OUTPUT_FORMATS}, "
                                       f"not {self.output_format!r}")
        if isinstance(self.max_decimals, bool) or not isinstance(self.max_decimals, int) or self.max_decimals < 0:
            raise E.ConfigurationError(f"max_decimals must be a non-negative integer, not {self.max_decimals!r}")

    @classmethod
    def from_settings(cls, settings):
        """Build options from a config_manager settings dict."""
        defaults = config_manager.DEFAULT_SETTINGS
        return cls(
            decimal_separator=settings.get("decimal_separator", defaults["decimal_separator"]),
            output_format=settings.get("output_format", defaults["output_format"]),
            max_decimals=settings.get("decimal_places", defaults["decimal_places"]),
            auto_close_brackets=bool(settings.get("auto_close_brackets", defaults["auto_close_brackets"])),
        )


DEFAULT_OPTIONS = Options()


def as_options(options):
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, Options):
        return options
    return Options(**options)


def exact_value(problem, options=None, limits=Evaluator.DEFAULT_LIMITS):
    """Run scanner, normalizer and evaluator; return the canonical Rational."""
    options = as_options(options)

    tokens = Scanner.scan(problem, options.decimal_separator)
    if debug == True:
        print(tokens)

    annotated = Normalizer.normalize(tokens)
    if debug == True:
        print("Normalized: " + Serializer.serialize(annotated, options.decimal_separator))

    ergebnis = Evaluator.evaluate(annotated, limits, options.auto_close_brackets)
    if debug == True:
        print(f"Result: {ergebnis!r}")

    return ergebnis


def render(problem, options=None):
    """Evaluate problem and format it.

    Returns:
        (rendered_value, rounding_flag, exact Rational)
    """
    options = as_options(options)
    ergebnis = exact_value(problem, options)
    ausgabe_string, rounding = Formatter.format_result(ergebnis, options.output_format, options.max_decimals)

    # Answer in the same notation the user types in
    if options.output_format == "decimal" and options.decimal_separator != ".":
        ausgabe_string = ausgabe_string.replace(".", options.decimal_separator)
    return ausgabe_string, rounding, ergebnis


def evaluate(problem, options=None):
    """Evaluate problem and return the display string, e.g. '0.3' or '1/3'.

    Raises:
        MathError: the first error of any pipeline stage, unchanged.
    """
    return render(problem, options)[0]


# -----------------------------
# Public entry point (UI)
# -----------------------------

def answer_text(value):
    """Exact value as input text for 'Ans': 'n/d' or 'n', never cut off or mixed."""
    return Formatter.to_fraction(R.simplify(value))


def substitute_ans(problem, value):
    """Replace every 'Ans' in problem by the bracketed exact value."""
    return problem.replace("Ans", f"({answer_text(value)})")


def calculate_exact(problem, settings=None):
    """Main API for the UI: evaluate → format → (result string, mode, exact Rational).

    Mode 3 means the decimal output was cut off (shown with '≈'), mode 4 means exact.
    The Rational is what 'Ans' stands for in the next calculation.
    """
    if settings is None:
        settings = config_manager.load_setting_value("all")
    try:
        options = Options.from_settings(settings)
        ausgabe_string, rounding, ergebnis = render(problem, options)

        if rounding == True:
            return ausgabe_string, MODE_ROUNDED, ergebnis
        else:
            return ausgabe_string, MODE_EXACT, ergebnis

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    except MemoryError:
        raise E.MathError(message="Number too large (out of memory).", code="3307", equation=problem)
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e


def calculate(problem, settings=None):
    """calculate_exact() without the Rational: (result string, mode)."""
    ausgabe_string, mode, _ = calculate_exact(problem, settings)
    return ausgabe_string, mode


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    try:
        ergebnis, mode = calculate(problem)
        print(("≈ " if mode == MODE_ROUNDED else "= ") + ergebnis)
    except E.MathError as e:
        print(E.format_diagnostic(e.equation, e.offset))
        print(e)


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m exactcalc.MathEngine
    test_main()
