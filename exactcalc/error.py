

class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, offset=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.offset = offset

    @property
    def kind(self):
        return type(self).__name__

    def __str__(self):
        if self.offset is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.message} at position {self.offset}"


# --- Scanner ---

class LexicalError(MathError):
    def __init__(self, message, offset, code="3101"):
        super().__init__(message, code=code, offset=offset)


# --- Normalizer / bracket matching ---

class SyntaxError(MathError):
    def __init__(self, message, offset, code="3200"):
        super().__init__(message, code=code, offset=offset)

class UnexpectedOperatorError(SyntaxError):
    def __init__(self, operator, offset):
        super().__init__(f"Unexpected operator '{operator}'", offset, code="3201")

class EmptyParensError(SyntaxError):
    def __init__(self, offset):
        super().__init__("Unexpected ')' after '('", offset, code="3202")

class MissingOperatorError(SyntaxError):
    def __init__(self, offset):
        super().__init__("Missing operator between operands", offset, code="3203")

class MismatchedDelimiterError(SyntaxError):
    def __init__(self, offset, message="Mismatched parenthesis"):
        super().__init__(message, offset, code="3204")

class IncompleteExpressionError(SyntaxError):
    def __init__(self, message, offset):
        super().__init__(f"Incomplete expression: {message}", offset, code="3205")


# --- Evaluator ---

class SemanticError(MathError):
    def __init__(self, message, code="3300", offset=None):
        super().__init__(message, code=code, offset=offset)

class EmptyExpressionError(SemanticError):
    def __init__(self):
        super().__init__("Empty expression", code="3301")

class UnexpectedEndOfExpressionError(SemanticError):
    def __init__(self, offset=None):
        super().__init__("Unexpected end of expression", code="3302", offset=offset)

class InsufficientOperandsError(SemanticError):
    def __init__(self, offset=None):
        super().__init__("Insufficient operands for operation", code="3303", offset=offset)

class DivisionByZeroError(SemanticError):
    def __init__(self, offset=None):
        super().__init__("Division by zero", code="3304", offset=offset)

class FactorialDomainError(SemanticError):
    def __init__(self, offset=None):
        super().__init__("Factorial is only defined for non-negative integers", code="3305", offset=offset)

class FractionalExponentError(SemanticError):
    def __init__(self, offset=None):
        super().__init__("Fractional exponents are not supported", code="3306", offset=offset)

class MaximumPrecisionError(SemanticError):
    def __init__(self, precision, max_precision, offset=None):
        super().__init__(f"Exceeded maximum precision of {max_precision} digits ({precision}).",
                         code="3307", offset=offset)
        self.precision = precision
        self.max_precision = max_precision


class ConfigurationError(MathError):
    def __init__(self, message, code="5001"):
        super().__init__(message, code=code)


def format_diagnostic(equation, offset):
    """Return the equation with a caret line under the character at offset.

    Returns just the equation when there is no offset to point at.
    """
    if equation is None:
        return ""
    if offset is None:
        return equation
    offset = max(0, min(offset, len(equation)))
    return f"{equation}\n{' ' * offset}^"







Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Stage (1 = Scanner, 2 = Syntax, 3 = Evaluation)
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3101" : "Unexpected character.",
    "3102" : "More than one decimal separator in one number.",
    "3103" : "Malformed number.",
    "3104" : "Unknown identifier: ", # + identifier

    "3200" : "Invalid syntax.",
    "3201" : "Unexpected operator.",
    "3202" : "Empty parentheses.",
    "3203" : "Missing operator between numbers.",
    "3204" : "Mismatched parenthesis or '|'.",
    "3205" : "Incomplete expression.",

    "3300" : "Invalid calculation.",
    "3301" : "Empty expression.",
    "3302" : "Unexpected end of expression.",
    "3303" : "Missing operand.",
    "3304" : "Division by Zero",
    "3305" : "Factorial of a negative or fractional number.",
    "3306" : "Fractional exponents are not supported.",
    "3307" : "Number too big.",

    "4002" : "Calculation already Running!",
    "4003" : "No Value in ANS",

    "5001" : "Invalid setting: ", # + setting
    "5002" : "Not all Settings could be saved: ", # + Error raising setting

    "9999" : "Unexpected Error: " #+error
}


def error_area(code):
    """Headline for the first digit of an error code, e.g. '3304' -> 'Calculator Error'."""
    return Error_Dictionary.get(str(code)[:1], Error_Dictionary["9"])
