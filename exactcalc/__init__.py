"""Exact calculator - scanner, normalizer, evaluator and formatter."""
from .MathEngine import evaluate, calculate, exact_value, Options
from .Rational import Rational
from .error import MathError, format_diagnostic

__all__ = [
    'evaluate', 'calculate', 'exact_value', 'Options',
    'Rational', 'MathError', 'format_diagnostic'
]
