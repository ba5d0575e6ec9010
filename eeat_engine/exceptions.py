"""
Engine Exceptions

Scoring is pure and never fails on empty or unusual text; these errors
are only raised for inputs of the wrong type or invalid configuration.
"""

from typing import Any


class EngineError(Exception):
    """Base class for all engine errors."""
    pass


class InvalidInputError(EngineError, TypeError):
    """Raised when an argument has the wrong type (text must be a str)."""

    def __init__(self, name: str, value: Any, expected: str = "a str"):
        self.name = name
        self.value = value
        super().__init__(
            f"'{name}' must be {expected}, got {type(value).__name__}"
        )


class WeightConfigurationError(EngineError, ValueError):
    """Raised for unknown E-E-A-T weight keys or (in strict mode) a bad weight sum."""
    pass
