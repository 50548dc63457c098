"""Exceptions raised by the calculation engines."""

from __future__ import annotations

from typing import Iterable, List, Union


class CalculationError(ValueError):
    """Base error for every calculator.

    Carries the full list of messages so the HTTP layer can return all of
    them at once instead of only the first problem found.
    """

    def __init__(self, errors: Union[str, Iterable[str]]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class InputValidationError(CalculationError):
    """Raised when caller-supplied numbers cannot produce a result."""


class UnsupportedOptionError(CalculationError):
    """Raised for an unknown method, frequency or period type."""


class ConvergenceError(CalculationError):
    """Raised by a strict rate solve that did not reach its tolerance."""

    def __init__(self, message: str, rate: float, iterations: int):
        super().__init__(message)
        self.rate = rate
        self.iterations = iterations


def raise_if_errors(errors: List[str]) -> None:
    if errors:
        raise InputValidationError(errors)
