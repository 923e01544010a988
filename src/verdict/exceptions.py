"""Exception types raised at the caller-facing boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verdict.outcome import Fail


class AssertionFailure(AssertionError):
    """An expectation was not met.

    Attributes:
        message: Fully rendered report. For an aggregated scope failure this
            holds one line per collected failure, in evaluation order.
        outcomes: The failed outcomes the report was rendered from.
    """

    def __init__(self, message: str, outcomes: tuple[Fail, ...] = ()):
        super().__init__(message)
        self.message = message
        self.outcomes = outcomes


class UsageError(Exception):
    """The library was used incorrectly (a programming error, not a failed expectation)."""


class InvalidArgumentError(UsageError, ValueError):
    """A constraint was built with an argument it cannot work with."""


class ReentrancyError(UsageError):
    """The synchronous bridge was entered while already blocking on this thread."""
