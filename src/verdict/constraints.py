"""Immutable predicate descriptions evaluated against a Subject.

Each constraint answers one question (``matches``) and knows how to describe a
failure for either polarity (``describe``). Negation is a flag: the same
routine serves "is one of" and "is not one of", only the verdict and the
regenerated description change.
"""

from __future__ import annotations

import inspect
import logging
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import time, timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Union

from verdict.exceptions import InvalidArgumentError
from verdict.formatting import format_value
from verdict.outcome import PASS, Description, Fail, Outcome
from verdict.reason import Reason
from verdict.subject import Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Constraint(ABC):
    negated: bool = field(default=False, kw_only=True)
    reason: Reason | None = field(default=None, kw_only=True)

    # When False an absent subject fails under either polarity.
    accepts_absent: ClassVar[bool] = True

    def matches(self, subject: Subject) -> bool:
        raise NotImplementedError(f"{type(self).__name__} only supports matches_async")

    async def matches_async(self, subject: Subject) -> bool:
        return self.matches(subject)

    @abstractmethod
    def describe(self, subject: Subject, negated: bool) -> Description:
        """Describe why *subject* failed this constraint under the given polarity."""
        ...

    def negate(self) -> Constraint:
        return replace(self, negated=not self.negated)

    def attach_reason(self, template: str, *args: Any) -> Constraint:
        return replace(self, reason=Reason.capture(template, *args))

    async def evaluate(self, subject: Subject) -> Outcome:
        if not subject.has_value() and not self.accepts_absent:
            logger.debug(f"{type(self).__name__}: {subject.expression} is absent")
            return self._fail(subject)

        matched = await self.matches_async(subject)
        logger.debug(
            f"{type(self).__name__}: {subject.expression} matched={matched} negated={self.negated}"
        )
        if matched != self.negated:
            return PASS
        return self._fail(subject)

    def _fail(self, subject: Subject) -> Fail:
        return Fail.from_description(self.describe(subject, self.negated), self.reason)


def _expect(subject: Subject, negated: bool, expectation: str) -> str:
    if negated:
        return f"Did not expect {subject.expression} to {expectation}"
    return f"Expected {subject.expression} to {expectation}"


def _found(subject: Subject) -> str:
    return f", but found {format_value(subject.value)}."


def _describe_absent(subject: Subject, negated: bool, expectation: str, target: Any) -> Description:
    # absence fails under both polarities
    if negated:
        head = f"Expected {subject.expression} to have a value to compare with {format_value(target)}"
        return Description(head, _found(subject))
    return Description(_expect(subject, False, expectation), _found(subject))


@dataclass(frozen=True)
class MembershipConstraint(Constraint):
    """Passes when the value equals one of the candidates.

    An absent subject matches only when ``None`` is itself a candidate.
    """

    candidates: tuple[Any, ...]

    def __post_init__(self) -> None:
        if not self.candidates:
            raise InvalidArgumentError("Cannot check membership against an empty set of candidates")

    def matches(self, subject: Subject) -> bool:
        if not subject.has_value():
            return any(c is None for c in self.candidates)
        return any(c is not None and subject.value == c for c in self.candidates)

    def describe(self, subject: Subject, negated: bool) -> Description:
        return Description(
            _expect(subject, negated, f"be one of {format_value(self.candidates)}"),
            _found(subject),
        )


@dataclass(frozen=True)
class PresenceConstraint(Constraint):
    """Passes when the subject is absent; negate it for "has a value"."""

    def matches(self, subject: Subject) -> bool:
        return not subject.has_value()

    def describe(self, subject: Subject, negated: bool) -> Description:
        if negated:
            return Description(f"Expected {subject.expression} to have a value")
        return Description(_expect(subject, False, "be <null>"), _found(subject))


@dataclass(frozen=True)
class EqualityConstraint(Constraint):
    expected: Any

    def matches(self, subject: Subject) -> bool:
        if self.expected is None or not subject.has_value():
            return self.expected is None and not subject.has_value()
        return subject.value == self.expected

    def describe(self, subject: Subject, negated: bool) -> Description:
        expectation = f"be {format_value(self.expected)}"
        if negated:
            return Description(_expect(subject, True, expectation))
        return Description(_expect(subject, False, expectation), _found(subject))


class Direction(str, Enum):
    BEFORE = "before"
    AFTER = "after"


class ToleranceKind(str, Enum):
    EXACTLY = "exactly"
    AT_LEAST = "at least"
    WITHIN = "within"
    LESS_THAN = "less than"
    MORE_THAN = "more than"


def _zero_like(amount: Any) -> Any:
    return amount - amount


def _describe_position(value: Any, target: Any) -> str:
    if value < target:
        return f"{format_value(target - value)} before"
    if value > target:
        return f"{format_value(value - target)} after"
    return "at the same time as"


@dataclass(frozen=True)
class ToleranceConstraint(Constraint):
    """Compares the signed distance between subject and target with a tolerance.

    The distance is ``target - subject`` for ``BEFORE`` and ``subject - target``
    for ``AFTER``, so a subject on the wrong side of the target has a negative
    distance. Comparison is exact at the native precision of the values.
    """

    target: Any
    tolerance: Any
    kind: ToleranceKind
    direction: Direction

    accepts_absent: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self.tolerance < _zero_like(self.tolerance):
            raise InvalidArgumentError(
                f"The tolerance must be non-negative, but found {format_value(self.tolerance)}"
            )

    def distance(self, value: Any) -> Any:
        if self.direction is Direction.BEFORE:
            return self.target - value
        return value - self.target

    def matches(self, subject: Subject) -> bool:
        distance = self.distance(subject.value)
        zero = _zero_like(self.tolerance)

        if self.kind is ToleranceKind.EXACTLY:
            return distance == self.tolerance
        if self.kind is ToleranceKind.AT_LEAST:
            return distance >= self.tolerance
        if self.kind is ToleranceKind.MORE_THAN:
            return distance > self.tolerance
        if self.kind is ToleranceKind.WITHIN:
            return zero <= distance <= self.tolerance
        if self.kind is ToleranceKind.LESS_THAN:
            return zero <= distance < self.tolerance
        raise ValueError(f"Unknown tolerance kind: {self.kind!r}")

    def describe(self, subject: Subject, negated: bool) -> Description:
        expectation = (
            f"be {self.kind.value} {format_value(self.tolerance)} "
            f"{self.direction.value} {format_value(self.target)}"
        )
        if not subject.has_value():
            return _describe_absent(subject, negated, expectation, self.target)
        position = _describe_position(subject.value, self.target)
        return Description(
            _expect(subject, negated, expectation),
            f", but it is {position} it.",
        )


_DAY = timedelta(days=1)


def _since_midnight(value: time) -> timedelta:
    return timedelta(
        hours=value.hour, minutes=value.minute, seconds=value.second, microseconds=value.microsecond
    )


def _gap(value: Any, target: Any) -> Any:
    """Absolute distance between two values; times of day wrap around midnight."""
    if isinstance(value, time) and isinstance(target, time):
        gap = abs(_since_midnight(value) - _since_midnight(target))
        return min(gap, _DAY - gap)
    return abs(value - target)


@dataclass(frozen=True)
class CloseToConstraint(Constraint):
    """Passes when ``|subject - target| <= precision``.

    Times of day are compared on a 24-hour clock, so 23:59 is two minutes from 00:01.
    """

    target: Any
    precision: Any

    accepts_absent: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self.precision < _zero_like(self.precision):
            raise InvalidArgumentError(
                f"The precision must be non-negative, but found {format_value(self.precision)}"
            )

    def matches(self, subject: Subject) -> bool:
        return _gap(subject.value, self.target) <= self.precision

    def describe(self, subject: Subject, negated: bool) -> Description:
        expectation = f"be within {format_value(self.precision)} from {format_value(self.target)}"
        if not subject.has_value():
            return _describe_absent(subject, negated, expectation, self.target)
        return Description(_expect(subject, negated, expectation), _found(subject))


class Relation(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    ON_OR_BEFORE = "on or before"
    ON_OR_AFTER = "on or after"


_RELATION_OPERATORS: dict[Relation, Callable[[Any, Any], bool]] = {
    Relation.BEFORE: operator.lt,
    Relation.AFTER: operator.gt,
    Relation.ON_OR_BEFORE: operator.le,
    Relation.ON_OR_AFTER: operator.ge,
}


@dataclass(frozen=True)
class OrderingConstraint(Constraint):
    target: Any
    relation: Relation

    accepts_absent: ClassVar[bool] = False

    def matches(self, subject: Subject) -> bool:
        return _RELATION_OPERATORS[self.relation](subject.value, self.target)

    def describe(self, subject: Subject, negated: bool) -> Description:
        expectation = f"be {self.relation.value} {format_value(self.target)}"
        if not subject.has_value():
            return _describe_absent(subject, negated, expectation, self.target)
        return Description(_expect(subject, negated, expectation), _found(subject))


Predicate = Callable[[Any], Union[bool, Awaitable[bool]]]


@dataclass(frozen=True)
class PredicateConstraint(Constraint):
    """Delegates to a caller-supplied predicate, which may be a coroutine function.

    The predicate receives the raw value (``None`` when absent). Exceptions it
    raises, cancellation included, propagate unchanged.
    """

    predicate: Predicate
    description: str = "satisfy the predicate"

    async def matches_async(self, subject: Subject) -> bool:
        result = self.predicate(subject.value)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    def describe(self, subject: Subject, negated: bool) -> Description:
        return Description(_expect(subject, negated, self.description), _found(subject))
