"""Fluent entry points: ``that(value).is_one_of(...).because(...)``.

Building an expectation does not evaluate it. Evaluate by awaiting it inside a
coroutine, or with ``verify()`` from synchronous code::

    that(status, "status").is_one_of("ok", "degraded").because("the probe ran").verify()

    await that(started_at, "started_at").is_at_least(timedelta(seconds=10)).before(finished_at)

Both return a ``ChainHandle`` whose ``and_`` starts a new expectation on the
same subject.
"""

from __future__ import annotations

from typing import Any, Generator

from verdict.bridge import run_blocking
from verdict.constraints import (
    CloseToConstraint,
    Constraint,
    Direction,
    EqualityConstraint,
    MembershipConstraint,
    OrderingConstraint,
    Predicate,
    PredicateConstraint,
    PresenceConstraint,
    Relation,
    ToleranceConstraint,
    ToleranceKind,
)
from verdict.evaluator import evaluate_and_report
from verdict.exceptions import UsageError
from verdict.outcome import PASS, Outcome
from verdict.subject import DEFAULT_EXPRESSION, Subject


class _Guarded:
    """Blocks comparisons and truth tests that would silently do the wrong thing."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        raise UsageError(
            f"{type(self).__name__} does not support ==; "
            "did you mean is_equal_to() or is_one_of()?"
        )

    def __ne__(self, other: object) -> bool:
        raise UsageError(
            f"{type(self).__name__} does not support !=; did you mean is_not_equal_to()?"
        )

    __hash__ = object.__hash__

    def __bool__(self) -> bool:
        raise UsageError(
            f"{type(self).__name__} has no truth value; "
            "evaluate the expectation with verify() or await it"
        )


class Assertions(_Guarded):
    """Builds constraints for one subject."""

    __slots__ = ("subject",)

    def __init__(self, subject: Subject):
        self.subject = subject

    def __repr__(self) -> str:
        return f"<Assertions on {self.subject.expression}>"

    def _add(self, constraint: Constraint) -> Expectation:
        return Expectation(self.subject, (constraint,))

    def is_one_of(self, *candidates: Any) -> Expectation:
        return self._add(MembershipConstraint(candidates))

    def is_not_one_of(self, *candidates: Any) -> Expectation:
        return self._add(MembershipConstraint(candidates, negated=True))

    def is_null(self) -> Expectation:
        return self._add(PresenceConstraint())

    def is_not_null(self) -> Expectation:
        return self._add(PresenceConstraint(negated=True))

    has_value = is_not_null

    def is_equal_to(self, expected: Any) -> Expectation:
        return self._add(EqualityConstraint(expected))

    def is_not_equal_to(self, unexpected: Any) -> Expectation:
        return self._add(EqualityConstraint(unexpected, negated=True))

    def is_before(self, target: Any) -> Expectation:
        return self._add(OrderingConstraint(target, Relation.BEFORE))

    def is_after(self, target: Any) -> Expectation:
        return self._add(OrderingConstraint(target, Relation.AFTER))

    def is_on_or_before(self, target: Any) -> Expectation:
        return self._add(OrderingConstraint(target, Relation.ON_OR_BEFORE))

    def is_on_or_after(self, target: Any) -> Expectation:
        return self._add(OrderingConstraint(target, Relation.ON_OR_AFTER))

    def is_close_to(self, target: Any, precision: Any) -> Expectation:
        return self._add(CloseToConstraint(target, precision))

    def is_not_close_to(self, target: Any, precision: Any) -> Expectation:
        return self._add(CloseToConstraint(target, precision, negated=True))

    def satisfies(self, predicate: Predicate, description: str = "satisfy the predicate") -> Expectation:
        """Check an arbitrary predicate; coroutine functions are awaited."""
        return self._add(PredicateConstraint(predicate, description))

    def is_exactly(self, tolerance: Any) -> RangeBuilder:
        return RangeBuilder(self, tolerance, ToleranceKind.EXACTLY)

    def is_at_least(self, tolerance: Any) -> RangeBuilder:
        return RangeBuilder(self, tolerance, ToleranceKind.AT_LEAST)

    def is_within(self, tolerance: Any) -> RangeBuilder:
        return RangeBuilder(self, tolerance, ToleranceKind.WITHIN)

    def is_less_than(self, tolerance: Any) -> RangeBuilder:
        return RangeBuilder(self, tolerance, ToleranceKind.LESS_THAN)

    def is_more_than(self, tolerance: Any) -> RangeBuilder:
        return RangeBuilder(self, tolerance, ToleranceKind.MORE_THAN)


class RangeBuilder(_Guarded):
    """Second half of a tolerance check: ``is_at_least(d).before(target)``."""

    __slots__ = ("_assertions", "_tolerance", "_kind")

    def __init__(self, assertions: Assertions, tolerance: Any, kind: ToleranceKind):
        self._assertions = assertions
        self._tolerance = tolerance
        self._kind = kind

    def before(self, target: Any) -> Expectation:
        return self._assertions._add(
            ToleranceConstraint(target, self._tolerance, self._kind, Direction.BEFORE)
        )

    def after(self, target: Any) -> Expectation:
        return self._assertions._add(
            ToleranceConstraint(target, self._tolerance, self._kind, Direction.AFTER)
        )


class _Continuation(Assertions):
    """Appends the next constraint to an expectation that has not run yet."""

    __slots__ = ("_expectation",)

    def __init__(self, expectation: Expectation):
        super().__init__(expectation.subject)
        self._expectation = expectation

    def _add(self, constraint: Constraint) -> Expectation:
        return Expectation(self.subject, self._expectation.constraints + (constraint,))


class Expectation(_Guarded):
    """One or more constraints on a subject, evaluated in order when run."""

    __slots__ = ("subject", "constraints")

    def __init__(self, subject: Subject, constraints: tuple[Constraint, ...]):
        if not constraints:
            raise UsageError("An expectation needs at least one constraint")
        self.subject = subject
        self.constraints = constraints

    def __repr__(self) -> str:
        names = ", ".join(type(c).__name__ for c in self.constraints)
        return f"<Expectation on {self.subject.expression}: {names}>"

    def because(self, template: str, *args: Any) -> Expectation:
        """Attach a reason to the most recently added constraint.

        ``template`` uses ``str.format`` positional placeholders; ``args`` are
        captured now and rendered only if the constraint fails.
        """
        *rest, last = self.constraints
        return Expectation(self.subject, (*rest, last.attach_reason(template, *args)))

    @property
    def and_(self) -> Assertions:
        return _Continuation(self)

    async def evaluate(self) -> ChainHandle:
        outcome: Outcome = PASS
        for constraint in self.constraints:
            outcome = await evaluate_and_report(self.subject, constraint)
        return ChainHandle(self.subject, outcome)

    def __await__(self) -> Generator[Any, None, ChainHandle]:
        return self.evaluate().__await__()

    def verify(self) -> ChainHandle:
        """Evaluate from synchronous code through the blocking bridge."""
        return run_blocking(self.evaluate())


class ChainHandle(_Guarded):
    """Returned after an expectation ran without raising."""

    __slots__ = ("subject", "last_outcome")

    def __init__(self, subject: Subject, last_outcome: Outcome):
        self.subject = subject
        self.last_outcome = last_outcome

    def __repr__(self) -> str:
        return f"<ChainHandle on {self.subject.expression} passed={self.last_outcome.passed}>"

    def __bool__(self) -> bool:
        raise UsageError("ChainHandle has no truth value; inspect last_outcome instead")

    @property
    def and_(self) -> Assertions:
        return Assertions(self.subject)


def subject_of(value: Any, expression: str | None = None) -> Assertions:
    """Start an assertion about *value*; *expression* names it in messages."""
    return Assertions(Subject(value, expression or DEFAULT_EXPRESSION))


that = subject_of
