"""Evaluate constraints and report their outcomes to the caller or the open scope."""

from __future__ import annotations

import logging

from verdict.constraints import Constraint
from verdict.exceptions import AssertionFailure
from verdict.outcome import Fail, Outcome
from verdict.scope import ScopeMode, current_scope
from verdict.subject import Subject

logger = logging.getLogger(__name__)


def report(outcome: Outcome) -> Outcome:
    """Route a failed outcome to the innermost deferred scope, or raise it.

    Passing outcomes are returned untouched.
    """
    if not isinstance(outcome, Fail):
        return outcome

    scope = current_scope()
    if scope is not None and scope.mode is ScopeMode.DEFERRED:
        scope.collect(outcome)
        return outcome

    message = outcome.render()
    logger.debug(f"Raising assertion failure: {message}")
    raise AssertionFailure(message, (outcome,))


async def evaluate_and_report(subject: Subject, constraint: Constraint) -> Outcome:
    """Evaluate *constraint* against *subject* and report the outcome.

    Raises:
        AssertionFailure: the constraint failed and no deferred scope is open.
    """
    outcome = await constraint.evaluate(subject)
    return report(outcome)
