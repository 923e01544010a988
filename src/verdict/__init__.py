"""Fluent assertions with deferred, aggregated failure reporting."""

from verdict.assertions import Assertions, ChainHandle, Expectation, subject_of, that
from verdict.bridge import run_blocking
from verdict.config import VerdictOptions, configure, get_options, load_options, options_override
from verdict.evaluator import evaluate_and_report
from verdict.exceptions import AssertionFailure, InvalidArgumentError, ReentrancyError, UsageError
from verdict.outcome import PASS, Fail, Outcome, Pass
from verdict.scope import Scope, ScopeMode, current_scope, immediate_scope, open_scope
from verdict.subject import Subject

__all__ = [
    "PASS",
    "AssertionFailure",
    "Assertions",
    "ChainHandle",
    "Expectation",
    "Fail",
    "InvalidArgumentError",
    "Outcome",
    "Pass",
    "ReentrancyError",
    "Scope",
    "ScopeMode",
    "Subject",
    "UsageError",
    "VerdictOptions",
    "configure",
    "current_scope",
    "evaluate_and_report",
    "get_options",
    "immediate_scope",
    "load_options",
    "open_scope",
    "options_override",
    "run_blocking",
    "subject_of",
    "that",
]
