"""Run a suspendable evaluation to completion from synchronous code."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from typing import Any, Awaitable, Coroutine, TypeVar

from verdict.exceptions import ReentrancyError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_state = threading.local()


def _depth() -> int:
    return getattr(_state, "depth", 0)


def _discard(evaluation: Any) -> None:
    # Close unstarted coroutines so they don't warn about never being awaited.
    if inspect.iscoroutine(evaluation):
        evaluation.close()


async def _drive(evaluation: Awaitable[T]) -> T:
    return await evaluation


def run_blocking(evaluation: Awaitable[T] | Any) -> T:
    """Block the calling thread until *evaluation* completes and return its result.

    *evaluation* is a coroutine, any other awaitable, or an object with an
    ``evaluate()`` coroutine method such as an ``Expectation``. Whatever the
    evaluation raises is re-raised unchanged.

    Raises:
        ReentrancyError: called while another ``run_blocking`` is waiting on
            this thread, or from inside a running event loop (the loop would
            deadlock waiting for itself).
    """
    if not inspect.isawaitable(evaluation) and hasattr(evaluation, "evaluate"):
        evaluation = evaluation.evaluate()

    if not inspect.isawaitable(evaluation):
        raise TypeError(f"Expected an awaitable evaluation, got {type(evaluation).__name__}")

    depth = _depth()
    if depth:
        _discard(evaluation)
        raise ReentrancyError(
            f"run_blocking() called re-entrantly (depth {depth}) on thread "
            f"{threading.current_thread().name!r}; await the evaluation instead"
        )

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        _discard(evaluation)
        raise ReentrancyError(
            "run_blocking() called from inside a running event loop; await the evaluation instead"
        )

    _state.depth = depth + 1
    try:
        if inspect.iscoroutine(evaluation):
            coro: Coroutine[Any, Any, T] = evaluation
        else:
            coro = _drive(evaluation)
        logger.debug("Running evaluation synchronously")
        return asyncio.run(coro)
    finally:
        _state.depth = depth
