"""Nested regions that collect failures and report them together.

The innermost open scope lives in a ``ContextVar``, so every thread and every
asyncio task sees its own stack. Scopes are pushed on ``__enter__`` and popped
on ``__exit__`` with the token taken when they were pushed, which keeps the
stack discipline strict on every exit path.

    with open_scope():
        that(a, "a").is_one_of(1, 2).verify()
        that(b, "b").is_not_null().verify()
    # raises one AssertionFailure listing both failures, if any
"""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from enum import Enum
from types import TracebackType

from verdict.exceptions import AssertionFailure, UsageError
from verdict.outcome import Fail

logger = logging.getLogger(__name__)


class ScopeMode(str, Enum):
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"


_current_scope: ContextVar[Scope | None] = ContextVar("verdict_scope", default=None)


def current_scope() -> Scope | None:
    return _current_scope.get()


class Scope:
    """A region whose failures are either raised at once or collected until exit.

    A deferred scope nested inside another deferred scope closes into a single
    aggregated failure recorded in its parent; the outermost deferred scope
    raises. An immediate scope makes failures raise right away even when an
    outer scope is deferred.
    """

    def __init__(self, name: str | None = None, mode: ScopeMode = ScopeMode.DEFERRED):
        self.name = name
        self.mode = ScopeMode(mode)
        self.parent: Scope | None = None
        self._collected: list[Fail] = []
        self._token: Token[Scope | None] | None = None
        self._closed = False

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open" if self._token else "new"
        return f"<Scope name={self.name!r} mode={self.mode.value} {state} failures={len(self._collected)}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def failures(self) -> tuple[Fail, ...]:
        return tuple(self._collected)

    def collect(self, failure: Fail) -> None:
        if self._closed:
            raise UsageError("Cannot record a failure in a scope that has already closed")
        self._collected.append(failure)
        logger.debug(f"Scope {self.name!r} collected failure #{len(self._collected)}")

    def __enter__(self) -> Scope:
        if self._closed or self._token is not None:
            raise UsageError("A scope can only be entered once")
        self.parent = _current_scope.get()
        self._token = _current_scope.set(self)
        logger.debug(f"Opened {self.mode.value} scope {self.name!r}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._token is None:
            raise UsageError("Scope was exited without being entered")
        if _current_scope.get() is not self:
            raise UsageError(f"Scope {self.name!r} is not the innermost open scope")

        _current_scope.reset(self._token)
        self._token = None
        self._closed = True
        failures = tuple(self._collected)
        self._collected.clear()

        if exc is not None:
            if failures:
                logger.debug(
                    f"Scope {self.name!r} discarded {len(failures)} failure(s) "
                    f"while {exc_type.__name__ if exc_type else 'an exception'} propagates"
                )
            return None

        if not failures:
            logger.debug(f"Closed scope {self.name!r} without failures")
            return None

        aggregated = Fail.aggregate(failures)
        parent = self.parent
        if parent is not None and parent.mode is ScopeMode.DEFERRED and not parent.closed:
            logger.debug(f"Scope {self.name!r} handing {len(failures)} failure(s) to {parent.name!r}")
            parent.collect(aggregated)
            return None

        logger.debug(f"Scope {self.name!r} raising {len(failures)} failure(s)")
        raise AssertionFailure(aggregated.render(), failures)

    async def __aenter__(self) -> Scope:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return self.__exit__(exc_type, exc, tb)


def open_scope(name: str | None = None) -> Scope:
    """Return a new deferred scope, to be used as a (async) context manager."""
    return Scope(name=name, mode=ScopeMode.DEFERRED)


def immediate_scope(name: str | None = None) -> Scope:
    return Scope(name=name, mode=ScopeMode.IMMEDIATE)
