"""Value formatting used when rendering failure messages.

``format_value`` dispatches on the type of the value. Domain types that need a
nicer rendering than ``repr`` register their own implementation::

    @format_value.register
    def _(value: Money) -> str:
        return f"{value.amount} {value.currency}"
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from functools import singledispatch
from typing import Any

from verdict.config import get_options


@singledispatch
def format_value(value: Any) -> str:
    return repr(value)


@format_value.register(type(None))
def _(value: None) -> str:
    return "<null>"


@format_value.register
def _(value: str) -> str:
    limit = get_options().formatting.max_string_length
    if len(value) > limit:
        return f'"{value[:limit]}"… ({len(value) - limit} more characters)'
    return f'"{value}"'


@format_value.register
def _(value: datetime) -> str:
    return f"<{value.isoformat(sep=' ')}>"


@format_value.register
def _(value: date) -> str:
    return f"<{value.isoformat()}>"


@format_value.register
def _(value: time) -> str:
    return f"<{value.isoformat()}>"


@format_value.register
def _(value: timedelta) -> str:
    return format_duration(value)


@format_value.register(list)
@format_value.register(tuple)
def _(value: list | tuple) -> str:
    return _format_items(list(value))


@format_value.register(set)
@format_value.register(frozenset)
def _(value: set | frozenset) -> str:
    # Sets have no stable iteration order; sort the rendered items instead.
    return _format_rendered(sorted(format_value(v) for v in value))


def _format_items(items: list[Any]) -> str:
    limit = get_options().formatting.max_items
    rendered = [format_value(v) for v in items[:limit]]
    return _format_rendered(rendered, hidden=max(len(items) - limit, 0))


def _format_rendered(rendered: list[str], hidden: int = 0) -> str:
    limit = get_options().formatting.max_items
    if len(rendered) > limit:
        hidden += len(rendered) - limit
        rendered = rendered[:limit]
    body = ", ".join(rendered)
    if hidden:
        body = f"{body}, …{hidden} more…"
    return "{" + body + "}"


def format_duration(value: timedelta) -> str:
    """Render a timedelta as e.g. ``1d 2h 3m 4s 5ms``."""
    if value == timedelta(0):
        return "0s"

    sign = "-" if value < timedelta(0) else ""
    remaining = abs(value)

    seconds = remaining.seconds
    parts: list[str] = []
    for amount, unit in (
        (remaining.days, "d"),
        (seconds // 3600, "h"),
        (seconds % 3600 // 60, "m"),
        (seconds % 60, "s"),
        (remaining.microseconds // 1000, "ms"),
        (remaining.microseconds % 1000, "µs"),
    ):
        if amount:
            parts.append(f"{amount}{unit}")

    return sign + " ".join(parts)
