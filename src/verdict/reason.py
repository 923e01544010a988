"""Caller-supplied justification attached to a constraint."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any

from verdict.config import get_options

logger = logging.getLogger(__name__)


def _snapshot(argument: Any) -> Any:
    try:
        return copy.deepcopy(argument)
    except (TypeError, copy.Error) as e:
        logger.debug(f"Keeping reason argument {type(argument).__name__} by reference: {e}")
        return argument


@dataclass(frozen=True)
class Reason:
    """A ``str.format`` template with positional placeholders and its arguments.

    Arguments are snapshotted when the reason is created, so later mutation of
    caller state does not change what gets reported.
    """

    template: str
    arguments: tuple[Any, ...] = ()

    @classmethod
    def capture(cls, template: str, *arguments: Any) -> Reason:
        return cls(template, tuple(_snapshot(a) for a in arguments))

    def render(self) -> str:
        """Return the clause to splice into a message, e.g. ``because it is late``.

        Returns an empty string for a blank template.
        """
        if not self.template.strip():
            return ""

        try:
            text = self.template.format(*self.arguments)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            logger.debug(f"Reason template {self.template!r} did not format: {e}")
            extra = ", ".join(str(a) for a in self.arguments)
            text = f"{self.template} ({extra})" if extra else self.template

        text = text.strip()
        prefix = get_options().reason_prefix
        if not text.lower().startswith(prefix.lower() + " ") and text.lower() != prefix.lower():
            text = f"{prefix} {text}"
        return text
