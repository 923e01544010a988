"""Pass/Fail result of evaluating one constraint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Union

from verdict.reason import Reason


class Description(NamedTuple):
    """A failure sentence split where the reason clause goes.

    ``Description("Expected value to be <null>", ", but found 3.")`` renders
    as ``Expected value to be <null> because ..., but found 3.``
    """

    head: str
    tail: str = "."


@dataclass(frozen=True)
class Pass:
    passed = True

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Fail:
    summary: str
    reason: Reason | None = None
    reason_at: int | None = None
    children: tuple[Fail, ...] = field(default=(), repr=False)

    passed = False

    @classmethod
    def from_description(cls, description: Description, reason: Reason | None = None) -> Fail:
        head, tail = description
        return cls(summary=head + tail, reason=reason, reason_at=len(head))

    @classmethod
    def aggregate(cls, failures: tuple[Fail, ...]) -> Fail:
        """Combine failures into one whose summary lists each on its own line."""
        return cls(
            summary="\n".join(f.render() for f in failures),
            children=failures,
        )

    def __bool__(self) -> bool:
        return False

    def render(self) -> str:
        clause = self.reason.render() if self.reason else ""
        if not clause:
            return self.summary

        at = self.reason_at
        if at is None:
            at = len(self.summary.rstrip("."))
        return f"{self.summary[:at]} {clause}{self.summary[at:]}"


PASS = Pass()

Outcome = Union[Pass, Fail]
