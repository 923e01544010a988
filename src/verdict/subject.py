from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from verdict.exceptions import UsageError

DEFAULT_EXPRESSION = "value"


@dataclass(frozen=True)
class Subject:
    """The value under test plus the text used to name it in messages.

    ``None`` is a valid value and means the subject is absent.
    """

    value: Any
    expression: str = DEFAULT_EXPRESSION

    def has_value(self) -> bool:
        return self.value is not None

    def get(self) -> Any:
        if self.value is None:
            raise UsageError(f"{self.expression} has no value")
        return self.value

    def expression_text(self) -> str:
        return self.expression
