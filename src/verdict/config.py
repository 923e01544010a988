from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Literal

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


class FormattingOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_items: int = 32
    max_string_length: int = 200

    @field_validator("max_items", "max_string_length")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


class VerdictOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")
    reason_prefix: str = "because"
    formatting: FormattingOptions = FormattingOptions()
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("reason_prefix")
    @classmethod
    def reason_prefix_must_be_a_word(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("reason_prefix must be a single non-empty word")
        return v


_lock = threading.Lock()
_options = VerdictOptions()


def get_options() -> VerdictOptions:
    return _options


def configure(options: VerdictOptions) -> VerdictOptions:
    """Replace the process-wide options, returning the previous ones.

    Also applies ``log_level`` to the ``verdict`` logger.
    """
    global _options
    with _lock:
        previous = _options
        _options = options
    logging.getLogger("verdict").setLevel(options.log_level)
    return previous


@contextmanager
def options_override(**changes: Any) -> Iterator[VerdictOptions]:
    """Temporarily apply field overrides on top of the current options."""
    merged = get_options().model_dump()
    merged.update(changes)
    previous = configure(VerdictOptions(**merged))
    try:
        yield get_options()
    finally:
        configure(previous)


def load_options(path: Path) -> VerdictOptions:
    """Load and validate options from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    return VerdictOptions(**raw)
