"""Error types raised by the decision core."""

from __future__ import annotations


class DeadlineEngineError(Exception):
    """Base error for deadline-engine."""


class ConfigurationError(DeadlineEngineError, ValueError):
    """Raised when a snapshot or config carries a value the core cannot interpret."""

    def __init__(self, field: str, value: object, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid {field}: {value!r}")
