"""Errors raised for invalid engine arguments."""

from __future__ import annotations


class UnknownPeriodError(ValueError):
    """Raised when a period, budget cadence or cycle selector is not recognised."""

    def __init__(self, kind: str, value: object, allowed: tuple[str, ...]):
        self.kind = kind
        self.value = value
        self.allowed = allowed
        super().__init__(f"Unknown {kind} {value!r}; expected one of {', '.join(allowed)}")
