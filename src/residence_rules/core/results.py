from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .enums import RuleViolation

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or the rule that refused it."""

    value: Optional[T] = None
    violation: Optional[RuleViolation] = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def refused(cls, violation: RuleViolation) -> "Outcome[T]":
        return cls(violation=violation)
