"""Outcome of a single field rule."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RuleResult:
    """Tagged success/failure returned by every rule.

    Attributes:
        success: Whether the value satisfied the rule
        message: Failure message (None on success)
    """
    success: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "RuleResult":
        return cls(success=True)

    @classmethod
    def fail(cls, message: str) -> "RuleResult":
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success
