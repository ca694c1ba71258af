"""Validation verdict returned by every validate() call."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationVerdict:
    """Pass/fail flag plus the itemized issues that caused a failure."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: list[str]) -> "ValidationVerdict":
        return cls(is_valid=not issues, issues=list(issues))

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict[str, Any]:
        """Wire shape consumed by the web client."""
        return {"isValid": self.is_valid, "issues": list(self.issues)}
