"""Custom exceptions for match discovery."""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ValidationIssue:
    """One violated field in a discovery request."""
    code: str
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


class MatchingError(Exception):
    """Base class for match discovery errors."""


class MatchingValidationError(MatchingError):
    """Raised when discovery criteria fail validation; carries every issue found."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{issue.code}: {issue.message}" for issue in self.issues)
        super().__init__(f"Invalid matching criteria ({len(self.issues)} issues): {summary}")

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]


class CooldownActiveError(MatchingError):
    """Raised when a seeker requests discovery again before the cooldown elapses."""

    def __init__(self, seeker_id: str, cooldown_until: datetime):
        self.seeker_id = seeker_id
        self.cooldown_until = cooldown_until
        super().__init__(f"User {seeker_id} is on cooldown until {cooldown_until.isoformat()}")
