from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ValidationIssue:
    """One broken range rule and how many records break it."""
    code: str
    message: str
    count: int = 0

    def __str__(self) -> str:
        return f"{self.code} ({self.count} record(s)): {self.message}"


class ValidationError(Exception):
    """A fetched record set breaks one or more range rules."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(str(i) for i in issues))

    @property
    def n_offending(self) -> int:
        """Offending rows summed over rules; a row breaking two rules counts twice."""
        return sum(i.count for i in self.issues)
