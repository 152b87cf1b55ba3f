"""Outcomes of best-effort steps.

Secondary conveniences (project-wide replacement, blank-file bootstrap)
never abort the primary action. They report what happened through a
StepResult instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    """How a best-effort step ended."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"  # Precondition not met
    FAILED = "failed"  # Recoverable error, primary action kept


@dataclass
class StepResult:
    """Result of a best-effort step."""

    outcome: Outcome
    message: str = ""
    error: Exception | None = None
    changed: int = 0  # Files or forms touched

    @classmethod
    def success(cls, message: str = "", changed: int = 0) -> StepResult:
        return cls(Outcome.SUCCEEDED, message, changed=changed)

    @classmethod
    def skip(cls, message: str) -> StepResult:
        return cls(Outcome.SKIPPED, message)

    @classmethod
    def failure(cls, error: Exception, message: str = "") -> StepResult:
        return cls(Outcome.FAILED, message or str(error), error=error)

    @property
    def succeeded(self) -> bool:
        return self.outcome == Outcome.SUCCEEDED

    @property
    def skipped(self) -> bool:
        return self.outcome == Outcome.SKIPPED

    @property
    def failed(self) -> bool:
        return self.outcome == Outcome.FAILED
