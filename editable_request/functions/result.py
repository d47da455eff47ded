"""Outcome of a custom function step handler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StepStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """Tri-state result returned by every handler.

    ``PENDING`` keeps the workflow step open for further button clicks,
    ``COMPLETED`` finishes it and ``FAILED`` finishes it with ``error``.
    """

    status: StepStatus
    error: str | None = None

    @classmethod
    def pending(cls) -> "StepResult":
        return cls(StepStatus.PENDING)

    @classmethod
    def completed(cls) -> "StepResult":
        return cls(StepStatus.COMPLETED)

    @classmethod
    def failed(cls, error: str) -> "StepResult":
        return cls(StepStatus.FAILED, error)

    @property
    def ok(self) -> bool:
        return self.status is not StepStatus.FAILED
