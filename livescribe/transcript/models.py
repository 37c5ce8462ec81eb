"""Data models for the live transcript."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Fragment:
    """One unit of transcribed speech as emitted by a transcript source."""

    content: str
    speaker: str | None = None
    timestamp: datetime | None = None
    confidence: float | None = None  # 0-1

    def __post_init__(self) -> None:
        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
