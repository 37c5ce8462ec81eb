"""Data models for persisted meetings, transcriptions, and speakers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Meeting:
    """A recorded meeting and its (optional) generated summary."""

    id: int
    name: str
    user_id: int
    date: datetime
    duration: int | None = 0
    summary: str | None = None
    key_points: str | None = None
    action_items: str | None = None


@dataclass
class Transcription:
    """A single transcribed line stored against a meeting."""

    id: int
    meeting_id: int
    timestamp: datetime
    content: str
    speaker: str | None = None


@dataclass
class Speaker:
    """A speaker identified in a meeting."""

    id: int
    meeting_id: int
    name: str
    initials: str
    color: str


# Fields a client may change on an existing meeting
MEETING_UPDATABLE_FIELDS = frozenset(
    {"name", "date", "duration", "summary", "key_points", "action_items"}
)
