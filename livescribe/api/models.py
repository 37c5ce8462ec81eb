"""Pydantic request/response schemas for the LiveScribe API.

Field names are camelCase on the wire (``userId``, ``isQuestion``) and
snake_case in Python.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from livescribe.storage.models import Meeting, Speaker, Transcription


class ApiModel(BaseModel):
    """Base schema: camelCase aliases, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Answering service
# ---------------------------------------------------------------------------


class ChatRequest(ApiModel):
    """Request body for the /api/chat endpoint."""

    message: str = Field(min_length=1)
    prompt: str | None = None


class ChatResponse(ApiModel):
    """Response body for the /api/chat endpoint."""

    response: str | None
    is_question: bool
    original_message: str | None = None
    message: str | None = None


# ---------------------------------------------------------------------------
# Meetings
# ---------------------------------------------------------------------------


class MeetingCreate(ApiModel):
    """Request body for creating a meeting; ``date`` defaults to now."""

    name: str
    user_id: int | None = None
    date: datetime | None = None


class MeetingUpdate(ApiModel):
    """Partial update of a meeting; only the fields sent are changed."""

    name: str | None = None
    date: datetime | None = None
    duration: int | None = None
    summary: str | None = None
    key_points: str | None = None
    action_items: str | None = None


class MeetingResponse(ApiModel):
    id: int
    name: str
    user_id: int
    date: datetime
    duration: int | None = None
    summary: str | None = None
    key_points: str | None = None
    action_items: str | None = None

    @classmethod
    def from_record(cls, meeting: Meeting) -> MeetingResponse:
        return cls(**asdict(meeting))


# ---------------------------------------------------------------------------
# Transcriptions and speakers
# ---------------------------------------------------------------------------


class TranscriptionCreate(ApiModel):
    """Request body for adding a transcription; ``timestamp`` defaults to now."""

    content: str
    speaker: str | None = None
    timestamp: datetime | None = None


class TranscriptionResponse(ApiModel):
    id: int
    meeting_id: int
    timestamp: datetime
    speaker: str | None = None
    content: str

    @classmethod
    def from_record(cls, transcription: Transcription) -> TranscriptionResponse:
        return cls(**asdict(transcription))


class SpeakerCreate(ApiModel):
    """Request body for adding a speaker; initials and colour derive from the name."""

    name: str = Field(min_length=1)
    initials: str | None = None
    color: str | None = None


class SpeakerResponse(ApiModel):
    id: int
    meeting_id: int
    name: str
    initials: str
    color: str

    @classmethod
    def from_record(cls, speaker: Speaker) -> SpeakerResponse:
        return cls(**asdict(speaker))


# ---------------------------------------------------------------------------
# Live session messages (client -> server)
# ---------------------------------------------------------------------------


class LiveFragmentMessage(ApiModel):
    content: str = Field(min_length=1)
    speaker: str | None = None
    timestamp: datetime | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class LiveConfigMessage(ApiModel):
    enabled: bool | None = None
    auto_detect_questions: bool | None = None
    custom_prompt: str | None = None
