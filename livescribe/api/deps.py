"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException

from livescribe.answering.client import AnsweringClient, HttpAnsweringClient
from livescribe.config import settings
from livescribe.storage.base import MeetingStore, get_store
from livescribe.storage.models import Meeting

__all__ = ["get_answering_client", "get_meeting_or_404", "get_store"]


def get_answering_client() -> AnsweringClient:
    """Client used by live sessions to reach the answering service."""
    return HttpAnsweringClient(settings.answer_service_url, settings.answer_timeout_seconds)


def get_meeting_or_404(store: MeetingStore, meeting_id: int) -> Meeting:
    meeting = store.get_meeting(meeting_id)
    if meeting is None:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return meeting
