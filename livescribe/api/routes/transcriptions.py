"""Transcription endpoints for a meeting."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from livescribe.api.deps import get_meeting_or_404, get_store
from livescribe.api.models import TranscriptionCreate, TranscriptionResponse
from livescribe.storage.base import MeetingStore

router = APIRouter()

Store = Annotated[MeetingStore, Depends(get_store)]


@router.get(
    "/api/meetings/{meeting_id}/transcriptions",
    response_model=list[TranscriptionResponse],
)
async def list_transcriptions(meeting_id: int, store: Store) -> list[TranscriptionResponse]:
    get_meeting_or_404(store, meeting_id)
    return [TranscriptionResponse.from_record(t) for t in store.list_transcriptions(meeting_id)]


@router.post(
    "/api/meetings/{meeting_id}/transcriptions",
    response_model=TranscriptionResponse,
    status_code=201,
)
async def create_transcription(
    meeting_id: int, request: TranscriptionCreate, store: Store
) -> TranscriptionResponse:
    get_meeting_or_404(store, meeting_id)
    transcription = store.create_transcription(
        meeting_id=meeting_id,
        content=request.content,
        timestamp=request.timestamp or datetime.now(timezone.utc),
        speaker=request.speaker,
    )
    return TranscriptionResponse.from_record(transcription)
