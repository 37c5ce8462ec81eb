"""Speaker endpoints for a meeting."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from livescribe.api.deps import get_meeting_or_404, get_store
from livescribe.api.models import SpeakerCreate, SpeakerResponse
from livescribe.storage.base import MeetingStore
from livescribe.transcript.speakers import speaker_color, speaker_initials

router = APIRouter()

Store = Annotated[MeetingStore, Depends(get_store)]


@router.get("/api/meetings/{meeting_id}/speakers", response_model=list[SpeakerResponse])
async def list_speakers(meeting_id: int, store: Store) -> list[SpeakerResponse]:
    get_meeting_or_404(store, meeting_id)
    return [SpeakerResponse.from_record(s) for s in store.list_speakers(meeting_id)]


@router.post(
    "/api/meetings/{meeting_id}/speakers",
    response_model=SpeakerResponse,
    status_code=201,
)
async def create_speaker(meeting_id: int, request: SpeakerCreate, store: Store) -> SpeakerResponse:
    """Add a speaker; missing initials and colour are derived from the name."""
    get_meeting_or_404(store, meeting_id)
    speaker = store.create_speaker(
        meeting_id=meeting_id,
        name=request.name,
        initials=request.initials or speaker_initials(request.name),
        color=request.color or speaker_color(request.name),
    )
    return SpeakerResponse.from_record(speaker)
