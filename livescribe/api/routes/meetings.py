"""Meeting endpoints: CRUD, transcript export, and summary generation."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Annotated

from anthropic import APIError
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import PlainTextResponse

from livescribe.api.deps import get_meeting_or_404, get_store
from livescribe.api.models import MeetingCreate, MeetingResponse, MeetingUpdate
from livescribe.config import settings
from livescribe.storage.base import MeetingStore
from livescribe.transcript.export import format_transcript

router = APIRouter()

Store = Annotated[MeetingStore, Depends(get_store)]


@router.get("/api/meetings", response_model=list[MeetingResponse])
async def list_meetings(store: Store) -> list[MeetingResponse]:
    """List the meetings of the default user."""
    return [MeetingResponse.from_record(m) for m in store.list_meetings(settings.default_user_id)]


@router.get("/api/meetings/{meeting_id}", response_model=MeetingResponse)
async def get_meeting(meeting_id: int, store: Store) -> MeetingResponse:
    return MeetingResponse.from_record(get_meeting_or_404(store, meeting_id))


@router.post("/api/meetings", response_model=MeetingResponse, status_code=201)
async def create_meeting(request: MeetingCreate, store: Store) -> MeetingResponse:
    meeting = store.create_meeting(
        name=request.name,
        user_id=request.user_id if request.user_id is not None else settings.default_user_id,
        date=request.date or datetime.now(timezone.utc),
    )
    return MeetingResponse.from_record(meeting)


@router.patch("/api/meetings/{meeting_id}", response_model=MeetingResponse)
async def update_meeting(meeting_id: int, request: MeetingUpdate, store: Store) -> MeetingResponse:
    get_meeting_or_404(store, meeting_id)
    updated = store.update_meeting(meeting_id, **request.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return MeetingResponse.from_record(updated)


@router.delete("/api/meetings/{meeting_id}", status_code=204)
async def delete_meeting(meeting_id: int, store: Store) -> Response:
    """Delete a meeting together with its transcriptions and speakers."""
    get_meeting_or_404(store, meeting_id)

    # Delete related data first
    store.delete_transcriptions(meeting_id)
    store.delete_speakers(meeting_id)

    if not store.delete_meeting(meeting_id):
        raise HTTPException(status_code=500, detail="Failed to delete meeting")
    return Response(status_code=204)


@router.get("/api/meetings/{meeting_id}/export", response_class=PlainTextResponse)
async def export_meeting(meeting_id: int, store: Store) -> PlainTextResponse:
    """Download the transcript as plain text."""
    get_meeting_or_404(store, meeting_id)
    content = format_transcript(store.list_transcriptions(meeting_id))
    return PlainTextResponse(
        content,
        headers={"Content-Disposition": 'attachment; filename="meeting-transcript.txt"'},
    )


@router.post("/api/meetings/{meeting_id}/summarize", response_model=MeetingResponse)
async def summarize_meeting(meeting_id: int, store: Store) -> MeetingResponse:
    """Generate and save the summary, key points, and action items of a meeting."""
    get_meeting_or_404(store, meeting_id)

    transcriptions = store.list_transcriptions(meeting_id)
    if not transcriptions:
        raise HTTPException(status_code=400, detail="Meeting has no transcript to summarize")

    from livescribe.summary.extractor import summarize_transcript

    try:
        summary = await asyncio.to_thread(summarize_transcript, format_transcript(transcriptions))
    except APIError as exc:
        # Return 503 so the browser receives a proper JSON response with CORS headers intact.
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    updated = store.update_meeting(
        meeting_id,
        summary=summary.summary,
        key_points=summary.key_points_text(),
        action_items=summary.action_items_json(),
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return MeetingResponse.from_record(updated)
