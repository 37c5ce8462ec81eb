"""In-memory store backed by dictionaries (the default backend)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

from livescribe.storage.models import (
    MEETING_UPDATABLE_FIELDS,
    Meeting,
    Speaker,
    Transcription,
)


class MemoryMeetingStore:
    """Keeps every record in process memory; ids start at 1 per table."""

    def __init__(self) -> None:
        self._meetings: dict[int, Meeting] = {}
        self._transcriptions: dict[int, Transcription] = {}
        self._speakers: dict[int, Speaker] = {}
        self._next_meeting_id = 1
        self._next_transcription_id = 1
        self._next_speaker_id = 1

    # Meetings

    def get_meeting(self, meeting_id: int) -> Meeting | None:
        return self._meetings.get(meeting_id)

    def list_meetings(self, user_id: int) -> list[Meeting]:
        meetings = [m for m in self._meetings.values() if m.user_id == user_id]
        # Newest first, like the Supabase query
        return sorted(meetings, key=lambda m: m.date.timestamp(), reverse=True)

    def create_meeting(self, name: str, user_id: int, date: datetime) -> Meeting:
        meeting = Meeting(id=self._next_meeting_id, name=name, user_id=user_id, date=date)
        self._next_meeting_id += 1
        self._meetings[meeting.id] = meeting
        return meeting

    def update_meeting(self, meeting_id: int, **fields: Any) -> Meeting | None:
        meeting = self._meetings.get(meeting_id)
        if meeting is None:
            return None
        changes = {k: v for k, v in fields.items() if k in MEETING_UPDATABLE_FIELDS}
        updated = replace(meeting, **changes)
        self._meetings[meeting_id] = updated
        return updated

    def delete_meeting(self, meeting_id: int) -> bool:
        return self._meetings.pop(meeting_id, None) is not None

    # Transcriptions

    def list_transcriptions(self, meeting_id: int) -> list[Transcription]:
        return [t for t in self._transcriptions.values() if t.meeting_id == meeting_id]

    def create_transcription(
        self,
        meeting_id: int,
        content: str,
        timestamp: datetime,
        speaker: str | None = None,
    ) -> Transcription:
        transcription = Transcription(
            id=self._next_transcription_id,
            meeting_id=meeting_id,
            timestamp=timestamp,
            content=content,
            speaker=speaker,
        )
        self._next_transcription_id += 1
        self._transcriptions[transcription.id] = transcription
        return transcription

    def delete_transcriptions(self, meeting_id: int) -> bool:
        for tid in [t.id for t in self.list_transcriptions(meeting_id)]:
            del self._transcriptions[tid]
        return True

    # Speakers

    def list_speakers(self, meeting_id: int) -> list[Speaker]:
        return [s for s in self._speakers.values() if s.meeting_id == meeting_id]

    def create_speaker(self, meeting_id: int, name: str, initials: str, color: str) -> Speaker:
        speaker = Speaker(
            id=self._next_speaker_id,
            meeting_id=meeting_id,
            name=name,
            initials=initials,
            color=color,
        )
        self._next_speaker_id += 1
        self._speakers[speaker.id] = speaker
        return speaker

    def delete_speakers(self, meeting_id: int) -> bool:
        for sid in [s.id for s in self.list_speakers(meeting_id)]:
            del self._speakers[sid]
        return True
