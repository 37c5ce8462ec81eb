"""Storage interface for meetings, transcriptions, and speakers."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Any, Protocol

from livescribe.config import settings
from livescribe.pipeline_config import StorageBackend
from livescribe.storage.models import Meeting, Speaker, Transcription


class MeetingStore(Protocol):
    """Persistence collaborator used by the API and live sessions."""

    def get_meeting(self, meeting_id: int) -> Meeting | None: ...

    def list_meetings(self, user_id: int) -> list[Meeting]: ...

    def create_meeting(self, name: str, user_id: int, date: datetime) -> Meeting: ...

    def update_meeting(self, meeting_id: int, **fields: Any) -> Meeting | None: ...

    def delete_meeting(self, meeting_id: int) -> bool: ...

    def list_transcriptions(self, meeting_id: int) -> list[Transcription]: ...

    def create_transcription(
        self,
        meeting_id: int,
        content: str,
        timestamp: datetime,
        speaker: str | None = None,
    ) -> Transcription: ...

    def delete_transcriptions(self, meeting_id: int) -> bool: ...

    def list_speakers(self, meeting_id: int) -> list[Speaker]: ...

    def create_speaker(self, meeting_id: int, name: str, initials: str, color: str) -> Speaker: ...

    def delete_speakers(self, meeting_id: int) -> bool: ...


@lru_cache(maxsize=1)
def get_store() -> MeetingStore:
    """Return the process-wide store selected by ``settings.storage_backend``."""
    backend = StorageBackend(settings.storage_backend)
    if backend is StorageBackend.SUPABASE:
        from livescribe.storage.supabase_store import SupabaseMeetingStore, get_supabase_client

        return SupabaseMeetingStore(get_supabase_client())

    from livescribe.storage.memory import MemoryMeetingStore

    return MemoryMeetingStore()
