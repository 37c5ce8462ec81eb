"""Supabase storage for meetings, transcriptions, and speakers."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any, cast

from supabase import Client, create_client

from livescribe.storage.models import (
    MEETING_UPDATABLE_FIELDS,
    Meeting,
    Speaker,
    Transcription,
)


def get_supabase_client() -> Client:
    """Create and return a Supabase client from environment variables."""
    return create_client(
        os.getenv("SUPABASE_URL", ""),
        os.getenv("SUPABASE_KEY", ""),
    )


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _meeting_from_row(row: dict[str, Any]) -> Meeting:
    return Meeting(
        id=int(row["id"]),
        name=row["name"],
        user_id=int(row["user_id"]),
        date=_parse_datetime(row["date"]),
        duration=row.get("duration"),
        summary=row.get("summary"),
        key_points=row.get("key_points"),
        action_items=row.get("action_items"),
    )


def _transcription_from_row(row: dict[str, Any]) -> Transcription:
    return Transcription(
        id=int(row["id"]),
        meeting_id=int(row["meeting_id"]),
        timestamp=_parse_datetime(row["timestamp"]),
        content=row["content"],
        speaker=row.get("speaker"),
    )


def _speaker_from_row(row: dict[str, Any]) -> Speaker:
    return Speaker(
        id=int(row["id"]),
        meeting_id=int(row["meeting_id"]),
        name=row["name"],
        initials=row["initials"],
        color=row["color"],
    )


class SupabaseMeetingStore:
    """Stores records in the ``meetings``, ``transcriptions`` and ``speakers`` tables."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _rows(self, result: Any) -> list[dict[str, Any]]:
        # Supabase .data is typed as JSON (broad union); cast to concrete type.
        return cast(list[dict[str, Any]], result.data or [])

    # Meetings

    def get_meeting(self, meeting_id: int) -> Meeting | None:
        result = self._client.table("meetings").select("*").eq("id", meeting_id).execute()
        rows = self._rows(result)
        return _meeting_from_row(rows[0]) if rows else None

    def list_meetings(self, user_id: int) -> list[Meeting]:
        result = (
            self._client.table("meetings")
            .select("*")
            .eq("user_id", user_id)
            .order("date", desc=True)
            .execute()
        )
        return [_meeting_from_row(row) for row in self._rows(result)]

    def create_meeting(self, name: str, user_id: int, date: datetime) -> Meeting:
        result = (
            self._client.table("meetings")
            .insert({"name": name, "user_id": user_id, "date": date.isoformat(), "duration": 0})
            .execute()
        )
        return _meeting_from_row(self._rows(result)[0])

    def update_meeting(self, meeting_id: int, **fields: Any) -> Meeting | None:
        changes = {k: v for k, v in fields.items() if k in MEETING_UPDATABLE_FIELDS}
        if isinstance(changes.get("date"), datetime):
            changes["date"] = changes["date"].isoformat()
        if not changes:
            return self.get_meeting(meeting_id)
        result = self._client.table("meetings").update(changes).eq("id", meeting_id).execute()
        rows = self._rows(result)
        return _meeting_from_row(rows[0]) if rows else None

    def delete_meeting(self, meeting_id: int) -> bool:
        result = self._client.table("meetings").delete().eq("id", meeting_id).execute()
        return bool(self._rows(result))

    # Transcriptions

    def list_transcriptions(self, meeting_id: int) -> list[Transcription]:
        result = (
            self._client.table("transcriptions")
            .select("*")
            .eq("meeting_id", meeting_id)
            .order("timestamp")
            .execute()
        )
        return [_transcription_from_row(row) for row in self._rows(result)]

    def create_transcription(
        self,
        meeting_id: int,
        content: str,
        timestamp: datetime,
        speaker: str | None = None,
    ) -> Transcription:
        result = (
            self._client.table("transcriptions")
            .insert(
                {
                    "meeting_id": meeting_id,
                    "timestamp": timestamp.isoformat(),
                    "speaker": speaker,
                    "content": content,
                }
            )
            .execute()
        )
        return _transcription_from_row(self._rows(result)[0])

    def delete_transcriptions(self, meeting_id: int) -> bool:
        self._client.table("transcriptions").delete().eq("meeting_id", meeting_id).execute()
        return True

    # Speakers

    def list_speakers(self, meeting_id: int) -> list[Speaker]:
        result = self._client.table("speakers").select("*").eq("meeting_id", meeting_id).execute()
        return [_speaker_from_row(row) for row in self._rows(result)]

    def create_speaker(self, meeting_id: int, name: str, initials: str, color: str) -> Speaker:
        result = (
            self._client.table("speakers")
            .insert({"meeting_id": meeting_id, "name": name, "initials": initials, "color": color})
            .execute()
        )
        return _speaker_from_row(self._rows(result)[0])

    def delete_speakers(self, meeting_id: int) -> bool:
        self._client.table("speakers").delete().eq("meeting_id", meeting_id).execute()
        return True
