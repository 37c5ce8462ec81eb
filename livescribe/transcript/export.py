"""Plain-text transcript export."""

from __future__ import annotations

from collections.abc import Iterable

from livescribe.storage.models import Transcription
from livescribe.transcript.speakers import UNKNOWN_SPEAKER


def format_transcript(transcriptions: Iterable[Transcription]) -> str:
    """Render transcriptions as ``[HH:MM:SS] Speaker: content`` blocks.

    Entries are separated by a blank line; lines without a speaker are
    attributed to ``Unknown``.
    """
    return "\n\n".join(
        f"[{t.timestamp.strftime('%H:%M:%S')}] {t.speaker or UNKNOWN_SPEAKER}: {t.content}"
        for t in transcriptions
    )
