"""Transcript sources: producers of the growing fragment sequence.

Every source yields the *full* ordered fragment list observed so far each
time something new arrives.  Previously delivered fragments are never
reordered or removed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from livescribe.config import settings
from livescribe.transcript.models import Fragment

logger = logging.getLogger(__name__)


class TranscriptionError(Exception):
    """Raised when recorded audio cannot be transcribed."""


class TranscriptSource(Protocol):
    """Produces the growing fragment sequence for one meeting session."""

    def batches(self) -> AsyncIterator[list[Fragment]]: ...


class ScriptedTranscriptSource:
    """Replays a fixed list of fragments, one every ``interval`` seconds."""

    def __init__(self, fragments: Iterable[Fragment], interval: float = 5.0) -> None:
        self._script = list(fragments)
        self.interval = interval

    async def batches(self) -> AsyncIterator[list[Fragment]]:
        delivered: list[Fragment] = []
        for fragment in self._script:
            if delivered and self.interval > 0:
                await asyncio.sleep(self.interval)
            delivered.append(fragment)
            yield list(delivered)


class QueueTranscriptSource:
    """Source fed from outside (e.g. a WebSocket) through :meth:`push`."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Fragment | None] = asyncio.Queue()
        self._closed = False

    def push(self, fragment: Fragment) -> None:
        if self._closed:
            raise RuntimeError("Cannot push to a closed transcript source")
        self._queue.put_nowait(fragment)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    async def batches(self) -> AsyncIterator[list[Fragment]]:
        delivered: list[Fragment] = []
        while True:
            fragment = await self._queue.get()
            if fragment is None:
                return
            delivered.append(fragment)
            # Coalesce everything already queued into a single batch
            while not self._queue.empty():
                queued = self._queue.get_nowait()
                if queued is None:
                    yield list(delivered)
                    return
                delivered.append(queued)
            yield list(delivered)


def _transcribe_utterances(audio: bytes | str, speaker_labels: bool) -> list[Any]:
    """Transcribe recorded audio via the AssemblyAI SDK and return its utterances.

    Raises:
        TranscriptionError: The audio was rejected or the service was unreachable.
    """
    import assemblyai as aai  # type: ignore[import-untyped]  # no stubs

    aai.settings.api_key = settings.assemblyai_api_key
    transcriber = aai.Transcriber()
    # speaker_labels=True enables diarization; without it the API returns a
    # single flat text block with no speaker attribution.
    config = aai.TranscriptionConfig(speaker_labels=speaker_labels)

    try:
        transcript = transcriber.transcribe(audio, config=config)
    except Exception as exc:
        raise TranscriptionError(f"Transcription service unavailable: {exc}") from exc

    if transcript.status == aai.TranscriptStatus.error:
        raise TranscriptionError(f"Transcription failed: {transcript.error}")

    if transcript.utterances:
        return list(transcript.utterances)
    if transcript.text:
        # No diarization available: emit the whole text as one utterance
        return [_FlatUtterance(text=transcript.text, confidence=transcript.confidence)]
    return []


class _FlatUtterance:
    def __init__(self, text: str, confidence: float | None) -> None:
        self.text = text
        self.speaker = None
        self.start = 0
        self.confidence = confidence


class AssemblyAITranscriptSource:
    """Transcribes recorded audio with AssemblyAI and emits its utterances in order.

    ``audio`` is raw bytes, a local path or a URL.  Utterance offsets are
    added to ``started_at`` to timestamp each fragment.
    """

    def __init__(
        self,
        audio: bytes | str,
        speaker_labels: bool = True,
        interval: float = 0.0,
        started_at: datetime | None = None,
    ) -> None:
        self.audio = audio
        self.speaker_labels = speaker_labels
        self.interval = interval
        self.started_at = started_at or datetime.now(timezone.utc)

    def _to_fragment(self, utterance: Any) -> Fragment:
        speaker = f"Speaker {utterance.speaker}" if utterance.speaker else None
        confidence = utterance.confidence
        if confidence is not None:
            confidence = min(max(float(confidence), 0.0), 1.0)
        return Fragment(
            content=utterance.text,
            speaker=speaker,
            timestamp=self.started_at + timedelta(milliseconds=utterance.start or 0),
            confidence=confidence,
        )

    async def batches(self) -> AsyncIterator[list[Fragment]]:
        # Run the synchronous SDK in a thread to keep the event loop free
        utterances = await asyncio.to_thread(
            _transcribe_utterances, self.audio, self.speaker_labels
        )
        logger.info("Transcribed %d utterances", len(utterances))

        delivered: list[Fragment] = []
        for utterance in utterances:
            if delivered and self.interval > 0:
                await asyncio.sleep(self.interval)
            delivered.append(self._to_fragment(utterance))
            yield list(delivered)
