"""Live session WebSocket: stream fragments in, receive transcriptions and answers out.

Client messages::

    {"type": "fragment", "content": "...", "speaker": "...", "confidence": 0.9}
    {"type": "config", "enabled": true, "autoDetectQuestions": true, "customPrompt": "..."}
    {"type": "dismiss"}

Server messages are ``transcription`` (each recorded fragment), ``answer``
(every dispatcher transition) and ``error`` (malformed client input).
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from livescribe.answering.client import AnsweringClient
from livescribe.answering.dispatcher import AnswerDispatcher, AnswerExchange, DispatchState
from livescribe.api.deps import get_answering_client, get_store
from livescribe.api.models import LiveConfigMessage, LiveFragmentMessage, TranscriptionResponse
from livescribe.pipeline import LiveTranscriptionPipeline
from livescribe.storage.base import MeetingStore
from livescribe.transcript.models import Fragment
from livescribe.transcript.sources import QueueTranscriptSource

logger = logging.getLogger(__name__)

router = APIRouter()

# Close code sent when the meeting does not exist
MEETING_NOT_FOUND_CLOSE_CODE = 4404

# How long a disconnected session waits for in-flight recordings and answers
DISCONNECT_DRAIN_SECONDS = 5.0


def _exchange_payload(exchange: AnswerExchange | None) -> dict[str, Any] | None:
    if exchange is None:
        return None
    return {
        "originalMessage": exchange.original_message,
        "response": exchange.response,
        "isQuestion": exchange.is_question,
        "sequence": exchange.sequence,
    }


class LiveSession:
    """Wires one WebSocket to its own pipeline, source, and outbound queue."""

    def __init__(
        self,
        websocket: WebSocket,
        meeting_id: int,
        store: MeetingStore,
        answering: AnsweringClient,
        drain_timeout: float = DISCONNECT_DRAIN_SECONDS,
    ) -> None:
        self.websocket = websocket
        self.drain_timeout = drain_timeout
        self.meeting_id = meeting_id
        self.store = store
        self.source = QueueTranscriptSource()
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.pipeline = LiveTranscriptionPipeline(
            AnswerDispatcher(answering, on_change=self._on_answer_change),
            recorder=self._record,
        )

    def _on_answer_change(self, state: DispatchState, exchange: AnswerExchange | None) -> None:
        self.outbox.put_nowait(
            {"type": "answer", "state": state.value, "exchange": _exchange_payload(exchange)}
        )

    async def _record(self, fragment: Fragment) -> None:
        try:
            transcription = self.store.create_transcription(
                meeting_id=self.meeting_id,
                content=fragment.content,
                timestamp=fragment.timestamp or datetime.now(timezone.utc),
                speaker=fragment.speaker,
            )
        except Exception as exc:
            logger.exception("Failed to store transcription for meeting %d", self.meeting_id)
            self.outbox.put_nowait({"type": "error", "detail": f"Failed to add transcription: {exc}"})
            return
        payload = TranscriptionResponse.from_record(transcription).model_dump(
            mode="json", by_alias=True
        )
        self.outbox.put_nowait({"type": "transcription", "transcription": payload})

    async def _send_loop(self) -> None:
        while True:
            message = await self.outbox.get()
            await self.websocket.send_json(message)

    def _handle(self, message: dict[str, Any]) -> None:
        kind = message.get("type")
        if kind == "fragment":
            data = LiveFragmentMessage.model_validate(message)
            self.source.push(
                Fragment(
                    content=data.content,
                    speaker=data.speaker,
                    timestamp=data.timestamp,
                    confidence=data.confidence,
                )
            )
        elif kind == "config":
            data = LiveConfigMessage.model_validate(message)
            changes = data.model_dump(exclude_unset=True)
            self.pipeline.update_config(replace(self.pipeline.config, **changes))
        elif kind == "dismiss":
            self.pipeline.dismiss()
        else:
            self.outbox.put_nowait({"type": "error", "detail": f"Unknown message type: {kind!r}"})

    async def run(self) -> None:
        sender = asyncio.create_task(self._send_loop())
        runner = asyncio.create_task(self.pipeline.run(self.source))
        try:
            while True:
                raw = await self.websocket.receive_text()
                try:
                    message = json.loads(raw)
                    if not isinstance(message, dict):
                        raise ValueError("message must be a JSON object")
                    self._handle(message)
                except ValidationError as exc:
                    errors = exc.errors(include_url=False, include_context=False)
                    self.outbox.put_nowait({"type": "error", "detail": errors})
                except ValueError as exc:
                    self.outbox.put_nowait({"type": "error", "detail": str(exc)})
        except WebSocketDisconnect:
            logger.info("Live session for meeting %d disconnected", self.meeting_id)
        finally:
            sender.cancel()
            await asyncio.gather(sender, return_exceptions=True)
            self.source.close()
            try:
                await asyncio.wait_for(runner, timeout=self.drain_timeout)
            except TimeoutError:
                logger.warning(
                    "Live session for meeting %d abandoned pending work after %.1fs",
                    self.meeting_id,
                    self.drain_timeout,
                )


@router.websocket("/api/meetings/{meeting_id}/live")
async def live_session(
    websocket: WebSocket,
    meeting_id: int,
    store: Annotated[MeetingStore, Depends(get_store)],
    answering: Annotated[AnsweringClient, Depends(get_answering_client)],
) -> None:
    await websocket.accept()
    if store.get_meeting(meeting_id) is None:
        await websocket.close(code=MEETING_NOT_FOUND_CLOSE_CODE, reason="Meeting not found")
        return

    await LiveSession(websocket, meeting_id, store, answering).run()
