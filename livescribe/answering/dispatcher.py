"""Answer dispatcher: one live question/answer exchange per meeting session.

Every dispatch is tagged with a monotonically increasing sequence number.
Answering calls are never cancelled; when one completes, its result is
applied only if its exchange is still the live one and carries the latest
sequence number.  Anything else (superseded by a newer question, or
dismissed) is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from livescribe.answering.client import SERVICE_ERROR_MESSAGE, AnsweringClient, ChatReply
from livescribe.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "No response available"


class DispatchState(StrEnum):
    """Visible state of the dispatcher."""

    IDLE = "idle"
    LOADING = "loading"
    RESOLVED = "resolved"


@dataclass
class AnswerExchange:
    """One question and, once the answering call completes, its answer."""

    original_message: str
    response: str | None = None
    is_question: bool = True
    sequence: int = 0


ChangeListener = Callable[[DispatchState, "AnswerExchange | None"], None]


class AnswerDispatcher:
    """Sends classified questions to the answering service, last write wins."""

    def __init__(self, client: AnsweringClient, on_change: ChangeListener | None = None) -> None:
        self._client = client
        self._on_change = on_change
        self._sequence = 0
        self._exchange: AnswerExchange | None = None
        self._state = DispatchState.IDLE

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def exchange(self) -> AnswerExchange | None:
        """The live exchange, or None when idle."""
        return self._exchange

    @property
    def sequence(self) -> int:
        return self._sequence

    def _set(self, state: DispatchState, exchange: AnswerExchange | None) -> None:
        self._state = state
        self._exchange = exchange
        if self._on_change is not None:
            self._on_change(state, exchange)

    def _is_current(self, exchange: AnswerExchange) -> bool:
        return self._exchange is exchange and exchange.sequence == self._sequence

    async def dispatch(self, question: str, config: PipelineConfig) -> AnswerExchange:
        """Ask the answering service about ``question``.

        The new exchange replaces whatever was shown immediately (state
        ``loading``).  Exactly one answering call is made and it is never
        retried. Failures, whether reported by the client or raised by it,
        resolve as answer text.

        Args:
            question: The fragment text classified as a question.
            config: Configuration snapshot for this cycle (custom prompt).

        Returns:
            The exchange created for this dispatch.  Its ``response`` stays
            None when the result arrived after a newer dispatch or a dismissal.
        """
        self._sequence += 1
        exchange = AnswerExchange(original_message=question, sequence=self._sequence)
        self._set(DispatchState.LOADING, exchange)

        try:
            reply = await self._client.ask(question, config.custom_prompt)
        except Exception:
            logger.exception("Answering call for exchange %d failed", exchange.sequence)
            reply = ChatReply(
                response=SERVICE_ERROR_MESSAGE, is_question=True, original_message=question
            )

        if not self._is_current(exchange):
            logger.debug(
                "Discarding stale answer for exchange %d (latest is %d)",
                exchange.sequence,
                self._sequence,
            )
            return exchange

        exchange.response = NO_RESPONSE_MESSAGE if reply.response is None else reply.response
        exchange.is_question = reply.is_question
        self._set(DispatchState.RESOLVED, exchange)
        return exchange

    def dismiss(self) -> None:
        """Clear the live exchange; a pending answer for it will be discarded."""
        if self._exchange is None:
            return
        self._set(DispatchState.IDLE, None)
