"""Live transcription pipeline: dedup -> record -> classify -> dispatch.

One pipeline instance exists per active meeting session and owns its
cursor, configuration snapshot, and answer dispatcher.  Everything runs on
a single event loop; only the answering call suspends.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from livescribe.answering.dispatcher import AnswerDispatcher, AnswerExchange
from livescribe.pipeline_config import PipelineConfig
from livescribe.transcript.classifier import latest_question
from livescribe.transcript.dedup import START_CURSOR, advance
from livescribe.transcript.models import Fragment
from livescribe.transcript.sources import TranscriptSource

logger = logging.getLogger(__name__)

# Persistence collaborator: receives each newly observed fragment
FragmentRecorder = Callable[[Fragment], Awaitable[object]]


class LiveTranscriptionPipeline:
    """Processes fragment batches for a single meeting session."""

    def __init__(
        self,
        dispatcher: AnswerDispatcher,
        recorder: FragmentRecorder | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self._recorder = recorder
        self._config = config or PipelineConfig()
        self._cursor = START_CURSOR
        self._background: set[asyncio.Task[object]] = set()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def update_config(self, config: PipelineConfig) -> None:
        """Replace the configuration; applies from the next processing cycle."""
        self._config = config

    def _track(self, task: asyncio.Task[object]) -> None:
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _record(self, fragment: Fragment) -> None:
        recorder = self._recorder
        if recorder is None:
            return

        async def _run() -> None:
            try:
                await recorder(fragment)
            except Exception:
                # Persistence failures are reported by the recorder; not retried here.
                logger.exception("Recording fragment failed")

        self._track(asyncio.create_task(_run()))

    def process(self, fragments: Sequence[Fragment]) -> asyncio.Task[AnswerExchange] | None:
        """Run one processing cycle over the full fragment sequence.

        Must be called from within a running event loop.

        Args:
            fragments: Every fragment the source has produced so far.

        Returns:
            The scheduled dispatch task when the batch contained a question
            and answering is enabled, otherwise None.
        """
        config = self._config
        new_fragments, self._cursor = advance(fragments, self._cursor)
        if not new_fragments:
            return None

        for fragment in new_fragments:
            self._record(fragment)

        if not config.answers_questions:
            return None

        question = latest_question(new_fragments)
        if question is None:
            return None

        logger.info("Question detected: %s", question.content)
        task = asyncio.create_task(self.dispatcher.dispatch(question.content, config))
        self._track(task)  # type: ignore[arg-type]
        return task

    def dismiss(self) -> None:
        self.dispatcher.dismiss()

    async def drain(self) -> None:
        """Wait for outstanding recordings and dispatches to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def run(self, source: TranscriptSource) -> None:
        """Feed every batch from ``source`` through the pipeline until it ends."""
        async for fragments in source.batches():
            self.process(fragments)
        await self.drain()
