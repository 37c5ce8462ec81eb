"""Tests for the live transcription pipeline."""

from __future__ import annotations

import asyncio

from livescribe.answering.client import ChatReply
from livescribe.answering.dispatcher import AnswerDispatcher, DispatchState
from livescribe.pipeline import LiveTranscriptionPipeline
from livescribe.pipeline_config import PipelineConfig
from livescribe.transcript.models import Fragment
from livescribe.transcript.sources import ScriptedTranscriptSource


class RecordingClient:
    def __init__(self) -> None:
        self.questions: list[str] = []

    async def ask(self, message: str, prompt: str | None = None) -> ChatReply:
        self.questions.append(message)
        return ChatReply(response=f"answer to {message}", is_question=True, original_message=message)


def _pipeline(
    config: PipelineConfig | None = None,
) -> tuple[LiveTranscriptionPipeline, RecordingClient, list[Fragment]]:
    client = RecordingClient()
    recorded: list[Fragment] = []

    async def recorder(fragment: Fragment) -> None:
        recorded.append(fragment)

    pipeline = LiveTranscriptionPipeline(AnswerDispatcher(client), recorder=recorder, config=config)
    return pipeline, client, recorded


def test_initial_state() -> None:
    pipeline, _, _ = _pipeline()
    assert pipeline.cursor == -1
    assert pipeline.config == PipelineConfig()


def test_question_is_dispatched() -> None:
    pipeline, client, recorded = _pipeline()
    fragments = [Fragment(content="Welcome everyone."), Fragment(content="What is on the agenda?")]

    async def scenario() -> None:
        task = pipeline.process(fragments)
        assert task is not None
        await task
        await pipeline.drain()

    asyncio.run(scenario())

    assert client.questions == ["What is on the agenda?"]
    assert pipeline.cursor == 1
    assert recorded == fragments
    assert pipeline.dispatcher.state is DispatchState.RESOLVED


def test_only_latest_question_in_batch_is_dispatched() -> None:
    pipeline, client, _ = _pipeline()
    fragments = [
        Fragment(content="Who owns the budget?"),
        Fragment(content="Can you send the slides?"),
        Fragment(content="Thanks."),
    ]

    async def scenario() -> None:
        pipeline.process(fragments)
        await pipeline.drain()

    asyncio.run(scenario())
    assert client.questions == ["Can you send the slides?"]


def test_each_fragment_processed_once() -> None:
    pipeline, client, recorded = _pipeline()
    fragments = [Fragment(content="Why now?")]

    async def scenario() -> None:
        pipeline.process(fragments)
        assert pipeline.process(fragments) is None
        fragments.append(Fragment(content="Just checking."))
        assert pipeline.process(fragments) is None
        await pipeline.drain()

    asyncio.run(scenario())

    assert client.questions == ["Why now?"]
    assert [f.content for f in recorded] == ["Why now?", "Just checking."]
    assert pipeline.cursor == 1


def test_disabled_config_still_advances_cursor() -> None:
    pipeline, client, recorded = _pipeline(PipelineConfig(enabled=False))
    fragments = [Fragment(content="What is the plan?")]

    async def scenario() -> None:
        assert pipeline.process(fragments) is None
        pipeline.update_config(PipelineConfig(enabled=True))
        # Re-enabling does not reach back to fragments already scanned
        assert pipeline.process(fragments) is None
        fragments.append(Fragment(content="How long will it take?"))
        task = pipeline.process(fragments)
        assert task is not None
        await pipeline.drain()

    asyncio.run(scenario())

    assert client.questions == ["How long will it take?"]
    assert len(recorded) == 2


def test_auto_detect_off_skips_dispatch() -> None:
    pipeline, client, _ = _pipeline(PipelineConfig(auto_detect_questions=False))

    async def scenario() -> None:
        assert pipeline.process([Fragment(content="Where are we?")]) is None
        await pipeline.drain()

    asyncio.run(scenario())
    assert client.questions == []


def test_custom_prompt_snapshot_used_for_dispatch() -> None:
    prompts: list[str | None] = []

    class PromptClient:
        async def ask(self, message: str, prompt: str | None = None) -> ChatReply:
            prompts.append(prompt)
            return ChatReply(response="ok", is_question=True)

    pipeline = LiveTranscriptionPipeline(
        AnswerDispatcher(PromptClient()),
        config=PipelineConfig(custom_prompt="Answer like a pirate."),
    )

    async def scenario() -> None:
        pipeline.process([Fragment(content="Is there a deadline?")])
        await pipeline.drain()

    asyncio.run(scenario())
    assert prompts == ["Answer like a pirate."]


def test_recorder_failure_does_not_stop_pipeline() -> None:
    client = RecordingClient()

    async def failing_recorder(fragment: Fragment) -> None:
        raise RuntimeError("database down")

    pipeline = LiveTranscriptionPipeline(AnswerDispatcher(client), recorder=failing_recorder)

    async def scenario() -> None:
        pipeline.process([Fragment(content="Could you repeat that?")])
        await pipeline.drain()

    asyncio.run(scenario())
    assert client.questions == ["Could you repeat that?"]
    assert pipeline.dispatcher.state is DispatchState.RESOLVED


def test_pipeline_without_recorder() -> None:
    client = RecordingClient()
    pipeline = LiveTranscriptionPipeline(AnswerDispatcher(client))

    async def scenario() -> None:
        pipeline.process([Fragment(content="Noted."), Fragment(content="Any questions?")])
        await pipeline.drain()

    asyncio.run(scenario())
    assert client.questions == ["Any questions?"]
    assert pipeline.cursor == 1


def test_shrunk_sequence_is_tolerated() -> None:
    pipeline, client, _ = _pipeline()

    async def scenario() -> None:
        pipeline.process([Fragment(content="one"), Fragment(content="two")])
        assert pipeline.process([Fragment(content="one")]) is None
        assert pipeline.cursor == -1
        await pipeline.drain()

    asyncio.run(scenario())
    assert client.questions == []


def test_run_consumes_scripted_source() -> None:
    pipeline, client, recorded = _pipeline()
    script = [
        Fragment(content="Welcome to the review.", speaker="John Smith"),
        Fragment(content="Do you know the open rate?", speaker="Alex Kim"),
        Fragment(content="It was 32 percent.", speaker="Sarah Jones"),
    ]

    asyncio.run(pipeline.run(ScriptedTranscriptSource(script, interval=0)))

    assert recorded == script
    assert client.questions == ["Do you know the open rate?"]
    assert pipeline.cursor == 2


def test_dismiss_delegates_to_dispatcher() -> None:
    pipeline, _, _ = _pipeline()

    async def scenario() -> None:
        pipeline.process([Fragment(content="Which room?")])
        await pipeline.drain()

    asyncio.run(scenario())
    pipeline.dismiss()
    assert pipeline.dispatcher.state is DispatchState.IDLE
