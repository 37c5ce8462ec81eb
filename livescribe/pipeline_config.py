"""Pipeline configuration: backend/provider enums and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StorageBackend(str, Enum):
    """Available persistence backends for meetings and transcriptions."""

    MEMORY = "memory"
    SUPABASE = "supabase"


class LLMProvider(str, Enum):
    """Available providers for answering detected questions."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable snapshot of the question-answering settings for one session.

    Supplied by the settings collaborator; the pipeline reads a snapshot at
    the start of every processing cycle and never applies a change
    retroactively.
    """

    enabled: bool = True
    auto_detect_questions: bool = True
    custom_prompt: str | None = None

    @property
    def answers_questions(self) -> bool:
        return self.enabled and self.auto_detect_questions
