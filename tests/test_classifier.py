"""Tests for question classification (no external APIs required)."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from livescribe.transcript.classifier import (
    QUESTION_PHRASES,
    classify,
    is_likely_question,
    latest_question,
)
from livescribe.transcript.models import Fragment

# Shared corpus: (text, expected classification)
CORPUS: list[tuple[str, bool]] = [
    ("What time is it?", True),
    ("can you help me", True),
    ("I think we should proceed", False),
    ("I wonder how this works", True),
    ("  Is that ready?  ", True),
    ("WHY did the build fail", True),
    ("Do you know the deadline", True),
    ("are there any blockers left", True),
    ("let me show how the dashboard works", True),
    ("Whatever works for you.", False),
    ("Somehow it shipped on time", False),
    ("The whole team agreed", False),
    ("how", False),
    ("", False),
    ("Sounds good. I'll prepare some initial ideas.", False),
    ("We need to decide which vendor to pick", True),
]


class TestIsLikelyQuestion:
    @pytest.mark.parametrize(("text", "expected"), CORPUS)
    def test_corpus(self, text: str, expected: bool) -> None:
        assert is_likely_question(text) is expected

    def test_question_mark_wins(self) -> None:
        assert is_likely_question("We ship Friday?")

    def test_phrase_must_be_space_delimited(self) -> None:
        """Phrase words embedded in longer words do not count."""
        assert not is_likely_question("nowhere to be found")
        assert not is_likely_question("anyhow we continue")

    def test_every_phrase_matches_at_start(self) -> None:
        for phrase in QUESTION_PHRASES:
            assert is_likely_question(f"{phrase} something"), phrase

    def test_every_phrase_matches_mid_sentence(self) -> None:
        for phrase in QUESTION_PHRASES:
            assert is_likely_question(f"tell me {phrase} something"), phrase

    def test_classify_alias(self) -> None:
        assert classify is is_likely_question


class TestLatestQuestion:
    def test_last_question_in_batch_wins(self) -> None:
        fragments = [
            Fragment(content="What about Q3?"),
            Fragment(content="Numbers look good."),
            Fragment(content="Can you share the report?"),
            Fragment(content="Thanks."),
        ]
        assert latest_question(fragments) is fragments[2]

    def test_no_question(self) -> None:
        assert latest_question([Fragment(content="All good.")]) is None

    def test_empty_batch(self) -> None:
        assert latest_question([]) is None


class TestServerAgreement:
    """The /api/chat endpoint must classify exactly like the pipeline does."""

    @pytest.mark.parametrize(("text", "expected"), [c for c in CORPUS if c[0].strip()])
    def test_chat_endpoint_agrees(self, client: TestClient, text: str, expected: bool) -> None:
        with patch("livescribe.api.routes.chat.get_answer", return_value="An answer."):
            response = client.post("/api/chat", json={"message": text})

        assert response.status_code == 200
        assert response.json()["isQuestion"] is is_likely_question(text) is expected
