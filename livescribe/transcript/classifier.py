"""Question classifier: decide whether a transcript line is probably a question."""

from __future__ import annotations

from collections.abc import Sequence

from livescribe.transcript.models import Fragment

# Phrases that usually open (or sit inside) a spoken question
QUESTION_PHRASES: tuple[str, ...] = (
    "what",
    "why",
    "how",
    "when",
    "where",
    "who",
    "which",
    "can you",
    "could you",
    "would you",
    "will you",
    "is there",
    "are there",
    "do you know",
)


def is_likely_question(text: str) -> bool:
    """Classify a line of speech as a probable question.

    A line is a question if it ends with ``?`` or if, lower-cased, it starts
    with ``"<phrase> "`` or contains ``" <phrase> "`` for one of
    :data:`QUESTION_PHRASES`.  Matching is plain substring search, so
    "show me how it works" counts as a question.

    Args:
        text: The transcribed text.

    Returns:
        True if the text is probably a question.
    """
    trimmed = text.strip()
    if trimmed.endswith("?"):
        return True

    lowered = trimmed.lower()
    return any(
        lowered.startswith(f"{phrase} ") or f" {phrase} " in lowered
        for phrase in QUESTION_PHRASES
    )


classify = is_likely_question


def latest_question(fragments: Sequence[Fragment]) -> Fragment | None:
    """Return the last fragment in the batch that reads as a question."""
    for fragment in reversed(fragments):
        if is_likely_question(fragment.content):
            return fragment
    return None
