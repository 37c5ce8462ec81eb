"""Tests for the fragment deduplicator."""

from __future__ import annotations

import pytest

from livescribe.transcript.dedup import START_CURSOR, advance
from livescribe.transcript.models import Fragment


def _fragments(n: int) -> list[Fragment]:
    return [Fragment(content=f"line {i}") for i in range(n)]


class TestAdvance:
    @pytest.mark.parametrize(("length", "cursor"), [(0, -1), (1, -1), (5, -1), (5, 1), (5, 4)])
    def test_returns_suffix_after_cursor(self, length: int, cursor: int) -> None:
        fragments = _fragments(length)
        new, new_cursor = advance(fragments, cursor)

        assert len(new) == max(0, length - 1 - cursor)
        if new:
            assert new[0] is fragments[cursor + 1]
            assert new_cursor == length - 1
        else:
            assert new_cursor == cursor

    def test_idempotent_without_new_fragments(self) -> None:
        fragments = _fragments(3)
        first, cursor = advance(fragments, START_CURSOR)
        assert len(first) == 3

        second, same_cursor = advance(fragments, cursor)
        assert second == []
        assert same_cursor == cursor

        third, _ = advance(fragments, same_cursor)
        assert third == []

    def test_growing_sequence_processed_once(self) -> None:
        fragments = _fragments(2)
        seen, cursor = advance(fragments, START_CURSOR)

        fragments = fragments + [Fragment(content="late 1"), Fragment(content="late 2")]
        new, cursor = advance(fragments, cursor)

        assert [f.content for f in new] == ["late 1", "late 2"]
        assert cursor == 3
        assert len(seen) + len(new) == len(fragments)

    def test_returns_copy(self) -> None:
        fragments = _fragments(2)
        new, _ = advance(fragments, START_CURSOR)
        new.append(Fragment(content="extra"))
        assert len(fragments) == 2

    def test_shrunk_sequence_resets_cursor(self) -> None:
        new, cursor = advance(_fragments(2), 4)
        assert new == []
        assert cursor == START_CURSOR

    def test_rescans_after_reset(self) -> None:
        fragments = _fragments(2)
        _, cursor = advance(fragments, 4)
        new, cursor = advance(fragments, cursor)
        assert len(new) == 2
        assert cursor == 1

    def test_cursor_below_start_is_clamped(self) -> None:
        new, cursor = advance(_fragments(2), -7)
        assert len(new) == 2
        assert cursor == 1


class TestFragment:
    def test_confidence_bounds(self) -> None:
        assert Fragment(content="ok", confidence=0.0).confidence == 0.0
        assert Fragment(content="ok", confidence=1.0).confidence == 1.0
        with pytest.raises(ValueError):
            Fragment(content="bad", confidence=1.5)

    def test_immutable(self) -> None:
        fragment = Fragment(content="hello")
        with pytest.raises(AttributeError):
            fragment.content = "changed"  # type: ignore[misc]
