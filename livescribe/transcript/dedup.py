"""Fragment deduplication: pick out the fragments a pipeline has not scanned yet."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from livescribe.transcript.models import Fragment

logger = logging.getLogger(__name__)

# Cursor value meaning "nothing scanned yet"
START_CURSOR = -1


def advance(fragments: Sequence[Fragment], cursor: int) -> tuple[list[Fragment], int]:
    """Return the fragments past ``cursor`` and the new cursor.

    Sources re-deliver the whole, growing fragment list on every batch, so the
    cursor (index of the last scanned fragment) is what keeps each fragment
    from being examined twice.

    Args:
        fragments: The full ordered fragment sequence observed so far.
        cursor: Index of the last fragment already scanned, ``-1`` for none.

    Returns:
        A ``(new_fragments, new_cursor)`` tuple.  When nothing is new the
        suffix is empty and the cursor is unchanged.  If the sequence has
        shrunk below the cursor, the cursor resets to ``-1`` and nothing is
        returned for this cycle.
    """
    if cursor < START_CURSOR:
        cursor = START_CURSOR

    last_index = len(fragments) - 1
    if cursor > last_index:
        logger.warning(
            "Fragment sequence shrank below cursor (cursor=%d, length=%d); resetting",
            cursor,
            len(fragments),
        )
        return [], START_CURSOR

    if cursor + 1 > last_index:
        return [], cursor

    return list(fragments[cursor + 1 :]), last_index
