"""Speaker display helpers: initials and a stable colour per speaker name."""

from __future__ import annotations

# Background/text class pairs, indexed by a hash of the speaker name
SPEAKER_COLORS: list[str] = [
    "bg-blue-100 text-blue-600",
    "bg-purple-100 text-purple-600",
    "bg-green-100 text-green-600",
    "bg-yellow-100 text-yellow-600",
    "bg-red-100 text-red-600",
]

UNKNOWN_SPEAKER = "Unknown"


def speaker_initials(name: str) -> str:
    """Return the upper-cased first letter of each space-separated name part."""
    return "".join(part[0] for part in name.split(" ") if part).upper()


def speaker_color(name: str) -> str:
    """Return the colour assigned to ``name``; the same name always maps to the same colour."""
    name_hash = sum(ord(char) for char in name)
    return SPEAKER_COLORS[name_hash % len(SPEAKER_COLORS)]
