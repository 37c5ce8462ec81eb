"""Claude-powered meeting summary: overview, key points, and action items."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from anthropic import Anthropic

from livescribe.config import settings

# Tool definition for Claude structured output
SUMMARY_TOOL: dict[str, Any] = {
    "name": "store_meeting_summary",
    "description": (
        "Store the summary of a meeting transcript. "
        "Call this once with the overview, key points, and action items."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "summary": {
                "type": "string",
                "description": "Two or three sentence overview of the meeting.",
            },
            "key_points": {
                "type": "array",
                "description": "Main points, figures, and conclusions discussed.",
                "items": {"type": "string"},
            },
            "action_items": {
                "type": "array",
                "description": "Tasks someone agreed to do.",
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {
                            "type": "string",
                            "description": "The task, naming the owner when known.",
                        },
                        "assignee": {
                            "type": "string",
                            "description": "Person responsible (omit if unassigned).",
                        },
                    },
                    "required": ["text"],
                },
            },
        },
        "required": ["summary", "key_points", "action_items"],
    },
}

SYSTEM_PROMPT = (
    "You are a meeting assistant. Summarize the meeting transcript provided.\n\n"
    "Produce:\n"
    "1. **Summary**: a short overview of the meeting.\n"
    "2. **Key points**: the main facts and conclusions.\n"
    "3. **Action items**: tasks someone agreed to do, with the owner when mentioned.\n\n"
    "Use the store_meeting_summary tool to return your results. "
    "Only include items clearly supported by the transcript."
)


@dataclass
class ActionItem:
    """A follow-up task extracted from a meeting."""

    text: str
    assignee: str | None = None
    completed: bool = False


@dataclass
class MeetingSummary:
    """Structured summary of one meeting."""

    summary: str
    key_points: list[str] = field(default_factory=list)
    action_items: list[ActionItem] = field(default_factory=list)

    def key_points_text(self) -> str:
        """Key points as stored on the meeting: one per line."""
        return "\n".join(self.key_points)

    def action_items_json(self) -> str:
        """Action items as stored on the meeting: a JSON list with ids."""
        return json.dumps(
            [
                {
                    "id": str(i),
                    "text": item.text,
                    "assignee": item.assignee,
                    "completed": item.completed,
                }
                for i, item in enumerate(self.action_items, 1)
            ]
        )


def summarize_transcript(transcript: str) -> MeetingSummary:
    """Summarize a meeting transcript using Claude.

    Args:
        transcript: The exported plain-text transcript.

    Returns:
        The parsed MeetingSummary.

    Raises:
        ValueError: Claude did not call the summary tool.
    """
    client = Anthropic(api_key=settings.anthropic_api_key)

    response = client.messages.create(
        model=settings.llm_model,
        max_tokens=2048,
        system=SYSTEM_PROMPT,
        tools=[SUMMARY_TOOL],
        tool_choice={"type": "tool", "name": "store_meeting_summary"},
        messages=[
            {
                "role": "user",
                "content": f"Summarize this meeting transcript:\n\n{transcript}",
            }
        ],
    )

    return _parse_tool_response(response)


def _parse_tool_response(response: Any) -> MeetingSummary:
    """Parse the Claude tool_use response into a MeetingSummary."""
    for block in response.content:
        if block.type != "tool_use":
            continue
        if block.name != "store_meeting_summary":
            continue

        data = block.input
        if isinstance(data, str):
            data = json.loads(data)

        return MeetingSummary(
            summary=data.get("summary", ""),
            key_points=[str(p) for p in data.get("key_points", [])],
            action_items=[
                ActionItem(text=item["text"], assignee=item.get("assignee"))
                for item in data.get("action_items", [])
            ],
        )

    raise ValueError("Claude response did not contain a store_meeting_summary tool call")
