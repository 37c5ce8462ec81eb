"""Answering service endpoint: answer questions detected in a live meeting."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from livescribe.answering.llm import get_answer
from livescribe.api.models import ChatRequest, ChatResponse
from livescribe.transcript.classifier import is_likely_question

router = APIRouter()

NOT_A_QUESTION_MESSAGE = "Message does not appear to be a question."


@router.post("/api/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """Answer a message if it reads as a question.

    LLM failures come back as a fixed message in ``response`` with status
    200, so the live pipeline always has something to display.
    """
    if not is_likely_question(request.message):
        return ChatResponse(
            response=None,
            is_question=False,
            original_message=request.message,
            message=NOT_A_QUESTION_MESSAGE,
        )

    # Run the synchronous SDK call in a thread
    answer = await asyncio.to_thread(get_answer, request.message, request.prompt)
    return ChatResponse(
        response=answer,
        is_question=True,
        original_message=request.message,
    )
