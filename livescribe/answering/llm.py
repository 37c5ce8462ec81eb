"""LLM-powered answers to questions asked during a live meeting."""

from __future__ import annotations

import logging

import anthropic
import openai
from anthropic.types import TextBlock

from livescribe.config import settings
from livescribe.pipeline_config import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant helping with questions during a meeting. "
    "Provide concise, helpful answers to questions. If you're not sure about "
    "something, be honest about your limitations.\n"
    "Try to keep your responses brief and to the point, as this is being used "
    "during a live meeting."
)

# Fixed user-facing messages returned in place of an answer
EMPTY_RESPONSE_MESSAGE = "No response from the assistant."
QUOTA_EXCEEDED_MESSAGE = "API quota exceeded. Please check your API key or billing details."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a few moments."
INVALID_API_KEY_MESSAGE = "Invalid API key. Please check your API key configuration."
GENERIC_ERROR_MESSAGE = "Error getting a response from the assistant. Please try again later."


def describe_llm_error(exc: openai.APIError | anthropic.APIError) -> str:
    """Map an LLM SDK error to the fixed message shown in place of an answer."""
    code = getattr(exc, "code", None)
    status = getattr(exc, "status_code", None)

    if code == "insufficient_quota":
        return QUOTA_EXCEEDED_MESSAGE
    if status == 429:
        return RATE_LIMIT_MESSAGE
    if code == "invalid_api_key" or isinstance(
        exc, (openai.AuthenticationError, anthropic.AuthenticationError)
    ):
        return INVALID_API_KEY_MESSAGE
    return GENERIC_ERROR_MESSAGE


def _openai_answer(message: str, system_prompt: str) -> str:
    client = openai.OpenAI(api_key=settings.openai_api_key)
    response = client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ],
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
    return response.choices[0].message.content or EMPTY_RESPONSE_MESSAGE


def _anthropic_answer(message: str, system_prompt: str) -> str:
    client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
    response = client.messages.create(
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        system=system_prompt,
        messages=[{"role": "user", "content": message}],
    )
    block = response.content[0] if response.content else None
    if not isinstance(block, TextBlock) or not block.text:
        return EMPTY_RESPONSE_MESSAGE
    return block.text


def get_answer(message: str, custom_prompt: str | None = None) -> str:
    """Answer a meeting question with the configured LLM provider.

    SDK errors are logged and converted into one of the fixed messages above,
    so callers always receive text to show.

    Args:
        message: The question as transcribed.
        custom_prompt: Optional system prompt replacing :data:`DEFAULT_SYSTEM_PROMPT`.

    Returns:
        The answer text, or a fixed error message.
    """
    system_prompt = custom_prompt or DEFAULT_SYSTEM_PROMPT
    provider = LLMProvider(settings.llm_provider)

    try:
        if provider is LLMProvider.ANTHROPIC:
            return _anthropic_answer(message, system_prompt)
        return _openai_answer(message, system_prompt)
    except (openai.APIError, anthropic.APIError) as exc:
        logger.exception("Error calling %s for a meeting question", provider.value)
        return describe_llm_error(exc)
