"""HTTP client for the answering service (``POST /api/chat``)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a few moments."
SERVICE_ERROR_MESSAGE = (
    "Error communicating with the answering service. Please try again later."
)


@dataclass
class ChatReply:
    """Parsed reply from the answering service."""

    response: str | None
    is_question: bool
    original_message: str | None = None
    message: str | None = None


class AnsweringClient(Protocol):
    """Anything that can answer a question on behalf of the dispatcher."""

    async def ask(self, message: str, prompt: str | None = None) -> ChatReply: ...


class HttpAnsweringClient:
    """Posts questions to the answering service over HTTP.

    Never raises: transport failures, non-success statuses and unreadable
    bodies come back as a :class:`ChatReply` carrying a fixed message.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._http_client = http_client

    async def ask(self, message: str, prompt: str | None = None) -> ChatReply:
        payload: dict[str, str] = {"message": message}
        if prompt:
            payload["prompt"] = prompt

        try:
            if self._http_client is not None:
                r = await self._http_client.post(self.url, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    r = await client.post(self.url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            data: Any = r.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Answering service returned %d", e.response.status_code)
            if e.response.status_code == 429:
                return _failure(message, RATE_LIMIT_MESSAGE)
            return _failure(message, SERVICE_ERROR_MESSAGE)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Answering service request failed: %s", e)
            return _failure(message, SERVICE_ERROR_MESSAGE)

        if not isinstance(data, dict):
            logger.warning("Answering service returned a non-object body")
            return _failure(message, SERVICE_ERROR_MESSAGE)

        response = data.get("response")
        is_question = data.get("isQuestion", False)
        if not (response is None or isinstance(response, str)) or not isinstance(is_question, bool):
            logger.warning("Answering service returned a malformed body: %r", data)
            return _failure(message, SERVICE_ERROR_MESSAGE)

        return ChatReply(
            response=response,
            is_question=is_question,
            original_message=data.get("originalMessage", message),
            message=data.get("message"),
        )


def _failure(message: str, text: str) -> ChatReply:
    return ChatReply(response=text, is_question=True, original_message=message)
