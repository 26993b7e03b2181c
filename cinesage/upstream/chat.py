"""
Chat assistant backed by an OpenAI-compatible chat-completions endpoint.
"""

from typing import Any, Optional

import httpx

from cinesage.config import CHAT_COMPLETIONS_URL, DEFAULT_CHAT_MODEL
from cinesage.errors import Internal, RateLimited, UpstreamError, UpstreamUnavailable
from cinesage.logger import get_logger
from cinesage.upstream.omdb import retry_after_seconds

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant for CineSage, a movie search and recommendation app. "
    "Help users find movies, understand features, and get recommendations. "
    "Be friendly and concise."
)
FALLBACK_REPLY = (
    "I'm here to help! Could you rephrase your question? I can help you search for "
    "movies, get recommendations, or learn about CineSage features."
)
HISTORY_WINDOW = 10
MIN_REPLY_LENGTH = 3


def build_messages(message: str, history: list[dict[str, Any]]) -> list[dict[str, str]]:
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for entry in history[-HISTORY_WINDOW:]:
        role = "user" if entry.get("sender") == "user" else "assistant"
        messages.append({"role": role, "content": str(entry.get("text") or "")})
    messages.append({"role": "user", "content": message})
    return messages


def extract_reply(data: Any) -> str:
    reply = ""
    if isinstance(data, str):
        reply = data
    elif isinstance(data, dict):
        choices = data.get("choices") or []
        if choices:
            reply = (choices[0].get("message") or {}).get("content") or ""
        elif data.get("message"):
            reply = str(data["message"])

    reply = reply.strip()
    if len(reply) < MIN_REPLY_LENGTH:
        return FALLBACK_REPLY
    return reply


class ChatClient:
    def __init__(
        self,
        token: Optional[str],
        model: str = DEFAULT_CHAT_MODEL,
        url: str = CHAT_COMPLETIONS_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.model = model
        self.url = url
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    async def reply(self, message: str, history: list[dict[str, Any]]) -> str:
        if not self.token:
            raise Internal(
                "Chat service token is not configured. Set HF_TOKEN in the environment."
            )

        payload = {
            "model": self.model,
            "messages": build_messages(message, history),
            "temperature": 0.7,
            "max_tokens": 300,
        }
        try:
            response = await self._client.post(
                self.url, json=payload, headers={"Authorization": f"Bearer {self.token}"}
            )
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable("The chat service timed out", detail=str(exc))
        except httpx.RequestError as exc:
            raise UpstreamUnavailable(
                "Network error: unable to connect to the chat service",
                detail=str(exc),
                status_code=502,
            )

        if response.status_code == 429:
            raise RateLimited(
                "Rate limit exceeded. Please try again in a moment.",
                retry_after=retry_after_seconds(response),
            )
        if response.status_code in (502, 503):
            raise UpstreamUnavailable(
                "Service temporarily unavailable. Please try again in a few seconds."
            )
        if not response.is_success:
            logger.error(f"chat service returned {response.status_code}: {response.text[:300]}")
            raise UpstreamError(
                "Failed to get AI response",
                detail=f"chat service error: {response.status_code} - {response.text[:300]}",
            )

        try:
            data = response.json()
        except ValueError:
            data = response.text
        return extract_reply(data)

    async def aclose(self) -> None:
        await self._client.aclose()
