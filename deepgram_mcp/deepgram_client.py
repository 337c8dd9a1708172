"""Async client for the Deepgram Speak (text-to-speech) REST API."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from . import config

logger = logging.getLogger("deepgram-mcp")

SPEAK_PATH = "/v1/speak"


@dataclass
class SpeakResponse:
    """Audio returned by Deepgram Speak plus the metadata headers it sends."""

    audio: Optional[bytes]
    content_type: str = config.AUDIO_MIME_TYPE
    request_id: Optional[str] = None
    model_name: Optional[str] = None
    char_count: Optional[int] = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "SpeakResponse":
        char_count = response.headers.get("dg-char-count")
        return cls(
            audio=response.content or None,
            content_type=response.headers.get("content-type", config.AUDIO_MIME_TYPE),
            request_id=response.headers.get("dg-request-id"),
            model_name=response.headers.get("dg-model-name"),
            char_count=int(char_count) if char_count and char_count.isdigit() else None,
        )


class DeepgramClient:
    """Thin wrapper over ``POST /v1/speak``.

    The client keeps only read-only settings, so one instance is shared by
    all concurrent requests. Each call opens its own ``httpx.AsyncClient``.

    Errors are not translated here: a non-2xx reply raises
    ``httpx.HTTPStatusError`` with the response attached and transport
    failures raise ``httpx.RequestError``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.deepgram.com",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Token {self.api_key}",
            "Content-Type": "application/json",
        }

    async def speak(self, text: str, model: str) -> SpeakResponse:
        """Synthesize ``text`` with ``model`` and return the audio bytes."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}{SPEAK_PATH}",
                params={"model": model},
                json={"text": text},
                headers=self._headers(),
            )
            response.raise_for_status()

        result = SpeakResponse.from_response(response)
        logger.debug(
            f"Deepgram speak: model={result.model_name or model} "
            f"request_id={result.request_id} chars={result.char_count} "
            f"bytes={len(result.audio) if result.audio else 0}"
        )
        if result.audio and not result.content_type.startswith("audio/"):
            logger.warning(
                f"Deepgram speak returned {result.content_type} instead of audio "
                f"(request_id={result.request_id})"
            )
        return result


_client: Optional[DeepgramClient] = None


def get_client() -> DeepgramClient:
    """Get or create the shared DeepgramClient."""
    global _client
    if _client is None:
        _client = DeepgramClient(
            api_key=config.require_deepgram_api_key(),
            base_url=config.DEEPGRAM_BASE_URL,
            timeout=config.HTTP_TIMEOUT,
        )
    return _client


def reset_client() -> None:
    """Drop the shared client so the next call rebuilds it from config."""
    global _client
    _client = None
