"""Result values returned by the synthesis tool and error message formatting."""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import httpx
from mcp.types import AudioContent, TextContent

from . import config

logger = logging.getLogger("deepgram-mcp")

UPLOAD_CONFIRMATION = "Audio uploaded successfully."


@dataclass
class SynthesisResult:
    """Outcome of one synthesis request.

    A success carries base64 audio, its MIME type, optional text notes and an
    optional download URL. A failure carries only ``error``.
    """

    audio_base64: Optional[str] = None
    mime_type: str = config.AUDIO_MIME_TYPE
    notes: List[str] = field(default_factory=list)
    download_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "SynthesisResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_content(self) -> List[Union[TextContent, AudioContent]]:
        """Render as MCP content blocks."""
        if not self.ok:
            return [TextContent(type="text", text=f"## Error\n\n{self.error}")]

        content: List[Union[TextContent, AudioContent]] = [
            AudioContent(type="audio", data=self.audio_base64 or "", mimeType=self.mime_type)
        ]
        content.extend(TextContent(type="text", text=note) for note in self.notes)
        if self.download_url:
            content.append(TextContent(type="text", text=f"[Download Link]({self.download_url})"))
        return content


def _response_detail(response) -> str:
    """Describe an error response as ``<status> - <message>``."""
    status = getattr(response, "status_code", None) or getattr(response, "status", None)

    body = getattr(response, "data", None)
    if body is None and hasattr(response, "json"):
        try:
            body = response.json()
        except ValueError:
            body = getattr(response, "text", "")

    if isinstance(body, dict) and body.get("message"):
        message = body["message"]
    else:
        message = json.dumps(body, default=str)
    return f"{status} - {message}"


def format_api_error(error: BaseException, default_message: str = "API request failed") -> str:
    """Turn an exception from an upstream API call into a readable message.

    Checked in order: an attached HTTP response (status and body message),
    a request that never got a response, then the exception's own message.
    Falls back to ``default_message`` alone.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return f"{default_message}: {_response_detail(error.response)}"

    response = getattr(error, "response", None)
    if response is not None:
        return f"{default_message}: {_response_detail(response)}"

    if isinstance(error, httpx.RequestError):
        return f"{default_message}: No response received"

    if str(error):
        return f"{default_message}: {error}"
    return default_message


def error_result(error: BaseException, default_message: str = "API request failed") -> SynthesisResult:
    """Log an upstream API error and convert it into a failure result."""
    logger.error(f"Deepgram API error: {error!r}")
    return SynthesisResult.failure(format_api_error(error, default_message))
