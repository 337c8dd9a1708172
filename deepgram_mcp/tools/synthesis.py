"""Text-to-speech synthesis tool."""

import base64
import logging
import time
from typing import Annotated, Optional

from fastmcp.tools.tool import ToolResult
from pydantic import Field

from deepgram_mcp import config
from deepgram_mcp.deepgram_client import get_client
from deepgram_mcp.exceptions import ProviderError, UploadError
from deepgram_mcp.results import UPLOAD_CONFIRMATION, SynthesisResult, error_result
from deepgram_mcp.server import mcp
from deepgram_mcp.storage import get_storage_client

logger = logging.getLogger("deepgram-mcp")

NO_AUDIO_MESSAGE = "No audio result from Deepgram."


def audio_filename() -> str:
    """Name for an uploaded clip: tts-audio-<unix time in ms>.mp3"""
    return f"tts-audio-{int(time.time() * 1000)}.mp3"


async def upload_audio(audio: bytes) -> Optional[str]:
    """Upload audio and return its public URL, or None if the upload failed."""
    try:
        uploaded = await get_storage_client().upload(
            audio, audio_filename(), config.AUDIO_MIME_TYPE
        )
    except UploadError as e:
        logger.warning(f"UploadThing upload failed: {e}")
        return None
    except Exception as e:
        logger.warning(f"UploadThing upload failed unexpectedly: {e!r}", exc_info=True)
        return None
    return uploaded.url


async def synthesize_speech(
    text: str,
    model: Optional[str] = None,
    upload: Optional[bool] = None,
) -> SynthesisResult:
    """Synthesize ``text`` and, when enabled, upload the MP3.

    Never raises for per-request problems: provider failures come back as a
    failure result and upload failures only drop the download link.
    """
    if upload is None:
        upload = config.UPLOAD_ENABLED

    try:
        response = await get_client().speak(text, model or config.DEFAULT_MODEL)
        if not response.audio:
            raise ProviderError(NO_AUDIO_MESSAGE)
        audio = response.audio
    except ProviderError as e:
        return error_result(e, "Deepgram TTS error")
    except Exception as e:
        return error_result(e, "Failed to synthesize speech")

    result = SynthesisResult(audio_base64=base64.b64encode(audio).decode("ascii"))

    if upload:
        url = await upload_audio(audio)
        if url:
            result.notes.append(UPLOAD_CONFIRMATION)
            result.download_url = url

    return result


@mcp.tool(
    name="synthesizeSpeech",
    description="Synthesize text to speech using Deepgram (REST API)",
)
async def synthesize_speech_tool(
    text: Annotated[str, Field(description="Text to synthesize", min_length=1)],
    model: Annotated[
        Optional[str],
        Field(description="Deepgram TTS model (e.g., aura-2-thalia-en)"),
    ] = None,
) -> ToolResult:
    result = await synthesize_speech(text, model)
    return ToolResult(content=result.to_content())
