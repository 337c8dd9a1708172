"""UploadThing storage client.

Used to publish generated audio and get a public download URL for it.
Uploading is a two step exchange:

1. ``POST /v6/uploadFiles`` registers the file and returns a presigned URL
   with the form fields that must accompany it.
2. The bytes are posted as multipart form data to that presigned URL.

Every failure along the way is raised as ``UploadError``.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from . import config
from .exceptions import UploadError

logger = logging.getLogger("deepgram-mcp")

UPLOAD_FILES_PATH = "/v6/uploadFiles"


@dataclass
class UploadedFile:
    """A file stored on UploadThing."""

    key: str
    name: str
    url: str


def decode_token(token: str) -> dict:
    """Decode an UPLOADTHING_TOKEN (base64 encoded JSON) into its fields.

    Raises:
        UploadError: If the token is empty, not base64, or lacks ``apiKey``.
    """
    if not token:
        raise UploadError("UPLOADTHING_TOKEN is not set")

    padded = token.strip() + "=" * (-len(token.strip()) % 4)
    try:
        data = json.loads(base64.b64decode(padded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise UploadError(f"Invalid UPLOADTHING_TOKEN: {e}") from e

    if not isinstance(data, dict) or not data.get("apiKey"):
        raise UploadError("Invalid UPLOADTHING_TOKEN: missing apiKey")
    return data


class UploadThingClient:
    """Upload raw bytes to UploadThing.

    The token is decoded lazily so that a missing or malformed token only
    surfaces when an upload is attempted.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.uploadthing.com",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def upload(self, data: bytes, filename: str, content_type: str) -> UploadedFile:
        """Upload ``data`` as ``filename`` and return where it landed."""
        api_key = decode_token(self.token)["apiKey"]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}{UPLOAD_FILES_PATH}",
                    json={
                        "files": [{"name": filename, "size": len(data), "type": content_type}],
                        "acl": "public-read",
                        "contentDisposition": "inline",
                    },
                    headers={"x-uploadthing-api-key": api_key},
                )
                response.raise_for_status()
                presigned = _first_presigned(response.json())

                upload_response = await client.post(
                    presigned["url"],
                    data=presigned.get("fields") or {},
                    files={"file": (filename, data, content_type)},
                )
                upload_response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UploadError(
                f"UploadThing returned {e.response.status_code}: {e.response.text}"
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise UploadError(f"UploadThing request failed: {e}") from e
        except ValueError as e:
            raise UploadError(f"Malformed UploadThing response: {e}") from e

        uploaded = UploadedFile(
            key=presigned["key"],
            name=presigned.get("fileName", filename),
            url=presigned["fileUrl"],
        )
        logger.info(f"Uploaded {uploaded.name} to {uploaded.url}")
        return uploaded


def _first_presigned(payload) -> dict:
    """Pull the first presigned upload out of a /v6/uploadFiles reply."""
    entries = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(entries, list) or not entries:
        raise ValueError("no presigned upload returned")
    entry = entries[0]
    if not isinstance(entry, dict):
        raise ValueError(f"presigned upload is not an object: {entry!r}")
    if not isinstance(entry.get("fields") or {}, dict):
        raise ValueError("presigned upload fields are not an object")
    missing = [k for k in ("url", "key", "fileUrl") if not isinstance(entry.get(k), str) or not entry.get(k)]
    if missing:
        raise ValueError(f"presigned upload missing {', '.join(missing)}")
    return entry


_storage_client: Optional[UploadThingClient] = None


def get_storage_client() -> UploadThingClient:
    """Get or create the shared UploadThingClient."""
    global _storage_client
    if _storage_client is None:
        _storage_client = UploadThingClient(
            token=config.UPLOADTHING_TOKEN,
            base_url=config.UPLOADTHING_BASE_URL,
            timeout=config.HTTP_TIMEOUT,
        )
    return _storage_client


def reset_storage_client() -> None:
    """Drop the shared storage client so the next call rebuilds it from config."""
    global _storage_client
    _storage_client = None
