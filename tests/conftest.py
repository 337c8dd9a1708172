"""Shared test fixtures and configuration for deepgram-mcp tests."""

import os
import sys
from pathlib import Path

import httpx
import pytest

# Add deepgram_mcp to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep developer config files out of the test environment
os.environ["DEEPGRAM_MCP_SKIP_ENV_FILES"] = "true"

from deepgram_mcp import config
from deepgram_mcp.deepgram_client import DeepgramClient, reset_client
from deepgram_mcp.storage import UploadThingClient, reset_storage_client


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch):
    """
    Give every test a known configuration and fresh client singletons.

    Tests never talk to the real Deepgram or UploadThing APIs: the clients
    they use are built by the fixtures below on top of httpx.MockTransport.
    """
    monkeypatch.setattr(config, "DEEPGRAM_API_KEY", "test-deepgram-key")
    monkeypatch.setattr(config, "UPLOADTHING_TOKEN", "")
    monkeypatch.setattr(config, "UPLOAD_ENABLED", True)
    monkeypatch.setattr(config, "DEFAULT_MODEL", "aura-2-thalia-en")
    reset_client()
    reset_storage_client()
    yield
    reset_client()
    reset_storage_client()


@pytest.fixture
def requests_seen():
    """List collecting every request sent through a mock transport."""
    return []


@pytest.fixture
def deepgram_factory(requests_seen):
    """Build a DeepgramClient whose responses come from ``handler``."""
    def factory(handler):
        def recording_handler(request):
            requests_seen.append(request)
            return handler(request)
        return DeepgramClient(
            api_key="test-deepgram-key",
            base_url="https://dg.test",
            transport=httpx.MockTransport(recording_handler),
        )
    return factory


@pytest.fixture
def uploadthing_factory(requests_seen):
    """Build an UploadThingClient whose responses come from ``handler``."""
    def factory(handler, token=None):
        def recording_handler(request):
            requests_seen.append(request)
            return handler(request)
        return UploadThingClient(
            token=token if token is not None else _make_token(),
            base_url="https://ut.test",
            transport=httpx.MockTransport(recording_handler),
        )
    return factory


def _make_token(api_key="sk_test_123", app_id="app123"):
    """Encode an UPLOADTHING_TOKEN the way the UploadThing dashboard does."""
    import base64
    import json

    payload = json.dumps({"apiKey": api_key, "appId": app_id, "regions": ["sea1"]})
    return base64.b64encode(payload.encode()).decode()


@pytest.fixture
def make_token():
    """Helper for encoding UPLOADTHING_TOKEN values."""
    return _make_token
