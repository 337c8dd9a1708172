"""
deepgram-mcp - Deepgram text-to-speech exposed as a Model Context Protocol (MCP) tool

This package provides an MCP server with a single tool, ``synthesizeSpeech``:
- Speech synthesis through the Deepgram Speak REST API
- Optional upload of the generated MP3 to UploadThing for a download link
- Streamable HTTP, SSE and stdio transports
"""

from .version import __version__

__all__ = [
    "__version__",
]
