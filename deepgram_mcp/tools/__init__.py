"""MCP tools for deepgram-mcp.

Importing this package registers every tool on ``deepgram_mcp.server.mcp``.
"""

from . import synthesis
