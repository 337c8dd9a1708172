"""Version information for deepgram-mcp."""

__version__ = "0.3.0"
