#!/usr/bin/env python
"""deepgram-mcp MCP server."""

import logging

from fastmcp import FastMCP

logger = logging.getLogger("deepgram-mcp")

mcp = FastMCP("deepgram-mcp")

# Shared configuration, then the tools that register themselves on `mcp`
from . import config
from . import tools


def main():
    """Run the deepgram-mcp server over stdio."""
    from .version import __version__

    config.require_deepgram_api_key()
    logger = config.setup_logging()
    logger.info(f"Starting deepgram-mcp v{__version__} (stdio)")

    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
