"""Shared configuration for deepgram-mcp.

Settings are read from the environment when this module is imported. Before
that, ``~/.deepgram-mcp/deepgram-mcp.env`` and ``./.env`` are loaded into the
environment without overriding variables that are already set, so a shell
export always wins over a config file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

# ==================== PATHS ====================

BASE_DIR = Path(os.path.expanduser(os.environ.get("DEEPGRAM_MCP_BASE_DIR", "~/.deepgram-mcp")))
CONFIG_FILE = BASE_DIR / "deepgram-mcp.env"


def env_bool(env_var: str, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    value = os.getenv(env_var, "").lower()
    if not value:
        return default
    return value in ("true", "1", "yes", "on")


def load_env_file(path: Path, override: bool = False) -> dict:
    """Load KEY=VALUE pairs from an env file into os.environ.

    Supports comments, ``export`` prefixes, and single or double quoted values,
    including quoted values spanning several lines.

    Args:
        path: File to read. A missing file is ignored.
        override: Replace variables that are already set in the environment.

    Returns:
        Dictionary of the values parsed from the file.
    """
    path = Path(path)
    if not path.is_file():
        return {}

    loaded = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1

        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip()

        if value and value[0] in ('"', "'"):
            quote_char = value[0]
            if len(value) > 1 and value.endswith(quote_char):
                value = value[1:-1]
            else:
                # Collect lines until the closing quote
                parts = [value[1:]]
                while i < len(lines):
                    next_line = lines[i].rstrip("\n")
                    i += 1
                    if next_line.endswith(quote_char):
                        parts.append(next_line[:-1])
                        break
                    parts.append(next_line)
                value = "\n".join(parts)

        if not key:
            continue
        loaded[key] = value
        if override or key not in os.environ:
            os.environ[key] = value

    return loaded


if not env_bool("DEEPGRAM_MCP_SKIP_ENV_FILES"):
    load_env_file(CONFIG_FILE)
    load_env_file(Path.cwd() / ".env")

# ==================== DEEPGRAM ====================

DEEPGRAM_API_KEY = os.getenv("DEEPGRAM_API_KEY", "")
DEEPGRAM_BASE_URL = os.getenv("DEEPGRAM_MCP_BASE_URL", "https://api.deepgram.com").rstrip("/")
DEFAULT_MODEL = os.getenv("DEEPGRAM_MCP_DEFAULT_MODEL", "aura-2-thalia-en")
AUDIO_MIME_TYPE = "audio/mpeg"

# Seconds per outbound request; httpx would otherwise give up after 5s
HTTP_TIMEOUT = float(os.getenv("DEEPGRAM_MCP_TIMEOUT", "60"))

# ==================== UPLOADTHING ====================

UPLOAD_ENABLED = env_bool("DEEPGRAM_MCP_UPLOAD", True)
UPLOADTHING_TOKEN = os.getenv("UPLOADTHING_TOKEN", "")
UPLOADTHING_BASE_URL = os.getenv("UPLOADTHING_BASE_URL", "https://api.uploadthing.com").rstrip("/")

# ==================== SERVE ====================

SERVE_HOST = os.getenv("DEEPGRAM_MCP_HOST", "127.0.0.1")
SERVE_PORT = int(os.getenv("DEEPGRAM_MCP_PORT", "8765"))
SERVE_TRANSPORT = os.getenv("DEEPGRAM_MCP_SERVE_TRANSPORT", "streamable-http")
SERVE_TOKEN: Optional[str] = os.getenv("DEEPGRAM_MCP_SERVE_TOKEN") or None

# ==================== LOGGING ====================

DEBUG = env_bool("DEEPGRAM_MCP_DEBUG")
LOG_LEVEL = os.getenv("DEEPGRAM_MCP_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the deepgram-mcp logger.

    Logs go to stderr: stdout carries the MCP protocol on the stdio transport.
    """
    logger = logging.getLogger("deepgram-mcp")
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def require_deepgram_api_key() -> str:
    """Return the Deepgram API key, failing startup if it is not set."""
    if not DEEPGRAM_API_KEY:
        raise ConfigurationError("DEEPGRAM_API_KEY environment variable is not set.")
    return DEEPGRAM_API_KEY
