"""
Command-line interface for deepgram-mcp.
"""

import asyncio
import base64
import sys
from pathlib import Path
from typing import Optional

import click

from deepgram_mcp import config
from deepgram_mcp.exceptions import ConfigurationError
from deepgram_mcp.version import __version__


def _require_api_key():
    """Abort the command if DEEPGRAM_API_KEY is missing."""
    try:
        config.require_deepgram_api_key()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@click.group(name="deepgram-mcp")
@click.version_option(__version__, prog_name="deepgram-mcp")
def cli():
    """deepgram-mcp - Deepgram text-to-speech as an MCP tool."""
    pass


@cli.command()
@click.option("--host", default=config.SERVE_HOST, show_default=True,
              help="Host to bind to")
@click.option("--port", "-p", type=int, default=config.SERVE_PORT, show_default=True,
              help="Port to listen on")
@click.option("--transport", "-t",
              type=click.Choice(["streamable-http", "sse"]),
              default=config.SERVE_TRANSPORT, show_default=True,
              help="HTTP transport (sse is deprecated)")
@click.option("--token", default=config.SERVE_TOKEN,
              help="Require this Bearer token on every request")
@click.option("--log-level", default=config.LOG_LEVEL.lower(), show_default=True,
              type=click.Choice(["debug", "info", "warning", "error"]),
              help="Log level")
def serve(host, port, transport, token, log_level):
    """Serve the MCP endpoint over HTTP."""
    _require_api_key()
    logger = config.setup_logging(log_level)

    import uvicorn

    from deepgram_mcp.app import create_app, endpoint_path

    if transport == "sse":
        click.echo("Warning: SSE transport is deprecated, use streamable-http instead.", err=True)

    app = create_app(transport=transport, token=token)
    url = f"http://{host}:{port}{endpoint_path(transport)}"

    click.echo(f"Starting deepgram-mcp v{__version__}")
    click.echo(f"Transport: {transport}")
    click.echo(f"Endpoint: {url}")
    if token:
        click.echo("Authentication: Bearer token required")
    logger.info(f"Serving {transport} on {url}")

    uvicorn.run(app, host=host, port=port, log_level=log_level)


@cli.command()
def stdio():
    """Serve the MCP endpoint over stdio."""
    _require_api_key()

    from deepgram_mcp.server import main

    main()


@cli.command()
@click.argument("text")
@click.option("--model", "-m", default=None,
              help=f"Deepgram TTS model (default: {config.DEFAULT_MODEL})")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Where to write the MP3 (default: tts-audio-<ms>.mp3)")
@click.option("--upload/--no-upload", default=config.UPLOAD_ENABLED, show_default=True,
              help="Also upload the audio to UploadThing")
def speak(text: str, model: Optional[str], output: Optional[Path], upload: bool):
    """Synthesize TEXT and save it as an MP3."""
    _require_api_key()
    config.setup_logging()

    from deepgram_mcp.tools.synthesis import audio_filename, synthesize_speech

    result = asyncio.run(synthesize_speech(text, model=model, upload=upload))
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    output = output or Path(audio_filename())
    output.write_bytes(base64.b64decode(result.audio_base64))
    click.echo(f"Saved {output}")
    if result.download_url:
        click.echo(f"Download: {result.download_url}")


def main():
    cli()


if __name__ == "__main__":
    main()
