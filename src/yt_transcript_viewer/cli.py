"""
cli.py — Command-line entry point for yt-transcript-viewer.

Provides the `yt-transcript-viewer` command group (registered as a console
script in pyproject.toml):

    serve   Start the transcript API server.
    ui      Start the Streamlit front end.

Usage examples:
    yt-transcript-viewer serve
    yt-transcript-viewer serve --host 0.0.0.0 --port 8080
    yt-transcript-viewer ui
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import click
import uvicorn

from yt_transcript_viewer.api import create_app
from yt_transcript_viewer.config import load_settings
from yt_transcript_viewer.errors import ConfigError

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_UI_SCRIPT = Path(__file__).with_name("ui.py")


@click.group()
def main() -> None:
    """
    YouTube Transcript Viewer: fetch and translate video transcripts.
    """


@main.command()
@click.option("--host", default=None, help="Interface to bind (defaults to $HOST or 127.0.0.1).")
@click.option("--port", type=int, default=None, help="Port to bind (defaults to $PORT or 3000).")
def serve(host: str | None, port: int | None) -> None:
    """
    Start the transcript API.

    Refuses to start when YOUTUBE_API_KEY is not configured.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
    app = create_app(settings)

    bind_host = host or settings.host
    bind_port = port or settings.port
    click.echo(f"Server running at http://{bind_host}:{bind_port}", err=True)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())


@main.command()
@click.option("--port", type=int, default=8501, show_default=True, help="Port for the Streamlit server.")
def ui(port: int) -> None:
    """
    Start the Streamlit front end.

    The page talks to the API at $TRANSCRIPT_API_URL
    (default http://localhost:3000/api).
    """
    command = [
        sys.executable, "-m", "streamlit", "run", str(_UI_SCRIPT),
        "--server.port", str(port),
    ]
    sys.exit(subprocess.call(command))
