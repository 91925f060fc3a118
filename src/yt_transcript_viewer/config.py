"""
config.py — Startup configuration for yt-transcript-viewer.

Settings are read once, at process start, by load_settings() and then passed
explicitly to whatever needs them (the app factory, the metadata fetcher).
Nothing in the request path reads the environment.

Environment variables (a `.env` file in the working directory is honoured,
but never overrides variables that are already set):

    YOUTUBE_API_KEY        Required.  YouTube Data API v3 key.
    YOUTUBE_API_BASE_URL   Data API base URL.
    REQUEST_TIMEOUT        Seconds to wait on the metadata call.
    TRANSCRIPT_TIMEOUT     Seconds to wait on the whole captions fetch.
    RATE_LIMIT_WINDOW      Rate-limit window length in seconds.
    RATE_LIMIT_MAX         Requests allowed per client address per window.
    CORS_ORIGINS           Comma-separated allowed origins ("*" for any).
    HOST, PORT             Where `yt-transcript-viewer serve` binds.
    LOG_LEVEL              Root logging level.
    TRANSCRIPT_API_URL     Backend base URL used by the Streamlit UI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv

from yt_transcript_viewer.errors import ConfigError

DEFAULT_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
DEFAULT_BACKEND_URL = "http://localhost:3000/api"


@dataclass(frozen=True)
class Settings:
    """Immutable configuration built once at startup."""

    youtube_api_key: str
    youtube_api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 10.0
    transcript_timeout: float = 30.0
    rate_limit_window: float = 15 * 60
    rate_limit_max: int = 100
    cors_origins: tuple[str, ...] = field(default=("*",))
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"


def _number(env: Mapping[str, str], name: str, default: float, cast=float):
    raw = env.get(name, "").strip()
    if not raw:
        return cast(default)
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: Mapping to read instead of os.environ.  When None, a `.env`
             file is loaded first (without overriding existing variables)
             and os.environ is used.

    Returns:
        A populated Settings instance.

    Raises:
        ConfigError: YOUTUBE_API_KEY is missing, or a numeric variable
                     can't be parsed.
    """
    if env is None:
        load_dotenv(override=False)
        env = os.environ

    api_key = env.get("YOUTUBE_API_KEY", "").strip()
    if not api_key:
        raise ConfigError(
            "YOUTUBE_API_KEY is required. Please set it in your .env file or environment variables."
        )

    origins = tuple(
        origin.strip()
        for origin in env.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    )

    return Settings(
        youtube_api_key=api_key,
        youtube_api_base_url=env.get("YOUTUBE_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        request_timeout=_number(env, "REQUEST_TIMEOUT", 10.0),
        transcript_timeout=_number(env, "TRANSCRIPT_TIMEOUT", 30.0),
        rate_limit_window=_number(env, "RATE_LIMIT_WINDOW", 15 * 60),
        rate_limit_max=_number(env, "RATE_LIMIT_MAX", 100, cast=int),
        cors_origins=origins or ("*",),
        host=env.get("HOST", "127.0.0.1"),
        port=_number(env, "PORT", 3000, cast=int),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def backend_url(env: Mapping[str, str] | None = None) -> str:
    """Base URL of the transcript API, as seen by the UI."""
    if env is None:
        load_dotenv(override=False)
        env = os.environ
    return env.get("TRANSCRIPT_API_URL", DEFAULT_BACKEND_URL).rstrip("/")
