"""
yt_transcript_viewer — View, translate and download YouTube video transcripts.

Public API:
    create_app()              Build the FastAPI application from Settings.
    load_settings()           Read startup configuration from the environment.
    parse_video_id()          Extract the video ID from a YouTube URL.
    TranscriptFetcher         Fetch (and translate) normalised transcript segments.
    MetadataFetcher           Fetch title and thumbnail via the YouTube Data API.
    TranscriptViewController  Client-side view state driven by the API.

Exception hierarchy (all importable from this package):
    TranscriptError                 Base exception for all request errors.
    ├── InvalidRequestFormatError   Malformed request body.
    ├── InvalidUrlError             No video ID in the URL.
    ├── LanguageUnavailableError    Requested translation not offered.
    ├── VideoNotFoundError          Video ID doesn't exist or is private.
    ├── NoCaptionsAvailableError    Video exists but has no captions.
    ├── MetadataFetchError          YouTube Data API call failed.
    └── TranscriptFetchError        Any other captions failure.

Usage:
    from yt_transcript_viewer import TranscriptFetcher, parse_video_id
    video_id = parse_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    result = TranscriptFetcher().fetch(video_id, "French")
"""

from yt_transcript_viewer.api import create_app
from yt_transcript_viewer.config import Settings, load_settings
from yt_transcript_viewer.controller import ClientViewState, TranscriptViewController
from yt_transcript_viewer.errors import (
    ConfigError,
    InvalidRequestFormatError,
    InvalidUrlError,
    LanguageUnavailableError,
    MetadataFetchError,
    NoCaptionsAvailableError,
    TranscriptError,
    TranscriptFetchError,
    VideoNotFoundError,
)
from yt_transcript_viewer.extractor import (
    TranscriptFetcher,
    TranscriptSegment,
    parse_video_id,
)
from yt_transcript_viewer.metadata import MetadataFetcher, VideoInfo

__all__ = [
    "create_app",
    "load_settings",
    "parse_video_id",
    "Settings",
    "TranscriptFetcher",
    "TranscriptSegment",
    "MetadataFetcher",
    "VideoInfo",
    "TranscriptViewController",
    "ClientViewState",
    "ConfigError",
    "TranscriptError",
    "InvalidRequestFormatError",
    "InvalidUrlError",
    "LanguageUnavailableError",
    "VideoNotFoundError",
    "NoCaptionsAvailableError",
    "MetadataFetchError",
    "TranscriptFetchError",
]
