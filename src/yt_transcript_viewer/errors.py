"""
errors.py — Custom exception hierarchy for yt-transcript-viewer.

Every exception carries an `http_status` attribute and a client-facing
`message`, so the FastAPI error handler can turn any of them into a JSON
error body without a separate mapping table.

Hierarchy:
    TranscriptError (base, 500)
    ├── InvalidRequestFormatError (400)
    ├── InvalidUrlError (400)
    ├── LanguageUnavailableError (400)
    ├── VideoNotFoundError (404)
    ├── NoCaptionsAvailableError (404)
    ├── MetadataFetchError (500)
    └── TranscriptFetchError (500)

    ConfigError is separate: it is raised at startup, never during a request.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for all request-pipeline errors.

    Attributes:
        message:     Text returned to the client in the ``error`` field.
        http_status: HTTP status code for the API layer.
        detail:      Extra server-side context, logged but never returned.
    """

    def __init__(self, message: str, http_status: int = 500, detail: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


# ---------------------------------------------------------------------------
# Client errors (4xx)
# ---------------------------------------------------------------------------

class InvalidRequestFormatError(TranscriptError):
    """The request body is missing ``url`` or it is not a well-formed URL."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid request format", http_status=400, detail=detail)


class InvalidUrlError(TranscriptError):
    """The URL is well-formed but no YouTube video ID could be extracted."""

    def __init__(self, url: str) -> None:
        super().__init__("Invalid YouTube URL", http_status=400, detail=url)
        self.url = url


class LanguageUnavailableError(TranscriptError):
    """
    Raised when the requested language is not among the languages the
    default caption track can be translated into.

    Maps to HTTP 400: the video exists, the request asked for something it
    does not offer.
    """

    def __init__(self, video_id: str, language: str) -> None:
        super().__init__(
            "Language not available",
            http_status=400,
            detail=f"{language!r} for video {video_id}",
        )
        self.video_id = video_id
        self.language = language


class VideoNotFoundError(TranscriptError):
    """
    The ID parsed from the URL names no video.

    Raised when the captions service reports the video unavailable or the ID
    invalid, and when the Data API answers videos.list with zero items.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__("Video not found", http_status=404, detail=video_id)
        self.video_id = video_id


class NoCaptionsAvailableError(TranscriptError):
    """
    The captions service has no usable track for the video: captions are
    disabled, no transcript was found, or the track listing came back empty.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            "No captions available for this video",
            http_status=404,
            detail=video_id,
        )
        self.video_id = video_id


# ---------------------------------------------------------------------------
# Upstream failures (5xx)
# ---------------------------------------------------------------------------

class MetadataFetchError(TranscriptError):
    """
    Raised when the YouTube Data API call fails for any reason other than
    "no such video": network errors, timeouts, quota errors, or a response
    body we can't make sense of.
    """

    def __init__(self, video_id: str, reason: str = "") -> None:
        super().__init__(
            "Failed to fetch video info",
            http_status=500,
            detail=f"{video_id}: {reason}" if reason else video_id,
        )
        self.video_id = video_id


class TranscriptFetchError(TranscriptError):
    """Catch-all for failures on the captions path."""

    def __init__(
        self,
        video_id: str,
        reason: str = "",
        message: str = "Failed to fetch transcript. Please try again.",
    ) -> None:
        super().__init__(
            message,
            http_status=500,
            detail=f"{video_id}: {reason}" if reason else video_id,
        )
        self.video_id = video_id


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Required configuration is missing or malformed."""
