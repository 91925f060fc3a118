"""
api.py — FastAPI REST API for yt-transcript-viewer.

Endpoints:
    POST /api/transcript              — Default transcript plus video info.
    POST /api/transcript/{language}   — Transcript translated into `language`.
    GET  /health                      — Simple health-check for load balancers / monitoring.

Both POST endpoints take a JSON body {"url": "<YouTube URL>"}.

Run with:
    yt-transcript-viewer serve

The app is built by create_app(settings) so configuration is passed in
explicitly rather than read from module globals.  Any TranscriptError raised
by an endpoint is converted to a JSON error body using the status code
stored on the exception.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import AnyUrl, BaseModel

from yt_transcript_viewer.config import Settings
from yt_transcript_viewer.errors import (
    InvalidRequestFormatError,
    InvalidUrlError,
    MetadataFetchError,
    TranscriptError,
    TranscriptFetchError,
)
from yt_transcript_viewer.extractor import (
    DEFAULT_LANGUAGE,
    TranscriptFetcher,
    parse_video_id,
)
from yt_transcript_viewer.metadata import MetadataFetcher
from yt_transcript_viewer.ratelimit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TranscriptRequest(BaseModel):
    url: AnyUrl


def available_languages(translation_languages: list[str]) -> list[str]:
    """"English" first, exactly once, then the translation targets in source order."""
    return [DEFAULT_LANGUAGE] + [
        name for name in translation_languages
        if name.lower() != DEFAULT_LANGUAGE.lower()
    ]


def _video_id_from(body: TranscriptRequest) -> str:
    url = str(body.url)
    video_id = parse_video_id(url)
    if video_id is None:
        raise InvalidUrlError(url)
    return video_id


async def _in_thread(func: Callable[..., T], *args, timeout: float, on_timeout: Callable[[], Exception]) -> T:
    """Run a blocking fetch in a worker thread, bounded by `timeout` seconds."""
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout)
    except asyncio.TimeoutError as exc:
        raise on_timeout() from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

router = APIRouter()


@router.post("/api/transcript")
async def get_transcript(body: TranscriptRequest, request: Request) -> JSONResponse:
    """
    Fetch the default transcript and the video's metadata.

    The captions fetch and the Data API call are independent, so they run
    concurrently; both must succeed.  When both fail, the transcript error
    is reported.
    """
    state = request.app.state
    video_id = _video_id_from(body)

    transcript, info = await asyncio.gather(
        _in_thread(
            state.transcripts.fetch, video_id,
            timeout=state.settings.transcript_timeout,
            on_timeout=lambda: TranscriptFetchError(video_id, "timed out"),
        ),
        _in_thread(
            state.metadata.fetch, video_id,
            timeout=state.settings.request_timeout,
            on_timeout=lambda: MetadataFetchError(video_id, "timed out"),
        ),
        return_exceptions=True,
    )
    if isinstance(transcript, BaseException):
        raise transcript
    if isinstance(info, BaseException):
        raise info

    video_info = info.to_dict()
    video_info["availableLanguages"] = available_languages(transcript.translation_languages)
    return JSONResponse(content={
        "transcript": [segment.to_dict() for segment in transcript.segments],
        "videoInfo": video_info,
    })


@router.post("/api/transcript/{language}")
async def get_transcript_in_language(
    language: str,
    body: TranscriptRequest,
    request: Request,
) -> JSONResponse:
    """
    Fetch the transcript in `language` (a display name such as "French").

    "English" in any casing returns the default track.  Video metadata is
    not fetched again; the client already holds it.
    """
    state = request.app.state
    video_id = _video_id_from(body)

    transcript = await _in_thread(
        state.transcripts.fetch, video_id, language,
        timeout=state.settings.transcript_timeout,
        on_timeout=lambda: TranscriptFetchError(
            video_id, "timed out",
            message="Failed to fetch transcript in the requested language. Please try again.",
        ),
    )
    return JSONResponse(content={
        "transcript": [segment.to_dict() for segment in transcript.segments],
    })


@router.get("/health")
async def health() -> dict:
    """
    Minimal health-check endpoint.

    Returns HTTP 200 with {"status": "ok"}.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError (or subclass) into an HTTP error response.

    The http_status on the exception drives the response code; the body is
    always {"error": <message>}.
    """
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.http_status, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported as InvalidRequestFormat, not FastAPI's 422."""
    error = InvalidRequestFormatError(detail=str(exc.errors()))
    return await transcript_error_handler(request, error)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s: unhandled error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Settings,
    *,
    transcripts: TranscriptFetcher | None = None,
    metadata: MetadataFetcher | None = None,
    limiter: FixedWindowRateLimiter | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings:    Startup configuration (API key, timeouts, limits, CORS).
        transcripts: Transcript fetcher; a live one is built when omitted.
        metadata:    Metadata fetcher; built from `settings` when omitted.
        limiter:     Rate limiter; built from `settings` when omitted.
    """
    app = FastAPI(
        title="YouTube Transcript Viewer API",
        description="Fetch YouTube video transcripts, optionally machine-translated, "
                    "together with the video's title and thumbnail.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.transcripts = transcripts if transcripts is not None else TranscriptFetcher()
    app.state.metadata = metadata if metadata is not None else MetadataFetcher(settings)
    app.state.limiter = limiter if limiter is not None else FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max,
        window=settings.rate_limit_window,
    )

    app.add_exception_handler(TranscriptError, transcript_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path.startswith("/api/"):
            client = request.client.host if request.client else "unknown"
            if not app.state.limiter.allow(client):
                logger.warning("Rate limit exceeded for %s", client)
                return JSONResponse(status_code=429, content={"error": _RATE_LIMIT_MESSAGE})
        return await call_next(request)

    # Outermost, so rate-limited responses still carry CORS headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app
