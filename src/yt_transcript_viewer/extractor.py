"""
extractor.py — Core transcript extraction logic.

This is the heart of yt-transcript-viewer.  It sits on top of the captions
boundary (captions.py) and exposes:

    1. Parsing YouTube URLs         → parse_video_id()
    2. Fetching normalised segments → TranscriptFetcher.fetch()

Only single-video extraction is supported (no playlists).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from yt_transcript_viewer.captions import (
    CaptionsClient,
    CaptionsError,
    CaptionsErrorKind,
    RawCue,
)
from yt_transcript_viewer.errors import (
    LanguageUnavailableError,
    NoCaptionsAvailableError,
    TranscriptFetchError,
    VideoNotFoundError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# One pattern covering the accepted YouTube URL shapes:
#   - https://www.youtube.com/watch?v=VIDEO_ID   (v may be any query param)
#   - https://www.youtube.com/embed/VIDEO_ID
#   - https://www.youtube.com/e/VIDEO_ID
#   - https://www.youtube.com/v/VIDEO_ID
#   - https://www.youtube.com/user/Name#p/u/1/VIDEO_ID   (legacy long form)
#   - https://youtu.be/VIDEO_ID
# The ID is the next 11 characters that aren't quotes, separators or spaces.
_URL_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"(?P<id>[^\"&?/\s]{11})"
)

DEFAULT_LANGUAGE = "English"
DEFAULT_LANGUAGE_CODE = "en"

_DEFAULT_FAILURE = "Failed to fetch transcript. Please try again."
_LANGUAGE_FAILURE = "Failed to fetch transcript in the requested language. Please try again."


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TranscriptSegment:
    """
    One timed caption cue in the shape the API returns.

    Attributes:
        id:         Zero-based position in the transcript, as a string.
        text:       Caption text exactly as the source returned it.
        start_time: Offset of the cue in seconds.
        end_time:   start_time + the cue's duration.
        language:   Language code or display name the transcript was requested in.
    """
    id: str
    text: str
    start_time: float
    end_time: float
    language: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptSegment:
        return cls(
            id=str(data["id"]),
            text=data["text"],
            start_time=float(data["startTime"]),
            end_time=float(data["endTime"]),
            language=data["language"],
        )


@dataclass(frozen=True)
class TranscriptResult:
    """Segments plus the translation languages offered by the default track."""
    segments: list[TranscriptSegment]
    translation_languages: list[str]


# ---------------------------------------------------------------------------
# URL parsing
# ---------------------------------------------------------------------------

def parse_video_id(url: str) -> str | None:
    """
    Extract the 11-character YouTube video ID from a URL.

    The input is assumed to already look like a URL.  Whether the ID refers
    to a real video is left to the fetchers.

    Args:
        url: A YouTube URL in any of the supported shapes.

    Returns:
        The video ID, or None when the URL isn't a recognisable YouTube link.
    """
    match = _URL_PATTERN.search(url)
    return match.group("id") if match else None


def is_default_language(language: str | None) -> bool:
    """True for "no language requested" and any casing of "English"."""
    return language is None or language.lower() == DEFAULT_LANGUAGE.lower()


def normalize_cues(cues: list[RawCue], language: str) -> list[TranscriptSegment]:
    """Convert raw cues into segments, keeping the source order."""
    return [
        TranscriptSegment(
            id=str(index),
            text=cue.text,
            start_time=cue.start,
            end_time=cue.start + cue.duration,
            language=language,
        )
        for index, cue in enumerate(cues)
    ]


# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

class TranscriptFetcher:
    """
    Fetch the default caption track of a video, or a translation of it.

    The captions client is injected so tests (and alternative backends) can
    replace the network-facing part.
    """

    def __init__(self, captions: CaptionsClient | None = None) -> None:
        self._captions = captions if captions is not None else CaptionsClient()

    def fetch(self, video_id: str, language: str | None = None) -> TranscriptResult:
        """
        Fetch transcript segments for a single video.

        Args:
            video_id: The 11-character YouTube video ID (NOT a full URL).
            language: Display name of the wanted language.  None returns the
                      default track tagged "en"; any casing of "English"
                      returns the default track tagged "English".

        Returns:
            A TranscriptResult with the segments and the display names of
            every language the default track can be translated into.

        Raises:
            VideoNotFoundError:        The captions source doesn't know the video.
            NoCaptionsAvailableError:  The video has no caption track.
            LanguageUnavailableError:  `language` isn't a translation target.
            TranscriptFetchError:      Anything else on the captions path.
        """
        failure_message = _DEFAULT_FAILURE if language is None else _LANGUAGE_FAILURE

        try:
            tracks = self._captions.list_transcripts(video_id)
            names = [lang.name for lang in tracks.translation_languages]

            if is_default_language(language):
                tag = DEFAULT_LANGUAGE_CODE if language is None else DEFAULT_LANGUAGE
                cues = self._captions.fetch(tracks)
            else:
                target = tracks.find_language(language)
                if target is None:
                    raise LanguageUnavailableError(video_id, language)
                tag = language
                cues = self._captions.translate(tracks, target.code)

        except CaptionsError as exc:
            if exc.kind is CaptionsErrorKind.NO_CAPTIONS:
                raise NoCaptionsAvailableError(video_id) from exc
            if exc.kind is CaptionsErrorKind.NOT_FOUND:
                raise VideoNotFoundError(video_id) from exc
            raise TranscriptFetchError(video_id, exc.reason, message=failure_message) from exc

        logger.info("Fetched %d cues for video %s (%s)", len(cues), video_id, tag)
        return TranscriptResult(
            segments=normalize_cues(cues, tag),
            translation_languages=names,
        )
