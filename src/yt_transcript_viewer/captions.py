"""
captions.py — Boundary around the `youtube-transcript-api` library.

The library signals failures through a family of exception classes whose
names and messages change between releases.  This module is the only place
that knows about them: every failure leaves here as a CaptionsError tagged
with one of three kinds, and callers switch on the kind.

    NOT_FOUND    The video doesn't exist, is private, or the ID is invalid.
    NO_CAPTIONS  The video exists but has no caption track.
    OTHER        Anything else (blocked IP, network error, translation
                 refused, malformed upstream response, ...).
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

import requests
import youtube_transcript_api as yta_errors  # exception classes live here
from youtube_transcript_api import YouTubeTranscriptApi

logger = logging.getLogger(__name__)

# Track preferred as "the default" when a video has several.
_DEFAULT_LANGUAGE_CODES = ["en"]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

class CaptionsErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    NO_CAPTIONS = "no_captions"
    OTHER = "other"


class CaptionsError(Exception):
    """A captions-library failure, reduced to a kind plus a description."""

    def __init__(self, kind: CaptionsErrorKind, video_id: str, reason: str = "") -> None:
        super().__init__(f"{kind.value}: {video_id}: {reason}" if reason else f"{kind.value}: {video_id}")
        self.kind = kind
        self.video_id = video_id
        self.reason = reason


@dataclass(frozen=True)
class TranslationLanguage:
    """A language the default track can be machine-translated into."""
    name: str
    code: str


@dataclass(frozen=True)
class RawCue:
    """One caption cue exactly as the library returned it."""
    text: str
    start: float
    duration: float


@dataclass(frozen=True)
class CaptionTrackList:
    """
    The default caption track of a video and its translation targets.

    Attributes:
        video_id:              The video the tracks belong to.
        track:                 The library's transcript object for the
                               default track (opaque to callers).
        translation_languages: Languages available by translation, in the
                               order the library enumerates them.
    """
    video_id: str
    track: Any
    translation_languages: tuple[TranslationLanguage, ...]

    def find_language(self, name: str) -> TranslationLanguage | None:
        """Look up a translation language by its display name (exact match)."""
        for language in self.translation_languages:
            if language.name == name:
                return language
        return None


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

def _classify(exc: Exception) -> CaptionsErrorKind:
    if isinstance(exc, (yta_errors.VideoUnavailable, yta_errors.InvalidVideoId)):
        return CaptionsErrorKind.NOT_FOUND
    if isinstance(exc, (yta_errors.TranscriptsDisabled, yta_errors.NoTranscriptFound)):
        return CaptionsErrorKind.NO_CAPTIONS
    return CaptionsErrorKind.OTHER


# Everything the library (or the HTTP stack beneath it) is known to raise.
_UPSTREAM_ERRORS = (
    yta_errors.CouldNotRetrieveTranscript,
    requests.RequestException,
    ValueError,
    KeyError,
)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class CaptionsClient:
    """
    Thin wrapper exposing the three operations the app needs:
    list transcripts, fetch the default track, translate the default track.
    """

    def __init__(self, api: YouTubeTranscriptApi | None = None) -> None:
        self._api = api if api is not None else YouTubeTranscriptApi()

    def list_transcripts(self, video_id: str) -> CaptionTrackList:
        """
        Resolve the default track and its translation languages.

        The English track is used when one exists; otherwise the first track
        the library lists (manually created tracks come before generated ones).

        Raises:
            CaptionsError: on any library failure, or when the video has no
                           tracks at all (kind NO_CAPTIONS).
        """
        try:
            transcript_list = self._api.list(video_id)
            try:
                track = transcript_list.find_transcript(_DEFAULT_LANGUAGE_CODES)
            except yta_errors.NoTranscriptFound:
                track = next(iter(transcript_list), None)
            if track is None:
                raise CaptionsError(CaptionsErrorKind.NO_CAPTIONS, video_id, "no caption tracks")
            languages = tuple(
                TranslationLanguage(name=lang.language, code=lang.language_code)
                for lang in track.translation_languages
            )
        except _UPSTREAM_ERRORS as exc:
            raise CaptionsError(_classify(exc), video_id, str(exc)) from exc

        logger.debug(
            "Video %s: default track %s, %d translation languages",
            video_id, track.language_code, len(languages),
        )
        return CaptionTrackList(video_id=video_id, track=track, translation_languages=languages)

    def fetch(self, tracks: CaptionTrackList) -> list[RawCue]:
        """Fetch the cues of the default track."""
        try:
            fetched = tracks.track.fetch()
            return [RawCue(s.text, s.start, s.duration) for s in fetched]
        except _UPSTREAM_ERRORS as exc:
            raise CaptionsError(_classify(exc), tracks.video_id, str(exc)) from exc

    def translate(self, tracks: CaptionTrackList, language_code: str) -> list[RawCue]:
        """Fetch the default track machine-translated into `language_code`."""
        try:
            fetched = tracks.track.translate(language_code).fetch()
            return [RawCue(s.text, s.start, s.duration) for s in fetched]
        except _UPSTREAM_ERRORS as exc:
            raise CaptionsError(_classify(exc), tracks.video_id, str(exc)) from exc
