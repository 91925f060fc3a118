"""
fakes.py — Shared test helpers.

Fake caption objects mimic the parts of youtube-transcript-api the captions
boundary touches: a transcript list with find_transcript()/iteration, a
transcript with translation_languages/fetch()/translate(), and fetched
snippets with .text, .start, .duration.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import youtube_transcript_api as yta_errors

from yt_transcript_viewer.captions import (
    CaptionTrackList,
    RawCue,
    TranslationLanguage,
)


class FakeSnippet:
    """Mimics FetchedTranscriptSnippet with .text, .start, .duration."""

    def __init__(self, text: str, start: float, duration: float) -> None:
        self.text = text
        self.start = start
        self.duration = duration


def make_fake_track(
    snippets_data: list[dict],
    translations: dict[str, str] | None = None,
    language_code: str = "en",
) -> MagicMock:
    """
    Build a mock library Transcript.

    `translations` maps display name → language code.  translate(code)
    returns a track whose fetch() yields the same snippets with the code
    appended to each text.
    """
    track = MagicMock()
    track.language_code = language_code
    track.fetch.return_value = [FakeSnippet(**s) for s in snippets_data]
    track.translation_languages = [
        SimpleNamespace(language=name, language_code=code)
        for name, code in (translations or {}).items()
    ]

    def translate(code: str) -> MagicMock:
        translated = MagicMock()
        translated.fetch.return_value = [
            FakeSnippet(f"{s['text']} [{code}]", s["start"], s["duration"])
            for s in snippets_data
        ]
        return translated

    track.translate.side_effect = translate
    return track


def make_fake_transcript_list(tracks: list[MagicMock], has_english: bool = True) -> MagicMock:
    """Mock TranscriptList: find_transcript(["en"]) and iteration over `tracks`."""
    transcript_list = MagicMock()
    transcript_list.__iter__ = MagicMock(side_effect=lambda *args: iter(tracks))
    if has_english and tracks:
        transcript_list.find_transcript.return_value = tracks[0]
    else:
        transcript_list.find_transcript.side_effect = yta_errors.NoTranscriptFound(
            "abcdEFGH12J", ["en"], MagicMock()
        )
    return transcript_list


def make_track_list(translations: dict[str, str] | None = None) -> CaptionTrackList:
    """A CaptionTrackList as CaptionsClient.list_transcripts() would return it."""
    return CaptionTrackList(
        video_id="abcdEFGH12J",
        track=object(),
        translation_languages=tuple(
            TranslationLanguage(name=name, code=code)
            for name, code in (translations or {}).items()
        ),
    )


# Two cues used throughout the tests.
SAMPLE_CUES = [
    RawCue(text="Hi", start=0.0, duration=1.5),
    RawCue(text="there", start=1.5, duration=2.0),
]
