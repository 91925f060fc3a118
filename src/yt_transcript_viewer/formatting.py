"""
formatting.py — Text renderings of a transcript for copy and download.

    format_text()        one line per segment, optionally "[HH:MM:SS] " prefixed
    format_srt()         SubRip subtitle file
    download_filename()  file name for a download
"""

from __future__ import annotations

import re
from typing import Iterable

from yt_transcript_viewer.extractor import TranscriptSegment
from yt_transcript_viewer.metadata import VideoInfo

# Characters that are unsafe in filenames on Windows and/or POSIX systems.
_UNSAFE_FILENAME_CHARS = re.compile(r'[:/\\?*<>|"]')

FORMATS = ("txt", "srt")


def format_timestamp(seconds: float) -> str:
    """
    Convert a float timestamp (in seconds) to an HH:MM:SS string.

    Fractions are truncated: 92.9 → "00:01:32".
    """
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def _srt_timestamp(seconds: float) -> str:
    """Format seconds as an SRT timestamp: HH:MM:SS,mmm."""
    millis_total = int(round(seconds * 1000))
    secs_total, millis = divmod(millis_total, 1000)
    return f"{format_timestamp(secs_total)},{millis:03d}"


def format_text(segments: Iterable[TranscriptSegment], timestamps: bool = True) -> str:
    """
    Convert segments into plain text, one line per segment.

    Args:
        segments:   Transcript segments in display order.
        timestamps: Prefix each line with "[HH:MM:SS] " (the segment start).

    Returns:
        A single string without a trailing newline.
    """
    if timestamps:
        return "\n".join(f"[{format_timestamp(s.start_time)}] {s.text}" for s in segments)
    return "\n".join(s.text for s in segments)


def format_srt(segments: Iterable[TranscriptSegment]) -> str:
    """Render segments as a SubRip (.srt) document, numbered from 1."""
    blocks = [
        f"{number}\n{_srt_timestamp(s.start_time)} --> {_srt_timestamp(s.end_time)}\n{s.text}\n"
        for number, s in enumerate(segments, start=1)
    ]
    return "\n".join(blocks)


def download_filename(video_info: VideoInfo, language: str, fmt: str) -> str:
    """
    Build a file name like "My Video - English.srt".

    Raises:
        ValueError: if fmt is not "txt" or "srt".
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected 'txt' or 'srt'")
    title = _UNSAFE_FILENAME_CHARS.sub("-", video_info.title).strip().strip(".") or video_info.id
    return f"{title} - {language}.{fmt}"
