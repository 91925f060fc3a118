"""
client.py — HTTP client for the transcript API, used by the UI.

Server-reported errors surface with the server's own message; a request
that gets no response at all (connection refused, timeout) surfaces as a
generic "Failed to fetch transcript".
"""

from __future__ import annotations

from urllib.parse import quote

import requests

from yt_transcript_viewer.config import DEFAULT_BACKEND_URL
from yt_transcript_viewer.extractor import TranscriptSegment
from yt_transcript_viewer.metadata import VideoInfo

GENERIC_FAILURE = "Failed to fetch transcript"


class ApiError(Exception):
    """A transcript request failed; `message` is meant for the user."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class TranscriptApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BACKEND_URL,
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def get_transcript(self, url: str) -> tuple[list[TranscriptSegment], VideoInfo]:
        """Default transcript and video info for a YouTube URL."""
        data = self._post("/transcript", url)
        try:
            segments = [TranscriptSegment.from_dict(item) for item in data["transcript"]]
            return segments, VideoInfo.from_dict(data["videoInfo"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError(GENERIC_FAILURE) from exc

    def get_transcript_in_language(self, video_id: str, language: str) -> list[TranscriptSegment]:
        """Transcript of `video_id` in `language` (a display name)."""
        data = self._post(
            f"/transcript/{quote(language, safe='')}",
            f"https://www.youtube.com/watch?v={video_id}",
        )
        try:
            return [TranscriptSegment.from_dict(item) for item in data["transcript"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError(GENERIC_FAILURE) from exc

    def _post(self, path: str, url: str) -> dict:
        try:
            response = self._session.post(
                f"{self._base_url}{path}",
                json={"url": url},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(GENERIC_FAILURE) from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or GENERIC_FAILURE, status=response.status_code)
        if not isinstance(data, dict):
            raise ApiError(GENERIC_FAILURE, status=response.status_code)
        return data
