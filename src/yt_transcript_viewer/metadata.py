"""
metadata.py — Fetch video metadata from the YouTube Data API.

The captions library gives us transcript cues but no title or thumbnail.
This module fills that gap with a single `videos.list` call
(part=snippet).  It needs an API key, which is handed in through Settings
when the fetcher is constructed.

The main entry point is MetadataFetcher.fetch(), which returns a VideoInfo
dataclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from yt_transcript_viewer.config import Settings
from yt_transcript_viewer.errors import MetadataFetchError, VideoNotFoundError

logger = logging.getLogger(__name__)

# Thumbnail keys in the Data API response, largest first.
_THUMBNAIL_PREFERENCE = ("maxres", "standard", "high", "medium", "default")


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoInfo:
    """
    Display metadata for a single YouTube video.

    Attributes:
        id:                  The 11-character YouTube video identifier.
        title:               The video title as displayed on YouTube.
        thumbnail:           URL of the largest thumbnail available.
        available_languages: "English" followed by every translation
                             language of the default caption track.
    """
    id: str
    title: str
    thumbnail: str
    available_languages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "thumbnail": self.thumbnail,
            "availableLanguages": list(self.available_languages),
        }

    @classmethod
    def from_dict(cls, data: dict) -> VideoInfo:
        return cls(
            id=data["id"],
            title=data["title"],
            thumbnail=data["thumbnail"],
            available_languages=list(data.get("availableLanguages", [])),
        )


def best_thumbnail(thumbnails: dict) -> str:
    """
    Pick the highest-resolution thumbnail URL from a snippet's thumbnails.

    Raises:
        KeyError: if none of the known sizes is present.
    """
    for size in _THUMBNAIL_PREFERENCE:
        if size in thumbnails:
            return thumbnails[size]["url"]
    raise KeyError("no thumbnail in response")


# ---------------------------------------------------------------------------
# Metadata fetching
# ---------------------------------------------------------------------------

class MetadataFetcher:
    """Looks up video title and thumbnail through the YouTube Data API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._api_key = settings.youtube_api_key
        self._base_url = settings.youtube_api_base_url
        self._timeout = settings.request_timeout
        self._session = session if session is not None else requests.Session()

    def fetch(self, video_id: str) -> VideoInfo:
        """
        Fetch the title and thumbnail of a video.

        One request, no retries.  The returned VideoInfo has an empty
        available_languages list; the caller fills it in.

        Args:
            video_id: The 11-character YouTube video ID.

        Returns:
            A VideoInfo with id, title and thumbnail populated.

        Raises:
            VideoNotFoundError: The API answered with zero items.
            MetadataFetchError: Network error, timeout, non-2xx status, or a
                                response body missing the expected fields.
        """
        try:
            response = self._session.get(
                f"{self._base_url}/videos",
                params={"id": video_id, "part": "snippet", "key": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            # Drop the query string: it carries the API key.
            raise MetadataFetchError(video_id, reason=type(exc).__name__) from exc
        except ValueError as exc:
            raise MetadataFetchError(video_id, reason="response is not JSON") from exc

        items = data.get("items") if isinstance(data, dict) else None
        if not items:
            raise VideoNotFoundError(video_id)

        try:
            snippet = items[0]["snippet"]
            info = VideoInfo(
                id=video_id,
                title=snippet["title"],
                thumbnail=best_thumbnail(snippet["thumbnails"]),
            )
        except (KeyError, TypeError, IndexError) as exc:
            raise MetadataFetchError(video_id, reason=f"malformed response: {exc}") from exc

        logger.info("Fetched metadata for video %s: %r", video_id, info.title)
        return info
