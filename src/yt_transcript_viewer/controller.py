"""
controller.py — Client-side view state for the transcript UI.

TranscriptViewController owns a ClientViewState and changes it only in
response to user actions (submit a URL, pick a language) and to the
completion of the requests those actions start.

Every request is stamped with a generation number.  Starting a new request
bumps the generation, and a completion carrying an older generation is
dropped, so the most recently *started* request always wins no matter in
which order responses arrive.

Each action comes in two forms:
    begin_submit() / complete_submit()                  split, for callers that
    begin_language_change() / complete_language_change() run requests themselves
    submit() / change_language()                        blocking convenience
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from yt_transcript_viewer.client import GENERIC_FAILURE, ApiError, TranscriptApiClient
from yt_transcript_viewer.extractor import DEFAULT_LANGUAGE, TranscriptSegment
from yt_transcript_viewer.metadata import VideoInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientViewState:
    """
    Everything the UI renders.

    idle:    not loading, no error, no transcript
    loading: is_loading
    success: transcript (and video_info) present
    error:   error present
    """
    is_loading: bool = False
    error: str | None = None
    transcript: list[TranscriptSegment] | None = None
    video_info: VideoInfo | None = None
    selected_language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class PendingRequest:
    generation: int
    url: str | None = None
    language: str | None = None


class TranscriptViewController:
    def __init__(self, client: TranscriptApiClient) -> None:
        self._client = client
        self._generation = 0
        self.state = ClientViewState()

    @property
    def generation(self) -> int:
        return self._generation

    def _next(self, **pending) -> PendingRequest:
        self._generation += 1
        return PendingRequest(generation=self._generation, **pending)

    def _is_stale(self, request: PendingRequest) -> bool:
        if request.generation != self._generation:
            logger.debug("Dropping stale response (generation %d, current %d)",
                         request.generation, self._generation)
            return True
        return False

    # -- submit ------------------------------------------------------------

    def begin_submit(self, url: str) -> PendingRequest:
        """Enter the loading state for a new URL, clearing error and transcript."""
        self.state = replace(self.state, is_loading=True, error=None, transcript=None)
        return self._next(url=url)

    def complete_submit(
        self,
        request: PendingRequest,
        result: tuple[list[TranscriptSegment], VideoInfo] | None = None,
        error: Exception | None = None,
    ) -> bool:
        """
        Apply the outcome of a submit request.

        Returns:
            False when the request was superseded and its outcome ignored.
        """
        if self._is_stale(request):
            return False
        if error is not None:
            self.state = replace(
                self.state,
                is_loading=False,
                error=_message(error),
                transcript=None,
                video_info=None,
            )
            return True
        transcript, video_info = result
        self.state = ClientViewState(
            is_loading=False,
            transcript=transcript,
            video_info=video_info,
            selected_language=DEFAULT_LANGUAGE,
        )
        return True

    def submit(self, url: str) -> None:
        request = self.begin_submit(url)
        try:
            result = self._client.get_transcript(url)
        except ApiError as exc:
            self.complete_submit(request, error=exc)
        else:
            self.complete_submit(request, result=result)

    # -- language change -------------------------------------------------------

    def begin_language_change(self, language: str) -> PendingRequest | None:
        """
        Enter the loading state for a language switch.

        Returns None, leaving the state untouched, when no video is loaded.
        """
        if self.state.video_info is None:
            return None
        self.state = replace(self.state, is_loading=True, error=None)
        return self._next(language=language)

    def complete_language_change(
        self,
        request: PendingRequest,
        transcript: list[TranscriptSegment] | None = None,
        error: Exception | None = None,
    ) -> bool:
        """Apply the outcome of a language switch; video info is never touched."""
        if self._is_stale(request):
            return False
        if error is not None:
            self.state = replace(
                self.state,
                is_loading=False,
                error=f"Failed to load transcript in {request.language}",
            )
            return True
        self.state = replace(
            self.state,
            is_loading=False,
            transcript=transcript,
            selected_language=request.language,
        )
        return True

    def change_language(self, language: str) -> None:
        request = self.begin_language_change(language)
        if request is None:
            return
        try:
            transcript = self._client.get_transcript_in_language(
                self.state.video_info.id, language,
            )
        except ApiError as exc:
            self.complete_language_change(request, error=exc)
        else:
            self.complete_language_change(request, transcript=transcript)


def _message(error: Exception) -> str:
    if isinstance(error, ApiError):
        return error.message
    return str(error) or GENERIC_FAILURE
