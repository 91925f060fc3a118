"""
test_controller.py — Tests for the client-side view state controller.

The API client is a MagicMock; the begin/complete pairs are driven directly
to simulate responses arriving out of order.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from yt_transcript_viewer.client import ApiError, TranscriptApiClient
from yt_transcript_viewer.controller import ClientViewState, TranscriptViewController
from yt_transcript_viewer.extractor import TranscriptSegment
from yt_transcript_viewer.metadata import VideoInfo

_URL = "https://www.youtube.com/watch?v=abcdEFGH12J"

_INFO = VideoInfo(
    id="abcdEFGH12J",
    title="A video",
    thumbnail="https://example.com/t.jpg",
    available_languages=["English", "French"],
)
_ENGLISH = [TranscriptSegment("0", "Hi", 0.0, 1.5, "en")]
_FRENCH = [TranscriptSegment("0", "Salut", 0.0, 1.5, "French")]


@pytest.fixture()
def api() -> MagicMock:
    mock = MagicMock(spec=TranscriptApiClient)
    mock.get_transcript.return_value = (_ENGLISH, _INFO)
    mock.get_transcript_in_language.return_value = _FRENCH
    return mock


@pytest.fixture()
def controller(api: MagicMock) -> TranscriptViewController:
    return TranscriptViewController(api)


def _loaded(controller: TranscriptViewController) -> TranscriptViewController:
    controller.submit(_URL)
    return controller


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------

class TestSubmit:
    def test_initial_state_is_idle(self, controller: TranscriptViewController) -> None:
        assert controller.state == ClientViewState()
        assert controller.state.selected_language == "English"

    def test_begin_clears_error_and_transcript(self, controller: TranscriptViewController) -> None:
        _loaded(controller)
        controller.state = ClientViewState(error="old", transcript=_ENGLISH, video_info=_INFO)

        controller.begin_submit(_URL)

        assert controller.state.is_loading
        assert controller.state.error is None
        assert controller.state.transcript is None

    def test_success(self, controller: TranscriptViewController, api: MagicMock) -> None:
        controller.submit(_URL)

        api.get_transcript.assert_called_once_with(_URL)
        assert controller.state == ClientViewState(
            is_loading=False,
            transcript=_ENGLISH,
            video_info=_INFO,
            selected_language="English",
        )

    def test_success_resets_language(self, controller: TranscriptViewController) -> None:
        _loaded(controller).change_language("French")
        assert controller.state.selected_language == "French"

        controller.submit(_URL)

        assert controller.state.selected_language == "English"

    def test_failure_shows_server_message(self, controller: TranscriptViewController, api: MagicMock) -> None:
        _loaded(controller)
        api.get_transcript.side_effect = ApiError("Video not found", status=404)

        controller.submit(_URL)

        assert controller.state.error == "Video not found"
        assert controller.state.transcript is None
        assert controller.state.video_info is None
        assert not controller.state.is_loading


# ---------------------------------------------------------------------------
# change_language
# ---------------------------------------------------------------------------

class TestChangeLanguage:
    def test_ignored_without_video(self, controller: TranscriptViewController, api: MagicMock) -> None:
        controller.change_language("French")

        api.get_transcript_in_language.assert_not_called()
        assert controller.state == ClientViewState()
        assert controller.begin_language_change("French") is None

    def test_success(self, controller: TranscriptViewController, api: MagicMock) -> None:
        _loaded(controller).change_language("French")

        api.get_transcript_in_language.assert_called_once_with("abcdEFGH12J", "French")
        assert controller.state.transcript == _FRENCH
        assert controller.state.selected_language == "French"
        assert controller.state.video_info == _INFO

    def test_failure_keeps_video_info(self, controller: TranscriptViewController, api: MagicMock) -> None:
        _loaded(controller)
        api.get_transcript_in_language.side_effect = ApiError("Language not available", status=400)

        controller.change_language("French")

        assert controller.state.error == "Failed to load transcript in French"
        assert controller.state.video_info == _INFO
        assert controller.state.transcript == _ENGLISH
        assert controller.state.selected_language == "English"
        assert not controller.state.is_loading


# ---------------------------------------------------------------------------
# Request generations
# ---------------------------------------------------------------------------

class TestGenerations:
    def test_last_submitted_wins(self, controller: TranscriptViewController) -> None:
        """The older request resolving last doesn't overwrite the newer one."""
        other = VideoInfo(id="zyxwVUTS987", title="Other", thumbnail="x")
        first = controller.begin_submit(_URL)
        second = controller.begin_submit("https://youtu.be/zyxwVUTS987")

        assert controller.complete_submit(second, result=(_FRENCH, other))
        assert not controller.complete_submit(first, result=(_ENGLISH, _INFO))

        assert controller.state.video_info == other
        assert controller.state.transcript == _FRENCH

    def test_stale_error_ignored(self, controller: TranscriptViewController) -> None:
        first = controller.begin_submit(_URL)
        second = controller.begin_submit(_URL)
        controller.complete_submit(second, result=(_ENGLISH, _INFO))

        controller.complete_submit(first, error=ApiError("Failed to fetch transcript"))

        assert controller.state.error is None
        assert controller.state.transcript == _ENGLISH

    def test_still_loading_until_latest_completes(self, controller: TranscriptViewController) -> None:
        first = controller.begin_submit(_URL)
        controller.begin_submit(_URL)

        controller.complete_submit(first, result=(_ENGLISH, _INFO))

        assert controller.state.is_loading
        assert controller.state.transcript is None

    def test_submit_supersedes_language_change(self, controller: TranscriptViewController) -> None:
        _loaded(controller)
        switch = controller.begin_language_change("French")
        controller.begin_submit(_URL)

        assert not controller.complete_language_change(switch, transcript=_FRENCH)
        assert controller.state.selected_language == "English"

    def test_generation_increases(self, controller: TranscriptViewController) -> None:
        start = controller.generation
        request = controller.begin_submit(_URL)
        assert request.generation == start + 1 == controller.generation
