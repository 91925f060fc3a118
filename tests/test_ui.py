"""
test_ui.py — Tests for the Streamlit page, driven through Streamlit's AppTest.

A controller over a mocked API client is placed in session state before the
first run, so the page never talks to a backend.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from streamlit.testing.v1 import AppTest

import yt_transcript_viewer.ui as ui
from yt_transcript_viewer.client import ApiError, TranscriptApiClient
from yt_transcript_viewer.controller import TranscriptViewController
from yt_transcript_viewer.extractor import TranscriptSegment
from yt_transcript_viewer.metadata import VideoInfo

_URL = "https://www.youtube.com/watch?v=abcdEFGH12J"

_INFO = VideoInfo(
    id="abcdEFGH12J",
    title="A video",
    thumbnail="https://example.com/t.jpg",
    available_languages=["English", "French", "German"],
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


def _page(controller: TranscriptViewController) -> AppTest:
    at = AppTest.from_file(str(Path(ui.__file__)), default_timeout=30)
    at.session_state["controller"] = controller
    return at.run()


# ---------------------------------------------------------------------------
# Idle and submit
# ---------------------------------------------------------------------------

class TestSubmit:
    def test_idle_page_shows_features(self, controller: TranscriptViewController) -> None:
        at = _page(controller)

        assert not at.exception
        assert [s.value for s in at.subheader] == [title for title, _ in ui.FEATURES]
        assert len(at.selectbox) == 0

    def test_submit_renders_transcript(self, controller: TranscriptViewController, api: MagicMock) -> None:
        at = _page(controller)

        at.text_input[0].input(_URL)
        at.button[0].click().run()

        assert not at.exception
        api.get_transcript.assert_called_once_with(_URL)
        assert at.selectbox[0].value == "English"
        assert at.selectbox[0].options == ["English", "French", "German"]

    def test_submit_failure_shows_error(self, controller: TranscriptViewController, api: MagicMock) -> None:
        api.get_transcript.side_effect = ApiError("Video not found", status=404)
        at = _page(controller)

        at.text_input[0].input(_URL)
        at.button[0].click().run()

        assert [e.value for e in at.error] == ["Video not found"]
        assert len(at.selectbox) == 0


# ---------------------------------------------------------------------------
# Language selector mirrors the controller
# ---------------------------------------------------------------------------

class TestLanguageSelector:
    def test_successful_change(self, controller: TranscriptViewController, api: MagicMock) -> None:
        controller.submit(_URL)
        at = _page(controller)

        at.selectbox[0].select("French").run()

        api.get_transcript_in_language.assert_called_once_with("abcdEFGH12J", "French")
        assert controller.state.selected_language == "French"
        assert at.selectbox[0].value == "French"
        assert not at.error

    def test_failed_change_reverts_selector(self, controller: TranscriptViewController, api: MagicMock) -> None:
        api.get_transcript_in_language.side_effect = ApiError("Language not available", status=400)
        controller.submit(_URL)
        at = _page(controller)

        at.selectbox[0].select("French").run()

        assert [e.value for e in at.error] == ["Failed to load transcript in French"]
        assert controller.state.selected_language == "English"
        assert at.selectbox[0].value == controller.state.selected_language

    def test_resubmitting_same_url_resets_selector(
        self, controller: TranscriptViewController, api: MagicMock,
    ) -> None:
        controller.submit(_URL)
        at = _page(controller)
        at.selectbox[0].select("French").run()
        assert at.selectbox[0].value == "French"

        controller.submit(_URL)
        at.run()

        assert controller.state.selected_language == "English"
        assert at.selectbox[0].value == "English"
