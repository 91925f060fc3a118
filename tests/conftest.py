from __future__ import annotations

import pytest

from yt_transcript_viewer.config import Settings


@pytest.fixture()
def settings() -> Settings:
    """Settings with a dummy API key and short timeouts."""
    return Settings(youtube_api_key="test-key", request_timeout=5.0, transcript_timeout=5.0)
