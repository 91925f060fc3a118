"""
ui.py — Streamlit page for viewing, copying and downloading YouTube transcripts.

The page only renders the controller's state; widgets whose value mirrors
that state are re-synced from it on every run.

Run with:
    yt-transcript-viewer ui
"""

import streamlit as st

from yt_transcript_viewer.client import TranscriptApiClient
from yt_transcript_viewer.config import backend_url
from yt_transcript_viewer.controller import TranscriptViewController
from yt_transcript_viewer.formatting import (
    download_filename,
    format_srt,
    format_text,
    format_timestamp,
)

FEATURES = [
    ("Multiple Languages", "Support for subtitles in various languages"),
    ("Easy Download", "Download transcripts in TXT or SRT formats"),
    ("Time Stamps", "Toggle timestamps for precise video reference"),
]


def get_controller() -> TranscriptViewController:
    """One controller per browser session."""
    if "controller" not in st.session_state:
        client = TranscriptApiClient(base_url=backend_url())
        st.session_state.controller = TranscriptViewController(client)
    return st.session_state.controller


def render_input(controller: TranscriptViewController) -> None:
    with st.form("video-input"):
        url = st.text_input(
            "YouTube URL",
            placeholder="Paste YouTube URL here...",
            label_visibility="collapsed",
            disabled=controller.state.is_loading,
        )
        submitted = st.form_submit_button("Generate", disabled=controller.state.is_loading)
    if submitted and url.strip():
        with st.spinner("Fetching transcript..."):
            controller.submit(url.strip())


def render_features() -> None:
    for column, (title, description) in zip(st.columns(len(FEATURES)), FEATURES):
        with column:
            st.subheader(title)
            st.caption(description)


def render_transcript(controller: TranscriptViewController) -> None:
    state = controller.state
    info = state.video_info
    select_key = f"language-{info.id}"

    def on_language_change() -> None:
        with st.spinner("Loading translation..."):
            controller.change_language(st.session_state[select_key])

    with st.container(border=True):
        thumb, header = st.columns([1, 4])
        with thumb:
            st.image(info.thumbnail, width="stretch")
        with header:
            st.markdown(f"### {info.title}")
            languages = list(info.available_languages)
            if state.selected_language not in languages:
                languages.insert(0, state.selected_language)
            st.session_state[select_key] = state.selected_language
            st.selectbox(
                "Language",
                languages,
                key=select_key,
                on_change=on_language_change,
            )
            show_timestamps = st.toggle("Timestamps", value=True)

        copy_text = format_text(state.transcript, timestamps=show_timestamps)
        txt_col, srt_col = st.columns(2)
        with txt_col:
            st.download_button(
                "Download TXT",
                data=copy_text,
                file_name=download_filename(info, state.selected_language, "txt"),
                mime="text/plain",
            )
        with srt_col:
            st.download_button(
                "Download SRT",
                data=format_srt(state.transcript),
                file_name=download_filename(info, state.selected_language, "srt"),
                mime="application/x-subrip",
            )

        with st.expander("Copy", expanded=False):
            st.code(copy_text, language=None)

        with st.container(height=600):
            for segment in state.transcript:
                if show_timestamps:
                    st.caption(f"[{format_timestamp(segment.start_time)}]")
                st.write(segment.text)


def main() -> None:
    st.set_page_config(page_title="YouTube Transcript Generator", page_icon="🎬", layout="centered")
    st.title("YouTube Transcript Generator")
    st.write(
        "Generate and download transcripts from any YouTube video in seconds. "
        "Multiple language support and easy-to-use interface."
    )

    controller = get_controller()
    render_input(controller)

    state = controller.state
    if state.error:
        st.error(state.error)
    if state.transcript is not None and state.video_info is not None:
        render_transcript(controller)
    elif not state.error:
        render_features()


if __name__ == "__main__":
    main()
