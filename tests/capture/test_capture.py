"""Tests for the narrative capture contract."""

import pytest

from voicevault.capture.producer import (
    CAPTURE_ERROR_CODES,
    CAPTURE_ERROR_MESSAGES,
    CaptureSegment,
    NarrativeCapture,
    error_message,
    normalize_error,
)


class TestErrorVocabulary:
    def test_every_code_has_message(self):
        assert set(CAPTURE_ERROR_MESSAGES) == set(CAPTURE_ERROR_CODES)

    def test_legacy_alias(self):
        assert normalize_error("microphone_access_denied") == "microphone_permission_denied"

    def test_unknown_code_falls_back(self):
        assert normalize_error("service-not-allowed") == "recognition_error"
        assert normalize_error(None) == "recognition_error"

    def test_error_message(self):
        assert "text input" in error_message("not_supported")


class TestNarrativeCapture:
    def test_final_segments_concatenate(self):
        capture = NarrativeCapture()
        capture.on_segment("I feel", is_final=True)
        capture.on_segment("unheard", is_final=True)
        assert capture.final_text == "I feel unheard"

    def test_interim_keeps_latest(self):
        capture = NarrativeCapture()
        capture.on_segment("I fe")
        capture.on_segment("I feel")
        assert capture.interim_text == "I feel"
        capture.on_segment("I feel", is_final=True)
        assert capture.interim_text == ""

    def test_error_requires_fallback(self):
        capture = NarrativeCapture()
        capture.on_error("no_speech_detected")
        assert capture.error == "no_speech_detected"
        assert capture.needs_fallback is True
        assert capture.show_text_input is False
        assert capture.error_message.startswith("No speech was detected")

    def test_permission_error_shows_text_input(self):
        capture = NarrativeCapture()
        capture.on_error("microphone_access_denied")
        assert capture.show_text_input is True

    def test_error_after_final_text_keeps_text(self):
        capture = NarrativeCapture()
        capture.on_segment("I need a break", is_final=True)
        capture.on_error("network_error")
        assert capture.needs_fallback is False
        assert capture.resolve() == "I need a break"

    def test_resolve_prefers_transcript(self):
        capture = NarrativeCapture()
        assert capture.resolve("  typed story  ") == "typed story"
        capture.on_segment("spoken story", is_final=True)
        assert capture.resolve("typed story") == "spoken story"

    def test_edit_replaces_transcript(self):
        capture = NarrativeCapture()
        capture.on_segment("I ned respect", is_final=True)
        capture.edit("I need respect")
        assert capture.final_text == "I need respect"

    def test_reset(self):
        capture = NarrativeCapture()
        capture.on_segment("text", is_final=True)
        capture.on_error("timeout")
        capture.reset()
        assert capture.final_text == ""
        assert capture.error is None

    @pytest.mark.asyncio
    async def test_consume_async_stream(self):
        async def producer():
            yield CaptureSegment(text="I am")
            yield CaptureSegment(text="I am upset", is_final=True)
            yield CaptureSegment(text="about", is_final=False)
            yield CaptureSegment(text="the schedule", is_final=True)

        capture = NarrativeCapture()
        text = await capture.consume(producer())
        assert text == "I am upset the schedule"
        assert capture.error is None

    @pytest.mark.asyncio
    async def test_consume_error_segment(self):
        async def producer():
            yield CaptureSegment(error="not_supported")

        capture = NarrativeCapture()
        assert await capture.consume(producer()) == ""
        assert capture.needs_fallback is True
