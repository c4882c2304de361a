"""Tests for mood classification from text, images and voice."""

import base64

import pytest

from mindwell.ai_client import FailureReason
from mindwell.classifier import (
    IMAGE_FALLBACK,
    TEXT_FALLBACK,
    classify_from_image,
    classify_from_text,
    request_image_mood,
    transcribe_audio,
)
from mindwell.models import Mood, MoodReading


def _sent_kwargs(groq_client):
    return groq_client.chat.completions.create.call_args.kwargs


def test_text_success_returns_parsed_reading(gateway, reply_with):
    client = reply_with({"emoji": "😌", "mood": "Calm", "notes": "A quiet, settled day."})

    reading = classify_from_text(gateway, "I walked by the lake and felt at peace.")

    assert reading == MoodReading(mood=Mood.CALM, emoji="😌", notes="A quiet, settled day.")
    kwargs = _sent_kwargs(client)
    assert kwargs["temperature"] == 0.2
    assert kwargs["response_format"] == {"type": "json_object"}
    prompt = kwargs["messages"][0]["content"]
    assert 'Entry: "I walked by the lake and felt at peace."' in prompt
    assert '"notes"' in prompt


def test_text_transport_failure_returns_literal_fallback(gateway, fail_transport):
    reading = classify_from_text(gateway, "anything")
    assert reading == MoodReading(mood=Mood.NEUTRAL, emoji="😐", notes="Could not analyze mood.")


@pytest.mark.parametrize("content", [
    "not json at all",
    "",
    '{"emoji": "😀", "mood": "Ecstatic", "notes": "x"}',
    '{"emoji": "😀", "mood": "Happy"}',
    '{"emoji": "", "mood": "Happy", "notes": "x"}',
])
def test_text_bad_responses_degrade_to_fallback(gateway, reply_with, content):
    reply_with(content)
    assert classify_from_text(gateway, "today was a lot") == TEXT_FALLBACK


def test_blank_text_skips_remote_call(gateway, groq_client):
    assert classify_from_text(gateway, "   ") == TEXT_FALLBACK
    groq_client.chat.completions.create.assert_not_called()


def test_image_success_synthesizes_notes(gateway, reply_with):
    client = reply_with({"emoji": "😄", "mood": "Happy"})

    reading = classify_from_image(gateway, b"\xff\xd8jpeg-bytes")

    assert reading == MoodReading(mood=Mood.HAPPY, emoji="😄", notes="Detected a happy expression.")
    kwargs = _sent_kwargs(client)
    parts = kwargs["messages"][0]["content"]
    assert parts[0]["type"] == "text"
    assert "Analyze the dominant mood of the person in this image." in parts[0]["text"]
    expected = base64.b64encode(b"\xff\xd8jpeg-bytes").decode("ascii")
    assert parts[1]["image_url"]["url"] == f"data:image/jpeg;base64,{expected}"
    assert kwargs["model"] == gateway.settings.vision_model


def test_image_missing_mood_returns_literal_fallback(gateway, reply_with):
    reply_with({"emoji": "😄"})
    reading = classify_from_image(gateway, b"img")
    assert reading == MoodReading(mood=Mood.NEUTRAL, emoji="😐", notes="Could not determine mood from image.")


def test_image_blank_emoji_is_incomplete(gateway, reply_with):
    reply_with({"emoji": "  ", "mood": "Sad"})
    result = request_image_mood(gateway, b"img")
    assert result.failure == FailureReason.INCOMPLETE
    assert classify_from_image(gateway, b"img") == IMAGE_FALLBACK


def test_image_transport_failure_returns_fallback(gateway, fail_transport):
    assert classify_from_image(gateway, b"img") == IMAGE_FALLBACK


def test_image_schema_does_not_request_notes(gateway, reply_with):
    client = reply_with({"emoji": "😢", "mood": "Sad"})
    classify_from_image(gateway, b"img")
    text = _sent_kwargs(client)["messages"][0]["content"][0]["text"]
    assert '"notes"' not in text


def test_transcribe_audio_returns_text(gateway, groq_client):
    groq_client.audio.transcriptions.create.return_value = type("T", (), {"text": " I feel okay today. "})()
    assert transcribe_audio(gateway, b"RIFF....") == "I feel okay today."
    kwargs = groq_client.audio.transcriptions.create.call_args.kwargs
    assert kwargs["file"] == ("voice-log.wav", b"RIFF....")
    assert kwargs["model"] == gateway.settings.speech_model


def test_transcribe_audio_failure_returns_none(gateway, fail_transport):
    assert transcribe_audio(gateway, b"RIFF....") is None


def test_transcribe_without_audio_returns_none(gateway, groq_client):
    assert transcribe_audio(gateway, b"") is None
    groq_client.audio.transcriptions.create.assert_not_called()
