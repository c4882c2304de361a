import json
from datetime import datetime, timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import groq
import pytest

from mindwell.ai_client import ModelGateway
from mindwell.config import Settings
from mindwell.models import Mood, MoodEntry, MoodSource


def completion(content):
    """Shape of a Groq chat completion, as far as the gateway reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def settings():
    return Settings(groq_api_key="test-key")


@pytest.fixture
def groq_client():
    return MagicMock()


@pytest.fixture
def gateway(groq_client, settings):
    return ModelGateway(groq_client, settings)


@pytest.fixture
def reply_with(groq_client):
    def _reply(payload):
        content = payload if isinstance(payload, str) else json.dumps(payload)
        groq_client.chat.completions.create.return_value = completion(content)
        return groq_client
    return _reply


@pytest.fixture
def fail_transport(groq_client):
    groq_client.chat.completions.create.side_effect = groq.GroqError("connection reset")
    groq_client.audio.transcriptions.create.side_effect = groq.GroqError("connection reset")
    return groq_client


def make_entry(mood, emoji="🙂", when=None, source=MoodSource.JOURNAL, notes=None):
    return MoodEntry(
        id=f"{mood.value}-{when}",
        mood=mood,
        emoji=emoji,
        date=when or datetime(2026, 10, 18, 12, 0),
        source=source,
        notes=notes,
    )


def make_history(*moods, start=datetime(2026, 10, 1, 9, 0)):
    return [make_entry(Mood(m) if isinstance(m, str) else m, when=start + timedelta(hours=i))
            for i, m in enumerate(moods)]
