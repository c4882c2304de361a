"""Tests for the distress latch and the session state that owns history."""

from datetime import datetime

import pytest

from conftest import make_entry
from mindwell.chat import ChatSession
from mindwell.distress import DistressLatch, is_high_distress
from mindwell.models import Mood, MoodReading, MoodSource
from mindwell.state import AppState


@pytest.mark.parametrize("mood", list(Mood))
def test_is_high_distress(mood):
    expected = mood in (Mood.SAD, Mood.ANGRY, Mood.ANXIOUS)
    assert is_high_distress(make_entry(mood)) is expected


def test_latch_stays_set_until_dismissed():
    latch = DistressLatch()
    assert not latch.observe(make_entry(Mood.HAPPY))
    assert latch.observe(make_entry(Mood.ANXIOUS))
    assert latch.observe(make_entry(Mood.CALM))
    assert latch.observe(make_entry(Mood.HAPPY))
    latch.dismiss()
    assert not latch.active
    assert latch.observe(make_entry(Mood.ANGRY))


def test_add_mood_entry_appends_and_stamps():
    state = AppState()
    when = datetime(2026, 10, 18, 9, 0)
    reading = MoodReading(mood=Mood.CALM, emoji="😌", notes="A steady morning.")

    entry = state.add_mood_entry(reading, MoodSource.VOICE, now=when)

    assert entry.date == when
    assert entry.source == MoodSource.VOICE
    assert entry.notes == "A steady morning."
    assert entry.id
    assert state.mood_history == [entry]
    assert state.latest_entry is entry
    assert not state.high_distress_alert


def test_history_is_append_only():
    state = AppState()
    state.add_mood_entry(MoodReading(Mood.HAPPY, "😄", "x"), MoodSource.JOURNAL)
    snapshot = state.mood_history
    snapshot.clear()
    assert len(state.mood_history) == 1


def test_clock_going_back_keeps_history_ordered():
    # the repeated hour when daylight saving time ends
    state = AppState()
    first = state.add_mood_entry(MoodReading(Mood.HAPPY, "😄", "x"), MoodSource.JOURNAL,
                                 now=datetime(2026, 11, 1, 1, 50))
    second = state.add_mood_entry(MoodReading(Mood.SAD, "😢", "y"), MoodSource.VOICE,
                                  now=datetime(2026, 11, 1, 1, 10))

    assert state.mood_history == [first, second]
    assert second.date == first.date
    assert second.mood == Mood.SAD
    assert state.high_distress_alert


def test_distress_alert_is_sticky_until_dismissed():
    state = AppState()
    state.add_mood_entry(MoodReading(Mood.SAD, "😢", "x"), MoodSource.FACIAL)
    state.add_mood_entry(MoodReading(Mood.HAPPY, "😄", "y"), MoodSource.JOURNAL)
    assert state.high_distress_alert

    state.dismiss_distress()
    assert not state.high_distress_alert


def test_start_chat_is_idempotent(gateway):
    state = AppState()
    first = state.start_chat(gateway)
    assert isinstance(first, ChatSession)
    assert state.start_chat(gateway) is first
