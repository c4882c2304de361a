"""Mood statistics and chart series. Pure functions over snapshots of history."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from mindwell.models import Mood, MoodEntry

DEFAULT_EMOJI = "😐"
MIN_TREND_POINTS = 2

# Y-axis position for trend charts only. Not a clinical ordering.
SEVERITY_SCALE: Dict[Mood, int] = {
    Mood.ANGRY: 0,
    Mood.SAD: 1,
    Mood.TIRED: 2,
    Mood.ANXIOUS: 3,
    Mood.NEUTRAL: 4,
    Mood.CONTENT: 5,
    Mood.CALM: 6,
    Mood.EXCITED: 7,
    Mood.HAPPY: 8,
}

SEVERITY_EMOJI: Dict[int, str] = {
    0: "😡",
    1: "😢",
    2: "😴",
    3: "😟",
    4: "😐",
    5: "😌",
    6: "🧘",
    7: "🤩",
    8: "😄",
}


@dataclass(frozen=True)
class MoodStat:
    mood: Mood
    count: int
    percentage: int
    emoji: str


@dataclass(frozen=True)
class TrendPoint:
    label: str
    value: int
    mood: Mood


@dataclass(frozen=True)
class TrendSeries:
    points: List[TrendPoint]

    @property
    def is_sufficient(self) -> bool:
        return len(self.points) >= MIN_TREND_POINTS


@dataclass(frozen=True)
class WindowSummary:
    title: str
    entries: List[MoodEntry]
    distribution: List[MoodStat]
    trend: TrendSeries


# (title, days); None means unfiltered
WINDOWS = [
    ("Last 7 Days", 7),
    ("Last 30 Days", 30),
    ("All Time", None),
]


def recent_entries(history: Sequence[MoodEntry], n: int = 5) -> List[MoodEntry]:
    if n <= 0:
        return []
    return list(reversed(history[-n:]))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def first_emojis(history: Sequence[MoodEntry]) -> Dict[Mood, str]:
    emojis: Dict[Mood, str] = {}
    for entry in history:
        emojis.setdefault(entry.mood, entry.emoji)
    return emojis


def distribution(entries: Sequence[MoodEntry],
                 history: Optional[Sequence[MoodEntry]] = None) -> List[MoodStat]:
    """Per-mood counts and percentages, most frequent first.

    Emojis come from each mood's first occurrence in ``history`` (the full,
    unfiltered history) so every window shows the same face for a mood.
    Equal counts keep first-seen order.
    """
    if not entries:
        return []
    counts: Dict[Mood, int] = {}
    for entry in entries:
        counts[entry.mood] = counts.get(entry.mood, 0) + 1

    emojis = first_emojis(history if history is not None else entries)
    total = len(entries)
    stats = [
        MoodStat(
            mood=mood,
            count=count,
            percentage=_round_half_up(100 * count / total),
            emoji=emojis.get(mood, DEFAULT_EMOJI),
        )
        for mood, count in counts.items()
    ]
    # sorted() is stable, so ties stay in first-seen order
    return sorted(stats, key=lambda s: s.count, reverse=True)


def severity_of(mood: Mood) -> int:
    return SEVERITY_SCALE.get(mood, SEVERITY_SCALE[Mood.NEUTRAL])


def severity_emoji(value: int) -> str:
    return SEVERITY_EMOJI.get(value, DEFAULT_EMOJI)


def chart_label(when: datetime) -> str:
    return f"{when:%b} {when.day}"


def trend_series(entries: Sequence[MoodEntry]) -> TrendSeries:
    return TrendSeries(points=[
        TrendPoint(label=chart_label(e.date), value=severity_of(e.mood), mood=e.mood)
        for e in entries
    ])


# ===============================
# TIME WINDOWS
# ===============================

def window_start(days: int, now: datetime) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days)


def within_window(history: Sequence[MoodEntry], days: Optional[int], now: datetime) -> List[MoodEntry]:
    if days is None:
        return list(history)
    start = window_start(days, now)
    return [e for e in history if start <= e.date <= now]


def summarize_windows(history: Sequence[MoodEntry], now: Optional[datetime] = None) -> List[WindowSummary]:
    now = now or datetime.now()
    summaries = []
    for title, days in WINDOWS:
        entries = within_window(history, days, now)
        summaries.append(WindowSummary(
            title=title,
            entries=entries,
            distribution=distribution(entries, history),
            trend=trend_series(entries),
        ))
    return summaries
