from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


# ===============================
# ENUMS
# ===============================

class Mood(str, Enum):
    HAPPY = "Happy"
    SAD = "Sad"
    NEUTRAL = "Neutral"
    ANXIOUS = "Anxious"
    CALM = "Calm"
    EXCITED = "Excited"
    TIRED = "Tired"
    ANGRY = "Angry"
    CONTENT = "Content"


class MoodSource(str, Enum):
    JOURNAL = "Journal"
    VOICE = "Voice"
    FACIAL = "Facial"


class VideoType(str, Enum):
    MEDITATION = "Meditation"
    FUNNY = "Funny"


class Sender(str, Enum):
    USER = "user"
    AI = "ai"


# ===============================
# MOOD RECORDS
# ===============================

@dataclass(frozen=True)
class MoodReading:
    """Result of one classification: what the model (or a fallback) decided."""
    mood: Mood
    emoji: str
    notes: str


@dataclass(frozen=True)
class MoodEntry:
    id: str
    mood: Mood
    emoji: str
    date: datetime
    source: MoodSource
    notes: Optional[str] = None


# ===============================
# RECOMMENDATIONS
# ===============================

@dataclass(frozen=True)
class Playlist:
    title: str
    description: str


@dataclass(frozen=True)
class Video:
    title: str
    type: VideoType


@dataclass
class Recommendations:
    for_mood: Mood
    breathing: List[str] = field(default_factory=list)
    journaling: List[str] = field(default_factory=list)
    music: List[Playlist] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)


# ===============================
# CHAT
# ===============================

@dataclass(frozen=True)
class ChatMessage:
    id: str
    text: str
    sender: Sender
