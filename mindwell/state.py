import logging
import uuid
from datetime import datetime
from typing import List, Optional

from mindwell.ai_client import ModelGateway
from mindwell.chat import ChatSession
from mindwell.distress import DistressLatch
from mindwell.models import MoodEntry, MoodReading, MoodSource

logger = logging.getLogger(__name__)


class AppState:
    """Everything one session knows. Owned by the UI and passed to whoever needs it."""

    def __init__(self, user_name: str = "Alex"):
        self.user_name = user_name
        self._mood_history: List[MoodEntry] = []
        self.distress = DistressLatch()
        self.chat: Optional[ChatSession] = None

    @property
    def mood_history(self) -> List[MoodEntry]:
        # a copy, so callers cannot rewrite history behind our back
        return list(self._mood_history)

    @property
    def latest_entry(self) -> Optional[MoodEntry]:
        return self._mood_history[-1] if self._mood_history else None

    @property
    def high_distress_alert(self) -> bool:
        return self.distress.active

    def add_mood_entry(self, reading: MoodReading, source: MoodSource,
                       now: Optional[datetime] = None) -> MoodEntry:
        now = now or datetime.now()
        last = self.latest_entry
        if last is not None and now < last.date:
            # local clocks can step back (DST, NTP); history stays non-decreasing
            logger.info("Clock went back from %s to %s, keeping the later time",
                        last.date.isoformat(), now.isoformat())
            now = last.date

        entry = MoodEntry(
            id=uuid.uuid4().hex,
            mood=reading.mood,
            emoji=reading.emoji,
            date=now,
            source=source,
            notes=reading.notes,
        )
        self._mood_history.append(entry)
        self.distress.observe(entry)
        return entry

    def dismiss_distress(self):
        self.distress.dismiss()

    def start_chat(self, gateway: ModelGateway) -> ChatSession:
        if self.chat is None:
            self.chat = ChatSession(gateway)
        return self.chat
