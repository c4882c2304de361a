from mindwell.models import Mood, MoodEntry

HIGH_DISTRESS_MOODS = frozenset({Mood.SAD, Mood.ANGRY, Mood.ANXIOUS})


def is_high_distress(entry: MoodEntry) -> bool:
    return entry.mood in HIGH_DISTRESS_MOODS


class DistressLatch:
    """One-way alert flag. Set by the first distressing entry, cleared only by dismiss()."""

    def __init__(self):
        self.active = False

    def observe(self, entry: MoodEntry) -> bool:
        if is_high_distress(entry):
            self.active = True
        return self.active

    def dismiss(self):
        self.active = False
