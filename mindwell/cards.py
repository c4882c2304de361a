"""HTML snippets rendered with ``unsafe_allow_html``. Every dynamic value is escaped."""

from html import escape

from mindwell.models import MoodEntry, Recommendations


def entry_card(entry: MoodEntry) -> str:
    notes = f'<br><small><em>"{escape(entry.notes)}"</em></small>' if entry.notes else ""
    return (
        f'<div class="mood-card">{escape(entry.emoji)} <strong>{entry.mood.value}</strong> '
        f'<small>{entry.date:%a, %b} {entry.date.day} - {entry.source.value}</small>{notes}</div>'
    )


def text_card(text: str, prefix: str = "") -> str:
    return f'<div class="mood-card">{prefix}{escape(text)}</div>'


def for_mood_banner(recs: Recommendations) -> str:
    return (
        f'<div class="for-mood">For when you\'re feeling <strong>{escape(recs.for_mood.value.lower())}</strong>, '
        "here are some ideas.</div>"
    )
