import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
from typing import Sequence

from mindwell.aggregation import SEVERITY_SCALE, MoodStat, TrendSeries

# Tick marks at the bottom, middle and top of the scale
_Y_TICKS = [0, 4, 8]
_VALUE_TO_MOOD = {value: mood.value for mood, value in SEVERITY_SCALE.items()}

LINE_COLOR = "#8A3FFC"
BAR_COLOR = "#667eea"


def trend_figure(series: TrendSeries, figsize=(10, 3)):
    """Line chart of the severity scale. Callers check series.is_sufficient first."""
    labels = [p.label for p in series.points]
    values = [p.value for p in series.points]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(range(len(values)), values, marker='o', linewidth=2, color=LINE_COLOR, markersize=5)
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, fontsize=8, rotation=0)
    ax.set_ylim(-0.5, 8.5)
    ax.set_yticks(_Y_TICKS)
    ax.set_yticklabels([_VALUE_TO_MOOD[v] for v in _Y_TICKS])
    ax.grid(True, alpha=0.3, linestyle='--')
    fig.tight_layout()
    return fig


def distribution_figure(stats: Sequence[MoodStat], figsize=(5, 3)):
    moods = [s.mood.value for s in stats]
    percentages = [s.percentage for s in stats]

    fig, ax = plt.subplots(figsize=figsize)
    bars = ax.barh(moods, percentages, color=BAR_COLOR)
    ax.invert_yaxis()  # most frequent on top
    ax.set_xlim(0, 100)
    ax.set_xlabel("% of entries")
    for bar, pct in zip(bars, percentages):
        ax.text(bar.get_width() + 1, bar.get_y() + bar.get_height() / 2, f"{pct}%",
                va='center', fontsize=8)
    ax.grid(True, alpha=0.3, axis='x')
    fig.tight_layout()
    return fig
