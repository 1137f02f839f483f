"""Service module exports."""

from . import (
    achievements,
    budgeting,
    levels,
    periods,
    progress,
    records,
    streaks,
    summary,
    trends,
    velocity,
)

__all__ = [
    "achievements",
    "budgeting",
    "levels",
    "periods",
    "progress",
    "records",
    "streaks",
    "summary",
    "trends",
    "velocity",
]
