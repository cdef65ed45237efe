"""
Timestamp extraction for model-generated fight reports.

Recognizes ``[0:45]``, ``(0:45)`` and the range forms ``[0:45-1:00]`` /
``(0:45-1:00)``. Only the start of a range is kept. Seconds are not range
checked, so ``[9:99]`` reads as 639 seconds.
"""

from __future__ import annotations

import re
from typing import List, Optional

from fightscout.models import Timestamp, TimestampCategory

TIMESTAMP_PATTERN = re.compile(r"[\[\(](\d{1,2}):(\d{2})(?:-\d{1,2}:\d{2})?[\]\)]")

CONTEXT_RADIUS = 50
LABEL_MAX_CHARS = 40

# Checked in order; the first category whose pattern matches wins
_CONTEXT_CATEGORIES = (
    (TimestampCategory.STRIKING, re.compile(
        r"punch|kick|jab|cross|hook|uppercut|overhand|elbow|knee|strike|striking|boxing")),
    (TimestampCategory.GRAPPLING, re.compile(
        r"takedown|clinch|submission|guard|mount|choke|wrestling|grappl|ground"
        r"|back control|half guard|side control")),
    (TimestampCategory.DEFENSIVE, re.compile(
        r"block|dodge|slip|parry|defense|defensive|head movement|sprawl")),
    (TimestampCategory.PATTERN, re.compile(
        r"habit|pattern|always|tends|consistently|every time|predictable|telegrap")),
)


def categorize_timestamp_context(context: str) -> TimestampCategory:
    """Classify the text surrounding a timestamp."""
    lower = (context or "").lower()
    for category, pattern in _CONTEXT_CATEGORIES:
        if pattern.search(lower):
            return category
    return TimestampCategory.OTHER


def extract_timestamps(text: Optional[str]) -> List[Timestamp]:
    """Find every timestamp token in ``text``, in order of appearance."""
    if not text:
        return []

    timestamps: List[Timestamp] = []
    for match in TIMESTAMP_PATTERN.finditer(text):
        minutes, secs = int(match.group(1)), int(match.group(2))

        start = max(0, match.start() - CONTEXT_RADIUS)
        end = min(len(text), match.start() + CONTEXT_RADIUS)
        context = re.sub(r"[\n\r]", " ", text[start:end]).strip()
        label = context[:LABEL_MAX_CHARS] + ("..." if len(context) > LABEL_MAX_CHARS else "")

        timestamps.append(Timestamp(
            time=f"{minutes}:{secs:02d}",
            seconds=minutes * 60 + secs,
            label=label,
            category=categorize_timestamp_context(context),
        ))
    return timestamps


def strip_timestamps(text: str) -> str:
    """Remove timestamp tokens (used to clean titles and names)."""
    return TIMESTAMP_PATTERN.sub("", text or "").strip()
