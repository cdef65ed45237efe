"""
Most utilized techniques: the first few list items of a techniques/weapons section.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from loguru import logger

from fightscout.extractors.common import list_item_text, sections_titled
from fightscout.extractors.timestamps import extract_timestamps, strip_timestamps
from fightscout.models import ReportSection, Technique

TECHNIQUE_SECTION_KEYWORDS = ('utilized', 'techniques', 'weapons')
DEFAULT_MAX_TECHNIQUES = 5
MIN_TEXT_CHARS = 5

LEADING_BOLD_PATTERN = re.compile(r"^\*\*(.*?)\*\*.*$")


def technique_name(text: str) -> str:
    """Name without timestamps; a leading bold run is taken as the whole name."""
    stripped = strip_timestamps(text)
    m = LEADING_BOLD_PATTERN.match(stripped)
    return (m.group(1) if m else stripped).strip()


def extract_most_utilized_techniques(
    sections: Sequence[ReportSection],
    max_items: int = DEFAULT_MAX_TECHNIQUES,
) -> List[Technique]:
    """First ``max_items`` techniques encountered (not ranked by frequency)."""
    techniques: List[Technique] = []

    for section in sections_titled(sections, TECHNIQUE_SECTION_KEYWORDS):
        for line in section.content.split("\n"):
            text = list_item_text(line.strip())
            if text is None or len(text) <= MIN_TEXT_CHARS:
                continue
            techniques.append(Technique(
                name=technique_name(text),
                timestamps=extract_timestamps(text),
            ))
            if len(techniques) >= max_items:
                logger.debug(f"Technique list capped at {max_items}")
                return techniques

    return techniques
