"""
Priority improvement extraction (priorities / improvements / "The Fix" sections).
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from loguru import logger

from fightscout.extractors.common import list_item_text, sections_titled
from fightscout.extractors.findings import infer_category
from fightscout.models import PriorityImprovement, ReportSection

IMPROVEMENT_SECTION_KEYWORDS = ('priority', 'improvement', 'fix')
DEFAULT_MAX_IMPROVEMENTS = 10
MIN_LINE_CHARS = 15
DEFAULT_FIX = "Address this issue through focused training and drilling."

FIX_PATTERN = re.compile(
    r"(?:fix|improve|work on|focus on|practice|develop)[:\s]+([^.]+)", re.IGNORECASE
)
DRILL_PATTERN = re.compile(r"(?:drill|exercise|practice)[:\s]+([^.]+)", re.IGNORECASE)


def extract_fix(text: str) -> str:
    m = FIX_PATTERN.search(text or "")
    if m:
        return m.group(1).strip()
    return DEFAULT_FIX


def extract_drill(text: str) -> Optional[str]:
    m = DRILL_PATTERN.search(text or "")
    return m.group(1).strip() if m else None


def extract_improvements(
    sections: Sequence[ReportSection],
    raw_content: Optional[str] = None,
    max_items: int = DEFAULT_MAX_IMPROVEMENTS,
) -> List[PriorityImprovement]:
    """Ranked improvements; priority follows document order across sections."""
    improvements: List[PriorityImprovement] = []

    for section in sections_titled(sections, IMPROVEMENT_SECTION_KEYWORDS):
        for line in section.content.split("\n"):
            clean = line.strip()
            if len(clean) <= MIN_LINE_CHARS:
                continue
            text = list_item_text(clean)
            if not text:
                continue
            improvements.append(PriorityImprovement(
                area=infer_category(text).value,
                issue=text,
                fix=extract_fix(text),
                drill_recommendation=extract_drill(text),
                priority=len(improvements) + 1,
            ))

    logger.debug(f"Extracted {len(improvements)} priority improvements")
    return improvements[:max_items]
