"""
Overall assessment and "If I were your opponent" game plan extraction.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from loguru import logger

from fightscout.extractors.common import strip_bold
from fightscout.models import OverallAssessment, ReportSection

ASSESSMENT_SECTION_KEYWORDS = ('overall', 'assessment')
FIELD_MAX_CHARS = 100
DEFAULT_SUMMARY_MAX_CHARS = 1500
DEFAULT_SUMMARY_MIN_BOUNDARY = 500
DEFAULT_GAME_PLAN_MAX_CHARS = 1500

# Accept "**Archetype:** X", "Archetype: X" and "**Current Level:** X" forms
ARCHETYPE_PATTERN = re.compile(r"\*?\*?Archetype\*?\*?[:\s]*\*?\*?([^*\n]+)", re.IGNORECASE)
LEVEL_PATTERN = re.compile(r"\*?\*?(?:Current\s+)?Level\*?\*?[:\s]*\*?\*?([^*\n]+)", re.IGNORECASE)
ARCHETYPE_LINE_PATTERN = re.compile(r"\*?\*?Archetype\*?\*?[:\s]*\*?\*?[^*\n]+\*?\*?", re.IGNORECASE)
LEVEL_LINE_PATTERN = re.compile(
    r"\*?\*?(?:Current\s+)?Level\*?\*?[:\s]*\*?\*?[^*\n]+\*?\*?", re.IGNORECASE
)

# Ends at the next heading, a horizontal rule, two blank lines, the closing
# "Corner AI" verdict or the end of the text. The "Corner AI" terminator
# relies on wording the model is prompted to use.
GAME_PLAN_PATTERN = re.compile(
    r"(?:#+|(?:\*\*)?)[\"'“”]?IF I WERE YOUR OPPONENT[\"'“”]?(?:\*\*)?[:\s]*\n?"
    r"([\s\S]*?)"
    r"(?=(?:\*\*)?Corner AI|#|---|\n\n\n|\Z)",
    re.IGNORECASE,
)
SURROUNDING_QUOTES_PATTERN = re.compile(r"^[\"'“”]|[\"'“”]$")
TRAILING_VERDICT_PATTERN = re.compile(r"\*\*Corner AI.*$", re.IGNORECASE | re.DOTALL)


def truncate_at_sentence(
    text: str,
    max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
    min_boundary: int = DEFAULT_SUMMARY_MIN_BOUNDARY,
) -> str:
    """Bound ``text`` to ``max_chars``, preferring to end on a sentence.

    The cut lands after the last ``.``, ``?`` or ``!`` that still fits inside
    ``max_chars`` when that mark sits past ``min_boundary``; otherwise the text
    is hard-cut at ``max_chars``. The result is never longer than ``max_chars``.
    """
    if len(text) <= max_chars:
        return text
    cutoff = max(text.rfind(mark, 0, max_chars) for mark in ".?!")
    if cutoff > min_boundary:
        return text[:cutoff + 1]
    return text[:max_chars]


def _field(pattern: re.Pattern, content: str) -> Optional[str]:
    m = pattern.search(content)
    if not m:
        return None
    return strip_bold(m.group(1)).strip()[:FIELD_MAX_CHARS]


def extract_overall_assessment(
    sections: Sequence[ReportSection],
    raw_content: Optional[str] = None,
    max_summary_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
    min_boundary: int = DEFAULT_SUMMARY_MIN_BOUNDARY,
) -> OverallAssessment:
    """Level, archetype and summary; unknown fields keep their defaults.

    Level and archetype fall back to the whole report when there is no
    assessment section. The summary only ever comes from that section.
    """
    defaults = OverallAssessment()

    section = next(
        (s for s in sections if any(kw in s.title.lower() for kw in ASSESSMENT_SECTION_KEYWORDS)),
        None,
    )
    if section is None and not raw_content:
        return defaults

    content = (section.content if section else "") or raw_content or ""
    level = _field(LEVEL_PATTERN, content) or defaults.level
    archetype = _field(ARCHETYPE_PATTERN, content) or defaults.archetype

    summary = defaults.summary
    if section is not None and section.content:
        text = ARCHETYPE_LINE_PATTERN.sub("", section.content)
        text = LEVEL_LINE_PATTERN.sub("", text)
        text = strip_bold(text).strip()
        summary = truncate_at_sentence(text, max_summary_chars, min_boundary) or defaults.summary
    else:
        logger.debug("No assessment section found; summary left at default")

    return OverallAssessment(level=level, archetype=archetype, summary=summary)


def extract_opponent_game_plan(
    raw_content: Optional[str],
    max_chars: int = DEFAULT_GAME_PLAN_MAX_CHARS,
) -> Optional[str]:
    """Text under the "IF I WERE YOUR OPPONENT" heading, or None when absent."""
    if not raw_content:
        return None
    m = GAME_PLAN_PATTERN.search(raw_content)
    if not m:
        return None

    plan = SURROUNDING_QUOTES_PATTERN.sub("", m.group(1).strip())
    plan = TRAILING_VERDICT_PATTERN.sub("", plan).strip()[:max_chars]
    return plan or None
