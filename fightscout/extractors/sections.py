"""
Split a model-generated Markdown report into titled sections.

Two heading styles are recognized:
- ``#``, ``##`` or ``###`` followed by a title (preferred)
- an all-caps line wrapped in bold markers, e.g. ``**MAJOR HOLES**`` (legacy)

Text before the first heading lands in an implicit "Introduction" section.
The scan is a fold over the lines with an explicit accumulator, so no state
leaks between calls.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import List, NamedTuple, Optional, Tuple

from loguru import logger

from fightscout.extractors.timestamps import extract_timestamps
from fightscout.models import ReportSection

HASH_HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.+)")
BOLD_HEADING_PATTERN = re.compile(r"^\*\*[A-Z0-9\s&:,-]+\*\*$")

INTRO_SECTION_ID = "intro"
INTRO_SECTION_TITLE = "Introduction"
SECTION_ID_MAX_CHARS = 50


class _OpenSection(NamedTuple):
    id: str
    title: str
    chunks: Tuple[str, ...] = ()


class _ParseState(NamedTuple):
    completed: Tuple[ReportSection, ...] = ()
    current: Optional[_OpenSection] = None


def generate_section_id(title: str) -> str:
    """Slug for a section title: lowercase, alphanumerics and hyphens, max 50 chars."""
    slug = re.sub(r"[^a-z0-9\s]", "", (title or "").lower())
    slug = re.sub(r"\s+", "-", slug)
    return slug[:SECTION_ID_MAX_CHARS]


def heading_title(line: str) -> Optional[str]:
    """Title of a heading line (bold markers removed), or None for body text."""
    trimmed = line.strip()
    hash_match = HASH_HEADING_PATTERN.match(trimmed)
    if hash_match:
        return hash_match.group(2).replace("**", "").strip()
    if BOLD_HEADING_PATTERN.match(trimmed):
        return trimmed.replace("**", "").strip()
    return None


def _finalize(section: _OpenSection) -> ReportSection:
    content = "".join(section.chunks).strip()
    return ReportSection(
        id=section.id,
        title=section.title,
        content=content,
        timestamps=extract_timestamps(content),
    )


def _close_current(state: _ParseState) -> Tuple[ReportSection, ...]:
    if state.current is None:
        return state.completed
    return state.completed + (_finalize(state.current),)


def _step(state: _ParseState, line: str) -> _ParseState:
    if not line.strip():
        # Keep paragraph breaks inside a section; drop leading blank lines
        if state.current is None:
            return state
        return state._replace(current=state.current._replace(chunks=state.current.chunks + ("\n",)))

    title = heading_title(line)
    if title is not None:
        return _ParseState(
            completed=_close_current(state),
            current=_OpenSection(id=generate_section_id(title), title=title),
        )

    current = state.current or _OpenSection(id=INTRO_SECTION_ID, title=INTRO_SECTION_TITLE)
    return state._replace(current=current._replace(chunks=current.chunks + (line + "\n",)))


def parse_report_sections(markdown: Optional[str]) -> List[ReportSection]:
    """Parse Markdown into ordered sections with their own timestamps."""
    if not markdown:
        return []

    final_state = reduce(_step, markdown.split("\n"), _ParseState())
    sections = list(_close_current(final_state))
    logger.debug(f"Parsed {len(sections)} report sections")
    return sections
