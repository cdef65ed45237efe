"""
Helpers shared by the list-based extractors.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from fightscout.models import ReportSection

# "- item", "* item", "• item" or "3. item"
LIST_ITEM_PATTERN = re.compile(r"^(?:[-*•]|\d+\.)\s+")


def list_item_text(line: str) -> Optional[str]:
    """Return the text of a bullet/numbered line with its prefix removed, else None."""
    m = LIST_ITEM_PATTERN.match(line)
    if not m:
        return None
    return line[m.end():].strip()


def sections_titled(sections: Iterable[ReportSection], keywords: Iterable[str]) -> List[ReportSection]:
    """Sections whose title contains any keyword (case-insensitive), in document order."""
    keywords = tuple(kw.lower() for kw in keywords)
    return [s for s in sections if any(kw in s.title.lower() for kw in keywords)]


def strip_bold(text: str) -> str:
    return (text or "").replace("**", "")
