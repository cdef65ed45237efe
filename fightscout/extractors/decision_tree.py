"""
Counter-strategy rules written as ``IF <trigger> THEN <response>`` lines.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from loguru import logger

from fightscout.extractors.common import sections_titled, strip_bold
from fightscout.extractors.timestamps import extract_timestamps
from fightscout.models import DecisionNode, ReportSection

DECISION_SECTION_KEYWORDS = ('decision', 'counter logic', 'tree')

# Trigger is non-greedy so the first THEN splits the rule
RULE_PATTERN = re.compile(r"(?:[-*•]|\d+\.)?\s*\bIF\s+(.+?)\s+THEN\s+(.+)", re.IGNORECASE)


def extract_decision_tree(sections: Sequence[ReportSection]) -> List[DecisionNode]:
    """Rules in source order across every matching section; no dedup."""
    nodes: List[DecisionNode] = []

    for section in sections_titled(sections, DECISION_SECTION_KEYWORDS):
        for line in section.content.split("\n"):
            m = RULE_PATTERN.search(line)
            if not m:
                continue
            timestamps = extract_timestamps(line)
            nodes.append(DecisionNode(
                trigger=strip_bold(m.group(1)).strip(),
                response=m.group(2).strip(),
                timestamp=timestamps[0] if timestamps else None,
            ))

    logger.debug(f"Extracted {len(nodes)} decision-tree rules")
    return nodes
