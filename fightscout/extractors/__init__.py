"""
Extractors that turn model-generated Markdown into report objects.

Each extractor is a pure function over the parsed sections and/or the raw
report text, so they can be tuned and tested independently.
"""

from fightscout.extractors.assessment import (
    extract_opponent_game_plan,
    extract_overall_assessment,
    truncate_at_sentence,
)
from fightscout.extractors.decision_tree import extract_decision_tree
from fightscout.extractors.findings import (
    deduplicate_findings,
    extract_findings,
    extract_findings_from_sections,
    extract_strengths,
    sort_by_earliest_timestamp,
)
from fightscout.extractors.improvements import extract_improvements
from fightscout.extractors.sections import generate_section_id, parse_report_sections
from fightscout.extractors.techniques import extract_most_utilized_techniques
from fightscout.extractors.timestamps import (
    extract_timestamps,
    strip_timestamps,
)

__all__ = [
    "deduplicate_findings",
    "extract_decision_tree",
    "extract_findings",
    "extract_findings_from_sections",
    "extract_improvements",
    "extract_most_utilized_techniques",
    "extract_opponent_game_plan",
    "extract_overall_assessment",
    "extract_strengths",
    "extract_timestamps",
    "generate_section_id",
    "parse_report_sections",
    "sort_by_earliest_timestamp",
    "strip_timestamps",
    "truncate_at_sentence",
]
