"""
Finding and strength extraction.

Every bullet or numbered line inside a weaknesses-style section becomes a
Finding with inferred severity, category and confidence. Strength sections
produce the same shape with severity fixed to low and confidence to high.
Both lists are deduplicated on the first 30 characters of the title and then
ordered by their earliest cited timestamp.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from fightscout.extractors.common import list_item_text, sections_titled
from fightscout.extractors.timestamps import extract_timestamps, strip_timestamps
from fightscout.models import (
    Confidence,
    Finding,
    FindingCategory,
    ReportSection,
    Severity,
)
from fightscout.utils.ids import IdFactory, new_id

# Section title keywords. The two sets never overlap: a title such as
# "Most Utilized Techniques" belongs to neither.
FINDING_SECTION_KEYWORDS = (
    'weaknesses',
    'exploitable patterns',
    'habits',
    'bad habits',
    'major holes',
)
STRENGTH_SECTION_KEYWORDS = ('strengths', 'good things', 'offensive threats')

MIN_LINE_CHARS = 15
MIN_TEXT_CHARS = 10
TITLE_MAX_CHARS = 60
DEDUPE_KEY_CHARS = 30
UNTITLED_FINDING = "Untitled Finding"

CRITICAL_KEYWORDS = ('critical', 'major hole', 'biggest')
HIGH_KEYWORDS = ('high', 'significant', 'dangerous')
LOW_KEYWORDS = ('low', 'minor', 'small')

INCONCLUSIVE_KEYWORDS = ('inconclusive', 'unclear', 'cannot assess')
LOW_CONFIDENCE_KEYWORDS = ('low confidence',)

_FINDING_CATEGORIES = (
    (FindingCategory.STRIKING, re.compile(
        r"punch|kick|jab|cross|hook|strike|striking|boxing|overhand|hands|chin")),
    (FindingCategory.GRAPPLING, re.compile(
        r"takedown|clinch|submission|guard|mount|grappl|wrestling|ground|back|rnc|choke")),
    (FindingCategory.MOVEMENT, re.compile(
        r"stance|footwork|movement|balance|position|lateral|pivot|circle")),
    (FindingCategory.CARDIO, re.compile(
        r"cardio|tired|fatigue|gas|pace|breathing|output")),
    (FindingCategory.MENTAL, re.compile(
        r"mental|frustrat|panic|composure|iq|decision")),
)

BOLD_RUN_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
SENTENCE_END_PATTERN = re.compile(r"[.!?]")
COUNTER_EVIDENCE_PATTERN = re.compile(
    r"\b(?:however|but|except|although|counter[- ]?evidence)\b:?,?\s*([^.]+)",
    re.IGNORECASE,
)


def extract_title(text: str) -> str:
    """Short title for a finding: the first bold run, else the first sentence."""
    bold = BOLD_RUN_PATTERN.search(text)
    if bold:
        return strip_timestamps(bold.group(1))[:TITLE_MAX_CHARS] or UNTITLED_FINDING

    first_sentence = SENTENCE_END_PATTERN.split(text)[0]
    clean = strip_timestamps(first_sentence or text)
    if len(clean) < 3:
        return UNTITLED_FINDING
    return clean[:TITLE_MAX_CHARS]


def infer_severity(section_title: str, text: str, index: int) -> Severity:
    """Keyword-driven severity with a fallback on the line's position in the section.

    The positional fallback treats earlier lines as more severe.
    """
    lower = f"{section_title} {text}".lower()

    if any(kw in lower for kw in CRITICAL_KEYWORDS):
        return Severity.CRITICAL
    if any(kw in lower for kw in HIGH_KEYWORDS):
        return Severity.HIGH
    if any(kw in lower for kw in LOW_KEYWORDS):
        return Severity.LOW

    if index <= 2:
        return Severity.HIGH
    if index <= 5:
        return Severity.MEDIUM
    return Severity.LOW


def infer_category(text: str) -> FindingCategory:
    lower = (text or "").lower()
    for category, pattern in _FINDING_CATEGORIES:
        if pattern.search(lower):
            return category
    return FindingCategory.PATTERN


def infer_confidence(text: str, timestamp_count: int) -> Confidence:
    """Explicit hedging wins; otherwise confidence follows the evidence count."""
    lower = (text or "").lower()

    if any(kw in lower for kw in INCONCLUSIVE_KEYWORDS):
        return Confidence.INCONCLUSIVE
    if any(kw in lower for kw in LOW_CONFIDENCE_KEYWORDS):
        return Confidence.LOW

    if timestamp_count >= 3:
        return Confidence.HIGH
    if timestamp_count >= 1:
        return Confidence.MEDIUM
    return Confidence.LOW


def extract_counter_evidence(text: str) -> Optional[str]:
    """Clause following a contrastive marker ("however", "but", ...), if any."""
    m = COUNTER_EVIDENCE_PATTERN.search(text or "")
    if not m:
        return None
    clause = m.group(1).strip()
    return clause or None


def deduplicate_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Drop findings whose title prefix was already seen; first occurrence wins."""
    seen = set()
    unique: List[Finding] = []
    for finding in findings:
        key = finding.title.lower()[:DEDUPE_KEY_CHARS]
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)
    return unique


def sort_by_earliest_timestamp(findings: Iterable[Finding]) -> List[Finding]:
    """Stable chronological order; findings without timestamps go last."""
    def _key(f: Finding) -> float:
        earliest = f.earliest_seconds
        return math.inf if earliest is None else earliest

    return sorted(findings, key=_key)


def _candidate_lines(section: ReportSection):
    """Yield (line_index, text) for list items long enough to be findings."""
    for index, line in enumerate(section.content.split("\n")):
        clean = line.strip()
        if len(clean) <= MIN_LINE_CHARS:
            continue
        text = list_item_text(clean)
        if text is None or len(text) <= MIN_TEXT_CHARS:
            continue
        yield index, text


def _findings_from_section(section: ReportSection, id_factory: IdFactory) -> List[Finding]:
    findings: List[Finding] = []
    for index, text in _candidate_lines(section):
        timestamps = extract_timestamps(text)
        findings.append(Finding(
            id=id_factory(),
            title=extract_title(text),
            description=text,
            severity=infer_severity(section.title, text, index),
            category=infer_category(text),
            instance_count=len(timestamps) or 1,
            confidence=infer_confidence(text, len(timestamps)),
            timestamps=timestamps,
            counter_evidence=extract_counter_evidence(text),
        ))
    return findings


def _strengths_from_section(section: ReportSection, id_factory: IdFactory) -> List[Finding]:
    strengths: List[Finding] = []
    for _, text in _candidate_lines(section):
        timestamps = extract_timestamps(text)
        strengths.append(Finding(
            id=id_factory(),
            title=extract_title(text),
            description=text,
            severity=Severity.LOW,
            category=infer_category(text),
            instance_count=len(timestamps) or 1,
            confidence=Confidence.HIGH,
            timestamps=timestamps,
        ))
    return strengths


def extract_findings(
    sections: Sequence[ReportSection],
    raw_content: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> List[Finding]:
    """Weaknesses/habits from every matching section, deduplicated and in time order.

    ``raw_content`` is accepted so every extractor shares the
    ``(sections, raw_content)`` signature; findings only come from sections.
    """
    id_factory = id_factory or new_id
    collected: List[Finding] = []
    for section in sections_titled(sections, FINDING_SECTION_KEYWORDS):
        collected.extend(_findings_from_section(section, id_factory))

    findings = sort_by_earliest_timestamp(deduplicate_findings(collected))
    logger.debug(f"Extracted {len(findings)} findings ({len(collected) - len(findings)} duplicates dropped)")
    return findings


def extract_strengths(
    sections: Sequence[ReportSection],
    raw_content: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> List[Finding]:
    """Strengths from every matching section, deduplicated and in time order."""
    id_factory = id_factory or new_id
    collected: List[Finding] = []
    for section in sections_titled(sections, STRENGTH_SECTION_KEYWORDS):
        collected.extend(_strengths_from_section(section, id_factory))

    strengths = sort_by_earliest_timestamp(deduplicate_findings(collected))
    logger.debug(f"Extracted {len(strengths)} strengths")
    return strengths


def extract_findings_from_sections(
    sections: Sequence[ReportSection],
    id_factory: Optional[IdFactory] = None,
) -> List[Finding]:
    """Older entry point that works from sections alone."""
    joined = "\n".join(s.content for s in sections)
    return extract_findings(sections, joined, id_factory=id_factory)
