"""
Report assembler: turns raw model Markdown into a SelfScoutReport or OpponentReport.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from loguru import logger

from fightscout.config import ParsingConfig, get_config
from fightscout.extractors.assessment import (
    extract_opponent_game_plan,
    extract_overall_assessment,
)
from fightscout.extractors.decision_tree import extract_decision_tree
from fightscout.extractors.findings import extract_findings, extract_strengths
from fightscout.extractors.improvements import extract_improvements
from fightscout.extractors.sections import parse_report_sections
from fightscout.extractors.techniques import extract_most_utilized_techniques
from fightscout.extractors.timestamps import extract_timestamps
from fightscout.models import (
    AnalysisType,
    Confidence,
    Finding,
    OpponentReport,
    OpponentReportType,
    OverallAssessment,
    ReportMetadata,
    ReportSection,
    SelfScoutReport,
    Severity,
    Timestamp,
)
from fightscout.utils.ids import IdFactory, new_id
from fightscout.utils.markdown_normalizer import normalize_report_markdown

T = TypeVar("T")

NO_STRENGTHS_WARNING = "No strengths were identified in this analysis."
OVER_SENSITIVE_WARNING = "High number of critical findings - review may be over-sensitive."
DEFAULT_CRITICAL_THRESHOLD = 5


def validate_report(
    findings: Sequence[Finding],
    strengths: Sequence[Finding],
    critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD,
) -> List[str]:
    """Structural warnings for an assembled report. Rules fire independently."""
    warnings: List[str] = []

    low_evidence = [
        f for f in findings
        if f.instance_count < 2 and f.confidence != Confidence.INCONCLUSIVE
    ]
    if low_evidence:
        warnings.append(f"{len(low_evidence)} finding(s) have limited timestamp evidence.")

    if not strengths:
        warnings.append(NO_STRENGTHS_WARNING)

    critical_count = sum(1 for f in findings if f.severity == Severity.CRITICAL)
    if critical_count > critical_threshold:
        warnings.append(OVER_SENSITIVE_WARNING)

    return warnings


def build_report_metadata(
    findings: Sequence[Finding],
    strengths: Sequence[Finding],
    critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD,
    extra_warnings: Sequence[str] = (),
) -> ReportMetadata:
    """Severity counts over ``findings`` plus validation warnings."""
    def _count(severity: Severity) -> int:
        return sum(1 for f in findings if f.severity == severity)

    return ReportMetadata(
        total_findings=len(findings),
        critical_count=_count(Severity.CRITICAL),
        high_count=_count(Severity.HIGH),
        medium_count=_count(Severity.MEDIUM),
        low_count=_count(Severity.LOW),
        validation_warnings=validate_report(findings, strengths, critical_threshold) + list(extra_warnings),
    )


def _sorted_by_seconds(timestamps: Sequence[Timestamp]) -> List[Timestamp]:
    # sorted() is stable, so equal times keep their document order
    return sorted(timestamps, key=lambda t: t.seconds)


class ReportParser:
    """Assemble typed reports from model-generated Markdown."""

    def __init__(
        self,
        config: Optional[ParsingConfig] = None,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the report parser.

        Args:
            config: Parsing limits; defaults to the global configuration
            id_factory: Source of report/finding ids (uuid4 strings by default)
            clock: Source of ``generatedAt`` (``datetime.now`` by default)
        """
        self.config = config or get_config().parsing
        self.id_factory = id_factory or new_id
        self.clock = clock or datetime.now

    def _prepare(self, raw_content: Optional[str]) -> Tuple[str, List[ReportSection]]:
        text = raw_content or ""
        if self.config.normalize_markdown:
            text = normalize_report_markdown(text)
        return text, parse_report_sections(text)

    def _run(self, name: str, extractor: Callable[[], T], default: T, problems: List[str]) -> T:
        """Run one extractor; a failure degrades to ``default`` and is recorded."""
        try:
            return extractor()
        except Exception as e:
            logger.exception(f"{name} extraction failed: {e}")
            problems.append(f"Could not extract {name}: {e}")
            return default

    def parse_self_scout(
        self,
        raw_content: Optional[str],
        analysis_type: Union[AnalysisType, str] = AnalysisType.FULL,
    ) -> SelfScoutReport:
        """
        Parse a self-scout report.

        Args:
            raw_content: Markdown returned by the model
            analysis_type: full, quick or progress

        Returns:
            SelfScoutReport; malformed text yields empty collections, never an error
        """
        analysis_type = AnalysisType(analysis_type)
        cfg = self.config
        text, sections = self._prepare(raw_content)
        problems: List[str] = []

        timestamps = self._run(
            "timestamps", lambda: _sorted_by_seconds(extract_timestamps(text)), [], problems)
        findings = self._run(
            "findings", lambda: extract_findings(sections, text, self.id_factory), [], problems)
        strengths = self._run(
            "strengths", lambda: extract_strengths(sections, text, self.id_factory), [], problems)
        improvements = self._run(
            "priority improvements",
            lambda: extract_improvements(sections, text, cfg.max_improvements), [], problems)
        assessment = self._run(
            "overall assessment",
            lambda: extract_overall_assessment(
                sections, text, cfg.summary_max_chars, cfg.summary_min_boundary),
            OverallAssessment(), problems)
        game_plan = self._run(
            "opponent game plan",
            lambda: extract_opponent_game_plan(text, cfg.game_plan_max_chars), None, problems)

        metadata = build_report_metadata(
            findings, strengths, cfg.critical_warning_threshold, problems)
        for warning in metadata.validation_warnings:
            logger.warning(f"Self-scout report: {warning}")

        report = SelfScoutReport(
            id=self.id_factory(),
            generated_at=self.clock(),
            analysis_type=analysis_type,
            overall_assessment=assessment,
            findings=findings,
            strengths=strengths,
            priority_improvements=improvements,
            opponent_game_plan=game_plan,
            sections=sections,
            timestamps=timestamps,
            metadata=metadata,
            raw_content=raw_content or "",
        )
        logger.info(
            f"Parsed {analysis_type.value} self-scout report: {len(sections)} sections, "
            f"{len(findings)} findings, {len(strengths)} strengths, {len(timestamps)} timestamps"
        )
        return report

    def parse_opponent(
        self,
        raw_content: Optional[str],
        report_type: Union[OpponentReportType, str] = OpponentReportType.FULL,
        fighter_name: Optional[str] = None,
    ) -> OpponentReport:
        """
        Parse an opponent scouting report.

        Args:
            raw_content: Markdown returned by the model
            report_type: full or quick
            fighter_name: Optional name supplied with the request

        Returns:
            OpponentReport; malformed text yields empty collections, never an error
        """
        report_type = OpponentReportType(report_type)
        cfg = self.config
        text, sections = self._prepare(raw_content)
        problems: List[str] = []

        # Master list comes from the sections themselves, then ordered by time
        timestamps = _sorted_by_seconds([t for s in sections for t in s.timestamps])
        strengths = self._run(
            "strengths", lambda: extract_strengths(sections, text, self.id_factory), [], problems)
        weaknesses = self._run(
            "weaknesses", lambda: extract_findings(sections, text, self.id_factory), [], problems)
        decision_tree = self._run(
            "decision tree", lambda: extract_decision_tree(sections), [], problems)
        techniques = self._run(
            "most utilized techniques",
            lambda: extract_most_utilized_techniques(sections, cfg.max_techniques), [], problems)

        metadata = build_report_metadata(
            weaknesses, strengths, cfg.critical_warning_threshold, problems)
        for warning in metadata.validation_warnings:
            logger.warning(f"Opponent report: {warning}")

        report = OpponentReport(
            id=self.id_factory(),
            generated_at=self.clock(),
            fighter_name=fighter_name,
            report_type=report_type,
            strengths=strengths,
            weaknesses=weaknesses,
            decision_tree=decision_tree,
            most_utilized_techniques=techniques,
            sections=sections,
            timestamps=timestamps,
            metadata=metadata,
            raw_content=raw_content or "",
        )
        logger.info(
            f"Parsed {report_type.value} opponent report"
            f"{' for ' + fighter_name if fighter_name else ''}: {len(weaknesses)} weaknesses, "
            f"{len(strengths)} strengths, {len(decision_tree)} rules, {len(techniques)} techniques"
        )
        return report


# Global parser instance
_parser: Optional[ReportParser] = None


def get_report_parser() -> ReportParser:
    """Get the global report parser instance."""
    global _parser
    if _parser is None:
        _parser = ReportParser()
    return _parser


def reset_report_parser():
    """Reset the global report parser instance."""
    global _parser
    _parser = None


def parse_self_scout_report(
    raw_content: Optional[str],
    analysis_type: Union[AnalysisType, str] = AnalysisType.FULL,
    id_factory: Optional[IdFactory] = None,
) -> SelfScoutReport:
    """Parse a self-scout report with the global configuration."""
    parser = ReportParser(id_factory=id_factory) if id_factory else get_report_parser()
    return parser.parse_self_scout(raw_content, analysis_type)


def parse_opponent_report(
    raw_content: Optional[str],
    report_type: Union[OpponentReportType, str] = OpponentReportType.FULL,
    fighter_name: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> OpponentReport:
    """Parse an opponent report with the global configuration."""
    parser = ReportParser(id_factory=id_factory) if id_factory else get_report_parser()
    return parser.parse_opponent(raw_content, report_type, fighter_name)
