"""
Data models for the Fight Scout report parser.

Report models are immutable once built and serialize with camelCase keys,
which is the shape the presentation layer stores and renders.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class TimestampCategory(str, Enum):
    """Coarse category of the action around a timestamp."""
    STRIKING = "striking"
    GRAPPLING = "grappling"
    DEFENSIVE = "defensive"
    PATTERN = "pattern"
    MENTAL = "mental"
    MOVEMENT = "movement"
    CARDIO = "cardio"
    OTHER = "other"


# Findings draw from the same vocabulary; they default to PATTERN instead of OTHER
FindingCategory = TimestampCategory


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INCONCLUSIVE = "inconclusive"


class AnalysisType(str, Enum):
    """Self-scout report flavours."""
    FULL = "full"
    QUICK = "quick"
    PROGRESS = "progress"


class OpponentReportType(str, Enum):
    """Opponent report flavours."""
    FULL = "full"
    QUICK = "quick"


class ReportModel(BaseModel):
    """Base for report objects: frozen, camelCase on the wire."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Timestamp(ReportModel):
    """A bracketed time marker found in report text."""
    time: str
    seconds: int = Field(ge=0)
    label: str = ""
    category: TimestampCategory = TimestampCategory.OTHER


class ReportSection(ReportModel):
    """One heading-delimited block of a report."""
    id: str
    title: str
    content: str = ""
    timestamps: List[Timestamp] = Field(default_factory=list)


class Finding(ReportModel):
    """A weakness, habit or strength extracted from a list item."""
    id: str
    title: str
    description: str
    severity: Severity
    category: FindingCategory = FindingCategory.PATTERN
    instance_count: int = Field(default=1, ge=1)
    confidence: Confidence
    timestamps: List[Timestamp] = Field(default_factory=list)
    counter_evidence: Optional[str] = None

    @property
    def earliest_seconds(self) -> Optional[int]:
        """Earliest cited second, or None without evidence."""
        if not self.timestamps:
            return None
        return min(t.seconds for t in self.timestamps)


class PriorityImprovement(ReportModel):
    """A ranked improvement item from a priorities/fix section."""
    area: str
    issue: str
    fix: str
    drill_recommendation: Optional[str] = None
    priority: int = Field(ge=1)


class OverallAssessment(ReportModel):
    level: str = "Unknown"
    archetype: str = "Unknown"
    summary: str = "No assessment available."


class DecisionNode(ReportModel):
    """One IF trigger THEN response rule."""
    trigger: str
    response: str
    timestamp: Optional[Timestamp] = None


class Technique(ReportModel):
    name: str
    timestamps: List[Timestamp] = Field(default_factory=list)


class ReportMetadata(ReportModel):
    """Counts and warnings derived from an assembled report."""
    total_findings: int = 0
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0
    validation_warnings: List[str] = Field(default_factory=list)


class _StoredReport(ReportModel):
    """Shared JSON round-trip helpers for top-level reports."""

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize for storage (camelCase keys, ISO dates)."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str):
        """Rehydrate a stored report; generatedAt comes back as a datetime."""
        return cls.model_validate_json(data)


class SelfScoutReport(_StoredReport):
    """Parsed self-scout report."""
    id: str
    generated_at: datetime = Field(default_factory=datetime.now)
    analysis_type: AnalysisType = AnalysisType.FULL
    overall_assessment: OverallAssessment = Field(default_factory=OverallAssessment)
    findings: List[Finding] = Field(default_factory=list)
    strengths: List[Finding] = Field(default_factory=list)
    priority_improvements: List[PriorityImprovement] = Field(default_factory=list)
    opponent_game_plan: Optional[str] = None
    sections: List[ReportSection] = Field(default_factory=list)
    timestamps: List[Timestamp] = Field(default_factory=list)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)
    raw_content: str = ""


class OpponentReport(_StoredReport):
    """Parsed opponent scouting report."""
    id: str
    generated_at: datetime = Field(default_factory=datetime.now)
    fighter_name: Optional[str] = None
    report_type: OpponentReportType = OpponentReportType.FULL
    strengths: List[Finding] = Field(default_factory=list)
    weaknesses: List[Finding] = Field(default_factory=list)
    decision_tree: List[DecisionNode] = Field(default_factory=list)
    most_utilized_techniques: List[Technique] = Field(default_factory=list)
    sections: List[ReportSection] = Field(default_factory=list)
    timestamps: List[Timestamp] = Field(default_factory=list)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)
    raw_content: str = ""


# ---------------------------------------------------------------------------
# Fight scoring (JSON path). Keys are snake_case exactly as the model emits them.
# ---------------------------------------------------------------------------

class RoundAnalysis(BaseModel):
    """Judging notes for a single round."""
    round: int
    winner: str
    score: str
    striking: str
    grappling: str
    aggression: str
    control: str
    explanation: str


class FightAnalysis(BaseModel):
    """Round-by-round scoring document returned by the scoring template."""
    fighter_a_name: str
    fighter_b_name: str
    rounds: List[RoundAnalysis]
    fighter_a_strengths: List[str]
    fighter_a_weaknesses: List[str]
    fighter_b_strengths: List[str]
    fighter_b_weaknesses: List[str]
    detected_tells: List[str]
    overall_rating: int
    overall_summary: str

    @field_validator('fighter_a_name', 'fighter_b_name')
    @classmethod
    def name_or_placeholder(cls, v, info: ValidationInfo):
        # The scoring prompt falls back to generic corner names
        if v and v.strip():
            return v.strip()
        return "Fighter A" if info.field_name == 'fighter_a_name' else "Fighter B"

    @property
    def rounds_won(self) -> Dict[str, int]:
        """Number of rounds credited to each fighter name."""
        tally = {self.fighter_a_name: 0, self.fighter_b_name: 0}
        for r in self.rounds:
            tally[r.winner] = tally.get(r.winner, 0) + 1
        return tally
