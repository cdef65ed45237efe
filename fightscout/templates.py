"""
Report template registry.

Each template names a kind of analysis the product can request from the model,
the media it needs, and the sections its output is expected to contain. The
kind decides which parser reads the model's reply.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fightscout.exceptions import UnknownReportTypeError


class InputType(str, Enum):
    OPPONENT_VIDEO = "opponentVideo"
    USER_VIDEO = "userVideo"
    TALE_OF_TAPE = "taleOfTape"
    CONTEXT = "context"


class ReportKind(str, Enum):
    """Which parser handles a template's output."""
    SELF_SCOUT = "self_scout"
    OPPONENT = "opponent"
    GAME_PLAN = "game_plan"
    SCORING = "scoring"


@dataclass(frozen=True)
class OutputSection:
    id: str
    title: str
    description: str
    required: bool = True


@dataclass(frozen=True)
class ReportTemplate:
    id: str
    name: str
    description: str
    kind: ReportKind
    variant: str
    required_inputs: Tuple[InputType, ...]
    output_sections: Tuple[OutputSection, ...] = ()

    @property
    def section_titles(self) -> List[str]:
        return [s.title for s in self.output_sections]


@dataclass
class InputValidation:
    valid: bool
    missing: List[str] = field(default_factory=list)


_OPPONENT = (InputType.OPPONENT_VIDEO,)
_USER = (InputType.USER_VIDEO,)
_BOTH = (InputType.OPPONENT_VIDEO, InputType.USER_VIDEO)

TEMPLATES: Dict[str, ReportTemplate] = {
    t.id: t for t in [
        ReportTemplate(
            id="FIGHT_SCORING",
            name="Fight Scoring & Analysis",
            description="Round-by-round judging and technical scoring.",
            kind=ReportKind.SCORING,
            variant="full",
            required_inputs=_OPPONENT,
            output_sections=(OutputSection("json_output", "JSON Analysis", "Structured JSON"),),
        ),
        ReportTemplate(
            id="OPPONENT_BREAKDOWN_FULL",
            name="Full Opponent Scouting Report",
            description="Complete technical breakdown of an opponent including striking, "
                        "grappling, habits, and weaknesses.",
            kind=ReportKind.OPPONENT,
            variant="full",
            required_inputs=_OPPONENT,
            output_sections=(
                OutputSection("profile", "Fighter Profile", "Overview of style and attributes"),
                OutputSection("decision_tree", "Counter Logic", "If/Then decision tree"),
                OutputSection("strengths", "Strengths", "Top 5 Strengths"),
                OutputSection("weaknesses", "Weaknesses", "Top 5 Weaknesses"),
            ),
        ),
        ReportTemplate(
            id="OPPONENT_BREAKDOWN_QUICK",
            name="Quick Scout",
            description="Condensed 30-second summary, top threats, and habits.",
            kind=ReportKind.OPPONENT,
            variant="quick",
            required_inputs=_OPPONENT,
            output_sections=(
                OutputSection("summary", "Summary", "High level overview"),
                OutputSection("threats", "Threats", "Top offensive weapons"),
                OutputSection("habits", "Habits", "Exploitable patterns"),
            ),
        ),
        ReportTemplate(
            id="GAME_PLAN_FULL",
            name="Full Game Plan",
            description="Matchup-based strategy combining user and opponent footage.",
            kind=ReportKind.GAME_PLAN,
            variant="full",
            required_inputs=_BOTH,
            output_sections=(
                OutputSection("matchup", "Matchup", "Stylistic comparison"),
                OutputSection("blueprint", "Victory Blueprint", "Core strategy"),
                OutputSection("rounds", "Round Guide", "Round by round tactics"),
            ),
        ),
        ReportTemplate(
            id="GAME_PLAN_QUICK",
            name="Fight Week Strategy",
            description="Condensed game plan focusing on immediate win conditions.",
            kind=ReportKind.GAME_PLAN,
            variant="quick",
            required_inputs=_BOTH,
            output_sections=(
                OutputSection("win_condition", "Win Condition", "How to win"),
                OutputSection("danger", "Danger", "What to avoid"),
            ),
        ),
        ReportTemplate(
            id="SELF_SCOUT_FULL",
            name="Comprehensive Self-Scout",
            description="Deep dive into your own game, looking for holes and strengths.",
            kind=ReportKind.SELF_SCOUT,
            variant="full",
            required_inputs=_USER,
            output_sections=(
                OutputSection("assessment", "Assessment", "General overview"),
                OutputSection("holes", "Major Holes", "Weaknesses"),
                OutputSection("opponent_view", "Opponent View", "How to beat me"),
            ),
        ),
        ReportTemplate(
            id="SELF_SCOUT_QUICK",
            name="Session Review",
            description="Quick feedback on a single sparring or training session.",
            kind=ReportKind.SELF_SCOUT,
            variant="quick",
            required_inputs=_USER,
            output_sections=(
                OutputSection("habits", "Habits", "Good and bad habits"),
                OutputSection("fix", "The Fix", "Actionable advice"),
            ),
        ),
        ReportTemplate(
            id="SELF_SCOUT_PROGRESS",
            name="Progress Report",
            description="Analysis of evolution over multiple sessions.",
            kind=ReportKind.SELF_SCOUT,
            variant="progress",
            required_inputs=_USER,
            output_sections=(
                OutputSection("improvements", "Improvements", "Positive changes"),
                OutputSection("persistent", "Persistent Issues", "Stuck habits"),
            ),
        ),
    ]
}


def get_template(template_id: str) -> Optional[ReportTemplate]:
    """Look up a template by id; None when unknown."""
    return TEMPLATES.get(template_id)


def list_templates() -> List[ReportTemplate]:
    return list(TEMPLATES.values())


def require_template(template_id: str) -> ReportTemplate:
    """Like get_template, but an unknown id raises UnknownReportTypeError."""
    template = get_template(template_id)
    if template is None:
        raise UnknownReportTypeError(template_id)
    return template


def validate_inputs(template: ReportTemplate, inputs: Mapping[str, Any]) -> InputValidation:
    """
    Check that every input the template requires is present.

    An input counts as missing when the key is absent, its value is falsy,
    or it is an empty list.

    Args:
        template: Template being requested
        inputs: Mapping of input name (e.g. ``opponentVideo``) to value

    Returns:
        InputValidation with the missing input names in template order
    """
    missing = [req.value for req in template.required_inputs if not inputs.get(req.value)]
    return InputValidation(valid=not missing, missing=missing)
