"""
Report service: the seam between a model client and the report parsers.

The model call itself lives outside this package. Anything that can turn a
template plus inputs into text satisfies ``ReportGenerator``.
"""

from typing import Any, Mapping, Optional, Protocol, Union

from loguru import logger
from pydantic import ValidationError

from fightscout.exceptions import (
    InvalidFightAnalysisError,
    MissingInputsError,
    NoDataReturnedError,
)
from fightscout.models import FightAnalysis, OpponentReport, SelfScoutReport
from fightscout.report_parser import ReportParser, get_report_parser
from fightscout.templates import ReportKind, ReportTemplate, require_template, validate_inputs

ServiceResult = Union[SelfScoutReport, OpponentReport, FightAnalysis]


class ReportGenerator(Protocol):
    """Produces the model's text reply for a template and its inputs."""

    def __call__(self, template: ReportTemplate, inputs: Mapping[str, Any]) -> Optional[str]:
        ...


def load_fight_analysis(text: Optional[str]) -> FightAnalysis:
    """
    Decode the scoring template's JSON reply.

    Raises:
        NoDataReturnedError: the reply is empty
        InvalidFightAnalysisError: the reply is not JSON or misses required fields
    """
    if not text or not text.strip():
        raise NoDataReturnedError()
    try:
        return FightAnalysis.model_validate_json(text)
    except ValidationError as e:
        raise InvalidFightAnalysisError(f"Invalid fight analysis: {e.error_count()} error(s)") from e


class ReportService:
    """Resolve a template, call the generator and parse what comes back."""

    def __init__(self, generator: ReportGenerator, parser: Optional[ReportParser] = None):
        self.generator = generator
        self.parser = parser or get_report_parser()

    def generate_report(
        self,
        template_id: str,
        inputs: Mapping[str, Any],
        fighter_name: Optional[str] = None,
    ) -> ServiceResult:
        """
        Generate and parse one report.

        Args:
            template_id: Registry id such as ``SELF_SCOUT_FULL``
            inputs: Media and context keyed by input name
            fighter_name: Opponent name, used by opponent templates only

        Returns:
            SelfScoutReport for self-scout and game-plan templates,
            OpponentReport for opponent templates, FightAnalysis for scoring
        """
        try:
            template = require_template(template_id)
            validation = validate_inputs(template, inputs)
            if not validation.valid:
                raise MissingInputsError(validation.missing)

            logger.info(f"Generating {template.name} ({template.id})")
            text = self.generator(template, inputs)

            if template.kind == ReportKind.SCORING:
                return load_fight_analysis(text)

            if not text or not text.strip():
                raise NoDataReturnedError("No report generated.")

            if template.kind == ReportKind.OPPONENT:
                return self.parser.parse_opponent(text, template.variant, fighter_name)
            return self.parser.parse_self_scout(text, template.variant)

        except Exception as e:
            logger.error(f"Report generation failed for {template_id}: {e}")
            raise
