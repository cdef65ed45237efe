"""
Errors raised at the model-call boundary.

Report parsing itself never raises on malformed text; these cover the cases
where there is nothing to parse or the request could not be made at all.
"""

from typing import Iterable, List


class FightScoutError(Exception):
    """Base class for all Fight Scout errors."""


class NoDataReturnedError(FightScoutError):
    """The model call finished without producing any text."""

    def __init__(self, message: str = "No data returned from the model."):
        super().__init__(message)


class UnknownReportTypeError(FightScoutError):
    """A report template id that is not in the registry."""

    def __init__(self, report_type: str):
        self.report_type = report_type
        super().__init__(f"Unknown report type: {report_type}")


class MissingInputsError(FightScoutError):
    """Inputs the selected template requires were not supplied."""

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(f"Missing required inputs: {', '.join(self.missing)}")


class InvalidFightAnalysisError(FightScoutError):
    """Scoring JSON could not be decoded or does not match the schema."""
