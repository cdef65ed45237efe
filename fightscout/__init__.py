"""
Fight Scout - report parsing package.
"""

from fightscout.models import *
from fightscout.config import get_config, set_config, reset_config
from fightscout.exceptions import (
    FightScoutError,
    InvalidFightAnalysisError,
    MissingInputsError,
    NoDataReturnedError,
    UnknownReportTypeError,
)
from fightscout.report_parser import (
    ReportParser,
    get_report_parser,
    reset_report_parser,
    parse_opponent_report,
    parse_self_scout_report,
)
from fightscout.service import ReportService, load_fight_analysis
from fightscout.templates import get_template, list_templates

__version__ = "1.0.0"
__all__ = [
    "get_config",
    "set_config",
    "reset_config",
    "FightScoutError",
    "InvalidFightAnalysisError",
    "MissingInputsError",
    "NoDataReturnedError",
    "UnknownReportTypeError",
    "ReportParser",
    "get_report_parser",
    "reset_report_parser",
    "parse_opponent_report",
    "parse_self_scout_report",
    "ReportService",
    "load_fight_analysis",
    "get_template",
    "list_templates",
]
