"""
Tests for the report service and the fight-scoring JSON path.
"""

import json

import pytest

from fightscout.exceptions import (
    InvalidFightAnalysisError,
    MissingInputsError,
    NoDataReturnedError,
    UnknownReportTypeError,
)
from fightscout.models import (
    AnalysisType,
    FightAnalysis,
    OpponentReport,
    OpponentReportType,
    SelfScoutReport,
)
from fightscout.service import ReportService, load_fight_analysis

from conftest import OPPONENT_REPORT, SCORING, SELF_SCOUT_REPORT


class FakeGenerator:
    """Records calls and returns canned text."""

    def __init__(self, text):
        self.text = text
        self.calls = []

    def __call__(self, template, inputs):
        self.calls.append(template.id)
        return self.text


class TestReportService:
    def test_self_scout_template(self, parser):
        service = ReportService(FakeGenerator(SELF_SCOUT_REPORT), parser)
        report = service.generate_report("SELF_SCOUT_QUICK", {"userVideo": "me.mp4"})
        assert isinstance(report, SelfScoutReport)
        assert report.analysis_type == AnalysisType.QUICK

    def test_opponent_template(self, parser):
        service = ReportService(FakeGenerator(OPPONENT_REPORT), parser)
        report = service.generate_report("OPPONENT_BREAKDOWN_FULL", {"opponentVideo": "him.mp4"}, "Jon Doe")
        assert isinstance(report, OpponentReport)
        assert report.report_type == OpponentReportType.FULL
        assert report.fighter_name == "Jon Doe"

    def test_game_plan_parsed_as_self_scout(self, parser):
        service = ReportService(FakeGenerator(SELF_SCOUT_REPORT), parser)
        report = service.generate_report("GAME_PLAN_FULL", {"opponentVideo": "a.mp4", "userVideo": "b.mp4"})
        assert isinstance(report, SelfScoutReport)

    def test_scoring_template(self, parser):
        service = ReportService(FakeGenerator(json.dumps(SCORING)), parser)
        result = service.generate_report("FIGHT_SCORING", {"opponentVideo": "fight.mp4"})
        assert isinstance(result, FightAnalysis)

    def test_missing_inputs_skip_generator(self, parser):
        generator = FakeGenerator(SELF_SCOUT_REPORT)
        service = ReportService(generator, parser)
        with pytest.raises(MissingInputsError) as exc:
            service.generate_report("GAME_PLAN_QUICK", {"opponentVideo": "a.mp4"})
        assert exc.value.missing == ["userVideo"]
        assert str(exc.value) == "Missing required inputs: userVideo"
        assert generator.calls == []

    def test_unknown_template(self, parser):
        service = ReportService(FakeGenerator(SELF_SCOUT_REPORT), parser)
        with pytest.raises(UnknownReportTypeError):
            service.generate_report("NOPE", {})

    @pytest.mark.parametrize("text", [None, "", "  \n "])
    def test_blank_reply(self, parser, text):
        service = ReportService(FakeGenerator(text), parser)
        with pytest.raises(NoDataReturnedError):
            service.generate_report("SELF_SCOUT_FULL", {"userVideo": "me.mp4"})


class TestLoadFightAnalysis:
    def test_valid_document(self):
        analysis = load_fight_analysis(json.dumps(SCORING))
        assert analysis.fighter_a_name == "Jon Doe"
        assert analysis.overall_rating == 78
        assert len(analysis.rounds) == 2

    def test_blank_names_get_placeholders(self):
        analysis = load_fight_analysis(json.dumps(SCORING))
        assert analysis.fighter_b_name == "Fighter B"

    def test_rounds_won(self):
        analysis = load_fight_analysis(json.dumps(SCORING))
        assert analysis.rounds_won == {"Jon Doe": 1, "Fighter B": 1}

    def test_blank(self):
        with pytest.raises(NoDataReturnedError, match="No data returned"):
            load_fight_analysis("")

    def test_not_json(self):
        with pytest.raises(InvalidFightAnalysisError):
            load_fight_analysis("Round 1: Doe 10-9")

    def test_missing_fields(self):
        partial = {k: v for k, v in SCORING.items() if k != "rounds"}
        with pytest.raises(InvalidFightAnalysisError):
            load_fight_analysis(json.dumps(partial))
