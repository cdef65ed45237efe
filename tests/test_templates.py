"""
Tests for the report template registry.
"""

import pytest

from fightscout.exceptions import UnknownReportTypeError
from fightscout.templates import (
    InputType,
    ReportKind,
    get_template,
    list_templates,
    require_template,
    validate_inputs,
)


class TestRegistry:
    def test_all_templates_listed(self):
        ids = [t.id for t in list_templates()]
        assert ids == [
            "FIGHT_SCORING",
            "OPPONENT_BREAKDOWN_FULL",
            "OPPONENT_BREAKDOWN_QUICK",
            "GAME_PLAN_FULL",
            "GAME_PLAN_QUICK",
            "SELF_SCOUT_FULL",
            "SELF_SCOUT_QUICK",
            "SELF_SCOUT_PROGRESS",
        ]

    def test_kinds_and_variants(self):
        assert get_template("FIGHT_SCORING").kind == ReportKind.SCORING
        assert get_template("GAME_PLAN_QUICK").kind == ReportKind.GAME_PLAN
        assert get_template("SELF_SCOUT_PROGRESS").variant == "progress"

    def test_section_titles(self):
        template = get_template("OPPONENT_BREAKDOWN_FULL")
        assert template.section_titles == ["Fighter Profile", "Counter Logic", "Strengths", "Weaknesses"]

    def test_unknown_template(self):
        assert get_template("NOPE") is None

    def test_require_unknown_template(self):
        with pytest.raises(UnknownReportTypeError, match="Unknown report type: NOPE"):
            require_template("NOPE")


class TestValidateInputs:
    def test_all_present(self):
        result = validate_inputs(get_template("SELF_SCOUT_FULL"), {"userVideo": "clip.mp4"})
        assert result.valid
        assert result.missing == []

    def test_game_plan_needs_both_videos(self):
        result = validate_inputs(get_template("GAME_PLAN_FULL"), {"opponentVideo": "a.mp4"})
        assert not result.valid
        assert result.missing == [InputType.USER_VIDEO.value]

    def test_empty_values_count_as_missing(self):
        result = validate_inputs(get_template("GAME_PLAN_QUICK"), {"opponentVideo": [], "userVideo": ""})
        assert result.missing == ["opponentVideo", "userVideo"]

    def test_extra_inputs_ignored(self):
        result = validate_inputs(get_template("OPPONENT_BREAKDOWN_QUICK"),
                                 {"opponentVideo": "b.mp4", "context": "southpaw"})
        assert result.valid
