"""
Shared fixtures for the report parser tests.
"""

from datetime import datetime

import pytest

from fightscout.config import ParsingConfig, reset_config
from fightscout.report_parser import ReportParser, reset_report_parser
from fightscout.utils.ids import sequential_ids


SELF_SCOUT_REPORT = """## Overall Assessment
**Current Level:** Intermediate
**Archetype:** Pressure Boxer

You walk forward well but leave your chin exposed. Work on exits.

## Major Holes
- **Drops hands after jab** You drop your right hand [0:45] and again [2:12].
- **Flat-footed exits** Exits in a straight line with no lateral movement [1:10].

## Strengths
- **Strong jab** Consistent double jab lands clean [0:30], [1:05], [3:20].

## Priority Improvements
1. **Guard:** Fix: keep the right hand glued to the cheek. Drill: mirror jab-return reps.

## "IF I WERE YOUR OPPONENT"
I would pressure you early and counter the jab with an overhand.
"""

OPPONENT_REPORT = """# Opponent Scouting Report

## Fighter Profile
Orthodox pressure fighter who works behind the jab [0:05].

## Counter Logic
- IF he **jabs lazily** THEN **slip outside** [0:12]
- IF he shoots a double leg THEN sprawl and circle out [2:40]

## Strengths
- **Heavy right hand** Lands the overhand right in exchanges [1:30], [4:10].

## Weaknesses
- **Drops hands after jab** He drops his right hand [0:45] and again [2:12].
- **Fades late** Output falls off badly in the third round with no timestamps.

## Most Utilized Techniques
1. **Jab** [0:05], [0:50]
2. **Overhand right** [1:30]
3. Double leg takedown [2:40]
"""

SCORING = {
    "fighter_a_name": "Jon Doe",
    "fighter_b_name": "",
    "rounds": [
        {
            "round": 1,
            "winner": "Jon Doe",
            "score": "10-9",
            "striking": "Doe lands the cleaner jab",
            "grappling": "No exchanges",
            "aggression": "Even",
            "control": "Doe holds the center",
            "explanation": "Cleaner striking",
        },
        {
            "round": 2,
            "winner": "Fighter B",
            "score": "10-9",
            "striking": "Even",
            "grappling": "Two takedowns",
            "aggression": "B pushes the pace",
            "control": "B controls on top",
            "explanation": "Top control",
        },
    ],
    "fighter_a_strengths": ["Jab"],
    "fighter_a_weaknesses": ["Takedown defense"],
    "fighter_b_strengths": ["Wrestling"],
    "fighter_b_weaknesses": ["Hands low"],
    "detected_tells": ["Dips head before shooting"],
    "overall_rating": 78,
    "overall_summary": "Close fight decided by grappling.",
}

FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def _fresh_globals():
    """Each test starts from a fresh configuration and parser."""
    reset_config()
    reset_report_parser()
    yield
    reset_config()
    reset_report_parser()


@pytest.fixture
def id_factory():
    return sequential_ids("t")


@pytest.fixture
def parser(id_factory):
    """Deterministic parser: sequential ids and a fixed clock."""
    return ReportParser(config=ParsingConfig(), id_factory=id_factory, clock=lambda: FIXED_TIME)


@pytest.fixture
def self_scout_markdown():
    return SELF_SCOUT_REPORT


@pytest.fixture
def opponent_markdown():
    return OPPONENT_REPORT
