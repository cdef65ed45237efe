"""
Command-line entry point.

    fightscout parse report.md --kind opponent --fighter "Jon Doe"
    fightscout score scoring.json
    fightscout templates
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from fightscout.config import AppConfig, get_config, set_config
from fightscout.exceptions import FightScoutError
from fightscout.logging_setup import configure_logging
from fightscout.report_parser import ReportParser
from fightscout.service import load_fight_analysis
from fightscout.templates import list_templates


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _cmd_parse(args: argparse.Namespace) -> int:
    parser = ReportParser(config=get_config().parsing)
    text = _read_text(args.path)

    if args.kind == "opponent":
        report_type = args.type if args.type in ("full", "quick") else "full"
        report = parser.parse_opponent(text, report_type, args.fighter)
    else:
        report = parser.parse_self_scout(text, args.type)

    payload = report.to_json(indent=2)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        logger.info(f"Report written to {args.output}")
    else:
        print(payload)
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    analysis = load_fight_analysis(_read_text(args.path))
    print(f"{analysis.fighter_a_name} vs {analysis.fighter_b_name}")
    for r in analysis.rounds:
        print(f"  Round {r.round}: {r.winner} ({r.score})")
    tally = ", ".join(f"{name} {won}" for name, won in analysis.rounds_won.items())
    print(f"Rounds won: {tally}")
    print(f"Overall rating: {analysis.overall_rating}/100")
    return 0


def _cmd_templates(args: argparse.Namespace) -> int:
    for t in list_templates():
        inputs = ", ".join(i.value for i in t.required_inputs)
        print(f"{t.id:<26} {t.name}  [{t.kind.value}/{t.variant}]  requires: {inputs}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fightscout", description="Parse Fight Scout analysis reports")
    parser.add_argument("--config", type=str, default="", help="YAML configuration file")
    parser.add_argument("--log-level", type=str, default="", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse a Markdown report into JSON")
    p_parse.add_argument("path", help="Markdown file produced by the model")
    p_parse.add_argument("--kind", choices=["self-scout", "opponent"], default="self-scout")
    p_parse.add_argument("--type", choices=["full", "quick", "progress"], default="full",
                         help="Report flavour (progress applies to self-scout only)")
    p_parse.add_argument("--fighter", type=str, default=None, help="Opponent name")
    p_parse.add_argument("--output", type=str, default="", help="Write JSON here instead of stdout")
    p_parse.set_defaults(func=_cmd_parse)

    p_score = sub.add_parser("score", help="Validate a fight-scoring JSON document")
    p_score.add_argument("path", help="JSON file produced by the scoring template")
    p_score.set_defaults(func=_cmd_score)

    p_templates = sub.add_parser("templates", help="List report templates")
    p_templates.set_defaults(func=_cmd_templates)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.config:
        set_config(AppConfig.from_yaml(Path(args.config)))
    config = get_config()
    if args.log_level:
        config.logging.level = args.log_level.upper()
    configure_logging(config.logging)

    try:
        return args.func(args)
    except FightScoutError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Could not read or write file: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
