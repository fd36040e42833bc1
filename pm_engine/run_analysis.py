"""
Command-line entry point for predictive maintenance analysis.

Usage:
    pm-analyze --request request.json [--known-issues issues.json] [--output analysis.json]

The known-issues file maps asset ids to lists of equipment issues.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from pm_engine.config import load_settings, setup_logging
from pm_engine.exceptions import PMEngineError
from pm_engine.models.equipment import AnalysisRequest
from pm_engine.models.history import EquipmentIssue
from pm_engine.pm_orchestrator import analyze_equipment
from pm_engine.providers.known_issues import StaticKnownIssueLookup

logger = logging.getLogger(__name__)


def load_request(path: str) -> AnalysisRequest:
    with open(path, "r", encoding="utf-8") as f:
        return AnalysisRequest(**json.load(f))


def load_known_issues(path: str) -> StaticKnownIssueLookup:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    issues_by_asset: Dict[str, List[EquipmentIssue]] = {
        asset_id: [EquipmentIssue(**issue) for issue in issues]
        for asset_id, issues in raw.items()
    }
    logger.info(f"Loaded known issues for {len(issues_by_asset)} assets from {path}")
    return StaticKnownIssueLookup(issues_by_asset)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pm-analyze",
        description="Run a predictive maintenance analysis for one asset",
    )
    parser.add_argument("--request", required=True, help="Path to the analysis request JSON")
    parser.add_argument("--known-issues", help="Path to a known-issues JSON file (asset id -> issues)")
    parser.add_argument("--output", help="Write the analysis JSON here instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except PMEngineError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Configuration error: {e}")
        return 2
    setup_logging(settings.log_level)

    try:
        request = load_request(args.request)
        known_issues = load_known_issues(args.known_issues) if args.known_issues else None
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Could not read input: {e}")
        return 2

    try:
        analysis = analyze_equipment(request, settings=settings, known_issues=known_issues)
    except PMEngineError as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    output = analysis.model_dump_json(indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Analysis {analysis.id} written to {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
