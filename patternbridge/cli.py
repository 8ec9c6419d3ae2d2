# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to run a learning pass.
#   This is how users interact with the system.
#
# COMMANDS:
# ---------
# 1. Learn test cases from exported data + a markup snapshot:
#    python -m patternbridge.cli learn --data breeds.tsv --markup page.html
#    python -m patternbridge.cli learn --data a.csv --data b.csv --url https://host/page --json
#
# 2. Classify tabular data only:
#    python -m patternbridge.cli classify-data --data breeds.tsv
#
# 3. Classify a UI snapshot only:
#    python -m patternbridge.cli classify-ui --markup page.html
#
# IMPLEMENTATION:
# ---------------
# - argparse subcommands
# - DelimitedFileSource / FileMarkupSource / HttpMarkupSource as inputs
# - LearningPipeline for the run
# - Human-readable summary by default, JSON with --json / --output
#
# ==============================================

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .collaborators.sources import DelimitedFileSource, FileMarkupSource, HttpMarkupSource
from .config import get_config
from .data.classifier import DataPatternClassifier
from .exceptions import SourceError
from .learning import LearningPipeline, LearningResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patternbridge",
        description="Learn UI test cases from tabular data and a UI snapshot.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    learn = subparsers.add_parser("learn", help="Run a full learning pass")
    learn.add_argument("--data", action="append", default=[], metavar="FILE",
                       help="TSV/CSV export (repeatable)")
    _add_markup_arguments(learn)
    learn.add_argument("--json", action="store_true", help="Print the full result as JSON")
    learn.add_argument("--output", metavar="FILE", help="Write the full result as JSON to FILE")

    classify_data = subparsers.add_parser("classify-data", help="Classify tabular data only")
    classify_data.add_argument("--data", action="append", required=True, metavar="FILE",
                               help="TSV/CSV export (repeatable)")

    classify_ui = subparsers.add_parser("classify-ui", help="Classify a UI snapshot only")
    _add_markup_arguments(classify_ui, required=True)

    return parser


def _add_markup_arguments(parser: argparse.ArgumentParser, required: bool = False) -> None:
    group = parser.add_mutually_exclusive_group(required=required)
    group.add_argument("--markup", metavar="FILE", help="Saved HTML snapshot")
    group.add_argument("--url", help="Page to fetch (server-rendered markup only)")


def _markup_source(args, timeout: float):
    if args.markup:
        return FileMarkupSource(args.markup)
    if args.url:
        return HttpMarkupSource(args.url, timeout=timeout)
    return None


def _print_result(result: LearningResult) -> None:
    summary = result.summary()
    print(f"\n📊 Learning result: {summary['status']}")
    print(f"   → Fields profiled: {summary['fields']}")
    print(f"   → UI elements: {summary['ui_elements']}")
    print(f"   → Connections: {summary['connections']}")
    print(f"   → Test cases: {summary['test_cases']}")

    for case in result.test_cases:
        confidence = "n/a" if case.confidence is None else f"{case.confidence:.2f}"
        print(f"   • [{case.priority}] {case.name} ({confidence}) → {case.primary_selector}")

    for warning in result.context.warnings:
        print(f"⚠ {warning}")


def cmd_learn(args, config) -> int:
    pipeline = LearningPipeline(config)
    data_source = DelimitedFileSource(args.data) if args.data else None
    markup_source = _markup_source(args, config.runtime.fetch_timeout_seconds)

    print("🚀 Starting learning pass")
    result = pipeline.learn(data_source, markup_source)

    payload = result.to_dict()
    if args.output:
        Path(args.output).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"✓ Result written to {args.output}")

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        _print_result(result)

    return 1 if result.is_empty else 0


def cmd_classify_data(args, config) -> int:
    classifier = DataPatternClassifier(config.data)
    try:
        records = DelimitedFileSource(args.data).records()
    except SourceError as e:
        print(f"✗ {e}")
        return 1

    print(f"📥 Classifying {len(records)} records...")
    patterns = classifier.classify(records)
    output = {
        "profiles": classifier.profile_summary(records),
        "patterns": patterns.to_dict(),
    }
    print(json.dumps(output, indent=2))
    return 0


def cmd_classify_ui(args, config) -> int:
    pipeline = LearningPipeline(config)
    try:
        snapshot = _markup_source(args, config.runtime.fetch_timeout_seconds).snapshot()
    except SourceError as e:
        print(f"✗ {e}")
        return 1

    patterns = pipeline.classify_ui(snapshot)
    if not patterns.usable:
        print("⚠ No UI elements detected")
    print(json.dumps(patterns.to_dict(), indent=2))
    return 0


COMMANDS = {
    "learn": cmd_learn,
    "classify-data": cmd_classify_data,
    "classify-ui": cmd_classify_ui,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = get_config()

    logging.basicConfig(
        level=getattr(logging, config.runtime.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
