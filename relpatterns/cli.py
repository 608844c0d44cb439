#!/usr/bin/env python3
"""
Extraction Pattern Validator - batch driver

Reads dependency patterns, one per line, classifies their captures and prints
whether each pattern is acceptable for extraction.

Usage:
    relpatterns < patterns.txt                          # read from stdin
    relpatterns "{arg1} >nsubj> {rel} <dobj< {arg2}"    # one pattern per argument
    relpatterns --report report.yaml --verbose < patterns.txt

The run stops at the first pattern that cannot be parsed or classified.
"""

import argparse
import logging
import sys
from typing import Iterable, Iterator, List, Optional

from tqdm.auto import tqdm

from .classification import AliasClassificationError, PatternValidator, classify
from .config import DEFAULT_LOG_LEVEL, LOG_FORMAT
from .export import PatternReport, build_report, export_reports_yaml
from .patterns import PatternDeserializationError, deserialize

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Classify dependency extraction patterns as valid or invalid."
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        help="Patterns to check (default: read one pattern per line from stdin)",
    )
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="YAML file with the validity rules to apply (default: built-in battery)",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a YAML report with reason and symmetry for every pattern",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log the rule that rejects each invalid pattern",
    )
    return parser.parse_args(argv)


def read_lines(args: argparse.Namespace) -> Iterator[str]:
    """Yield pattern lines from the arguments, or from stdin if none are given."""
    if args.patterns:
        yield from args.patterns
        return
    for line in sys.stdin:
        line = line.strip()
        if line:
            yield line


def run(lines: Iterable[str], validator: PatternValidator) -> List[PatternReport]:
    """Check every line and print its verdict.

    Parameters
    ----------
    lines : Iterable[str]
        Pattern lines in input order
    validator : PatternValidator
        Rules used for the verdict

    Returns
    -------
    List[PatternReport]
        One report per line

    Raises
    ------
    PatternDeserializationError, AliasClassificationError
        On the first line that cannot be parsed or classified
    """
    reports = []
    for line in lines:
        pattern = classify(deserialize(line))
        report = build_report(pattern, validator)
        verdict = "valid" if report.valid else "invalid"
        if not report.valid:
            logger.debug(f"invalid: {report.reason}: {pattern}")
        print(f"{verdict}: {pattern}", flush=True)
        reports.append(report)
    return reports


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the batch driver."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else DEFAULT_LOG_LEVEL,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    if args.rules:
        validator = PatternValidator.load_from_yaml(args.rules)
    else:
        validator = PatternValidator()

    lines = read_lines(args)
    if args.progress:
        lines = tqdm(lines, desc="Checking patterns", unit="pattern")

    try:
        reports = run(lines, validator)
    except (PatternDeserializationError, AliasClassificationError) as e:
        logger.error(f"Aborting: {e}")
        return 1

    if args.report:
        export_reports_yaml(reports, args.report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
