# runs the case matrix against the configured endpoint and prints a pass/fail summary
# exit codes: 0 all passed, 1 any failure, 2 configuration error

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from .client import WeatherAPIClient
from .config import load_config
from .errors import ConfigurationError
from .matrix import FAMILIES, all_scenarios
from .runner import run_matrix


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="weather-contract",
        description="Contract checks for the current-weather API.",
    )
    parser.add_argument("--workers", type=positive_int, default=4, help="parallel worker threads (default: 4)")
    parser.add_argument(
        "--family",
        action="append",
        choices=FAMILIES,
        help="only run this scenario family (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every request")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config()
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    total = len(all_scenarios())
    scenarios = all_scenarios(args.family)

    with WeatherAPIClient(config) as client:
        results = run_matrix(client, scenarios, max_workers=args.workers)

    for r in results:
        print(f"{'PASS' if r.passed else 'FAIL'} {r.scenario.name}")
        for failure in r.failures:
            print(f"    {failure}")

    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed
    # families left out with --family count as skipped
    skipped = total - len(results)
    print(f"{passed} passed, {failed} failed, {skipped} skipped")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
