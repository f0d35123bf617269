"""CLI job that runs one business search and prints the export to stdout."""

import argparse
import logging
import sys
from typing import List, Optional

from business_finder.core.config import ConfigError, get_settings
from business_finder.core.search import BusinessSearchService
from business_finder.etl.export import to_csv, to_json_export
from business_finder.models import OutcomeKind

logger = logging.getLogger(__name__)

_EXIT_CODES = {
    OutcomeKind.SUCCESS: 0,
    OutcomeKind.NOT_FOUND: 0,
    OutcomeKind.PROVIDER_ERROR: 1,
    OutcomeKind.INVALID_INPUT: 2,
    OutcomeKind.MISCONFIGURED: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search SerpAPI Google Maps for local businesses")
    parser.add_argument("keyword", help="Business category to search, e.g. 'הובלות דירה'")
    parser.add_argument("--format", dest="output_format", choices=("json", "csv"), default="json")
    parser.add_argument("--country", dest="country", help="Requested country code (only the configured one is searched)")
    return parser


def run(keyword: str, output_format: str, country: Optional[str] = None) -> int:
    service = BusinessSearchService.from_settings(get_settings())
    outcome = service.search(keyword, country)

    if outcome.kind is OutcomeKind.NOT_FOUND:
        logger.warning("%s", outcome.message)
    elif not outcome.ok:
        logger.error("Search failed (%s): %s %s", outcome.kind.value, outcome.message, outcome.detail or "")
        return _EXIT_CODES[outcome.kind]

    render = to_csv if output_format == "csv" else to_json_export
    sys.stdout.write(render(outcome.businesses) + "\n")
    return _EXIT_CODES[outcome.kind]


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)
    try:
        code = run(args.keyword, args.output_format, args.country)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    raise SystemExit(code)


if __name__ == "__main__":
    main()
