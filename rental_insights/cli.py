#!/usr/bin/env python3
"""Interactive command line for filtering a listings dataset and ranking its hosts."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Callable

from dotenv import load_dotenv

from rental_insights.config import Settings, load_settings
from rental_insights.schemas import FilterCriteria
from rental_insights.services.coercion import leading_float, parse_number
from rental_insights.services.listing_pipeline import ListingDataHandler

logger = logging.getLogger(__name__)

SEPARATOR = "*********"

Prompt = Callable[[str], str]


def parse_decimal_bound(text: str) -> float | None:
    """Read a price or review-score bound; blank, unparseable and zero mean "skip"."""

    value = leading_float(text)
    if math.isnan(value) or not value:
        return None
    return value


def parse_rooms_bound(text: str) -> int | None:
    return parse_number(text, None) or None


def prompt_criteria(ask: Prompt) -> FilterCriteria:
    """Ask for each of the six bounds in turn."""

    return FilterCriteria(
        min_price=parse_decimal_bound(ask("Enter minimum price (or press Enter to skip): ~> ")),
        max_price=parse_decimal_bound(ask("Enter maximum price (or press Enter to skip): ~> ")),
        min_rooms=parse_rooms_bound(ask("Enter minimum number of rooms (or press Enter to skip): ~> ")),
        max_rooms=parse_rooms_bound(ask("Enter maximum number of rooms (or press Enter to skip): ~> ")),
        min_review_score=parse_decimal_bound(
            ask("Enter minimum review score (or press Enter to skip): ~> ")
        ),
        max_review_score=parse_decimal_bound(
            ask("Enter maximum review score (or press Enter to skip): ~> ")
        ),
    )


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria | None:
    """Return criteria built from flags, or None when no bound flag was given."""

    values = {
        "min_price": args.min_price,
        "max_price": args.max_price,
        "min_rooms": args.min_rooms,
        "max_rooms": args.max_rooms,
        "min_review_score": args.min_review_score,
        "max_review_score": args.max_review_score,
    }
    if all(value is None for value in values.values()):
        return None
    return FilterCriteria(**values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Filter rental listings, compute price-per-room statistics and rank hosts.",
    )
    parser.add_argument("--file", default=None, help="Dataset path (.csv, .csv.gz or .zip)")
    parser.add_argument("--min-price", type=float, default=None)
    parser.add_argument("--max-price", type=float, default=None)
    parser.add_argument("--min-rooms", type=int, default=None)
    parser.add_argument("--max-rooms", type=int, default=None)
    parser.add_argument("--min-review-score", type=float, default=None)
    parser.add_argument("--max-review-score", type=float, default=None)
    parser.add_argument("--export", default=None, help="Write results as JSON to this path")
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; unset bounds are skipped and nothing is exported without --export",
    )
    return parser


def print_report(handler: ListingDataHandler) -> None:
    print(f"Loaded {len(handler.get_data())} listings.")
    print(f"Filtered {len(handler.get_filtered_data())} listings based on your criteria.")

    print(SEPARATOR)
    print("Filtered Listings (ID and Price):")
    for listing in handler.get_filtered_data():
        print(f"ID: {listing.get('id')}, Price: {listing.get('price')}")

    print(SEPARATOR)
    print("Computing statistics...")
    stats = handler.get_statistics()
    if stats is not None:
        print(f"Total Listings: {stats.total_listings}")
        print(f"Average Price per Room: ${stats.average_price_per_room}")

    print(SEPARATOR)
    print("Computing host ranking...")
    ranking = handler.get_host_ranking()
    if ranking:
        for host in ranking:
            print(f"Host: {host.host_name} | Listings: {host.listings_count}")
    else:
        print("No host data available for ranking.")


def run(args: argparse.Namespace, settings: Settings, ask: Prompt | None = None) -> None:
    ask = ask or input
    interactive = not args.no_input

    file_path = args.file or settings.listings_data_path
    if not file_path:
        if not interactive:
            raise ValueError("No dataset given; pass --file or set LISTINGS_DATA_PATH.")
        file_path = ask("Please enter the name of the CSV file: ~> ").strip()

    print("Loading data...")
    handler = ListingDataHandler.from_path(file_path, strict_bounds=settings.strict_zero_bounds)

    criteria = criteria_from_args(args)
    if criteria is None:
        criteria = prompt_criteria(ask) if interactive else FilterCriteria()
    logger.debug("Applying criteria %s", criteria.model_dump(exclude_none=True))

    handler.filter_listings(criteria).compute_statistics().compute_host_ranking()
    print_report(handler)

    export_path = args.export
    if export_path is None and interactive:
        choice = ask("Would you like to export the results? (yes/no) ~> ")
        if choice.strip().lower() == "yes":
            export_path = (
                ask("Enter the output file name (e.g., results.json): ~> ").strip()
                or settings.export_path
            )
    if export_path:
        handler.export_results(export_path)
        print(f"Results exported to {export_path}")


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        run(args, settings)
    except Exception as exc:
        print(f"An error occurred: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
