import argparse
import logging
import sys

from reservation_availability import config, run

# --- Logging Setup ---

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Configures logging to stderr with local time."""
    import time

    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    formatter.converter = time.localtime
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler],
    )


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_arguments():
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(description="Report bookable reservation slots for a restaurant.")
    parser.add_argument("--restaurant-id", type=str, required=True, help="Restaurant to check.")
    parser.add_argument("--start-date", type=str, help="Start date in YYYY-MM-DD format. Defaults to today.")
    parser.add_argument(
        "--days", type=positive_int, help="Number of days to check. Defaults to the restaurant's booking window."
    )
    parser.add_argument(
        "--party-size",
        type=positive_int,
        default=config.DEFAULT_PARTY_SIZE,
        help=f"Number of guests. Defaults to {config.DEFAULT_PARTY_SIZE}.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args()


def main():
    args = parse_arguments()
    setup_logging(args.verbose)
    run.run(
        restaurant_id=args.restaurant_id,
        start_date=args.start_date,
        days=args.days,
        party_size=args.party_size,
    )
