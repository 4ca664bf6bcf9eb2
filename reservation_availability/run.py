import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime
from typing import List

from reservation_availability import config, persist
from reservation_availability.document_store import DocumentStoreClient
from reservation_availability.errors import StoreError
from reservation_availability.models import DayReport
from reservation_availability.service import AvailabilityQueryService

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    bookable_dates: List[date]
    day_reports: List[DayReport]
    failed_dates: List[date]


def build_service() -> AvailabilityQueryService:
    """Wires the query service to the configured stores."""
    if config.DOCUMENT_STORE_URL:
        client = DocumentStoreClient(config.DOCUMENT_STORE_URL)
        return AvailabilityQueryService(client, client)
    return AvailabilityQueryService(persist.JsonAvailabilityStore(), persist.JsonBookingStore())


def parse_start_date(start_date_arg: str | None) -> date:
    """Parses the YYYY-MM-DD start date, defaulting to today."""
    if not start_date_arg:
        return datetime.now().date()
    try:
        return datetime.strptime(start_date_arg, "%Y-%m-%d").date()
    except ValueError:
        logger.error("Error: Start date must be in YYYY-MM-DD format.")
        sys.exit(1)


def print_availability_report(day_report: DayReport):
    """Prints the formatted availability report to stdout."""
    date_str = day_report.date

    print(f"\n--- Availability Report for {date_str} ---")

    for slot in day_report.slots:
        print(f"[AVAILABLE] {slot.time}: {slot.available} of {slot.capacity} free")

    if day_report.slots:
        print(f"Summary: Found {len(day_report.slots)} bookable time slots for {date_str}!")
    elif day_report.is_today:
        print(f"Summary: No remaining bookable slots today ({date_str}).")
    else:
        print(f"Summary: Fully booked on {date_str}.")


def collect_availability(
    service: AvailabilityQueryService,
    restaurant_id: str,
    open_dates: List[date],
    party_size: int,
) -> RunOutcome:
    """Computes a day report for every open date, skipping dates whose bookings could not be read."""
    day_reports: List[DayReport] = []
    failed_dates: List[date] = []
    today = service.clock().date()

    for day in open_dates:
        try:
            slots = service.get_available_slots(restaurant_id, day, party_size)
        except StoreError as e:
            logger.error(f"Failed to load availability for {day.isoformat()}: {e}")
            failed_dates.append(day)
            continue
        day_reports.append(DayReport(date=day.isoformat(), slots=slots, is_today=day == today))

    return RunOutcome(bookable_dates=open_dates, day_reports=day_reports, failed_dates=failed_dates)


def run(
    restaurant_id: str,
    start_date: str | None = None,
    days: int | None = None,
    party_size: int = config.DEFAULT_PARTY_SIZE,
) -> RunOutcome:
    """Core orchestration logic. Enumerates the bookable dates in the window, computes the
    bookable slots for each and writes the report."""
    start = parse_start_date(start_date)
    service = build_service()

    try:
        open_dates = service.bookable_dates(restaurant_id, start=start, days=days)
    except StoreError as e:
        logger.error(f"Couldn't load availability for {restaurant_id}: {e}")
        return RunOutcome(bookable_dates=[], day_reports=[], failed_dates=[])

    if not open_dates:
        print(f"\nNo bookable dates for {restaurant_id} starting {start.isoformat()}.")
        return RunOutcome(bookable_dates=[], day_reports=[], failed_dates=[])

    logger.info(
        f"Checking availability for {len(open_dates)} days: {', '.join(d.isoformat() for d in open_dates)}"
    )

    outcome = collect_availability(service, restaurant_id, open_dates, party_size)
    for day_report in outcome.day_reports:
        print_availability_report(day_report)

    persist.save_report(restaurant_id, party_size, outcome.day_reports)

    total_slots = sum(len(r.slots) for r in outcome.day_reports)
    print(f"\n*** {total_slots} bookable slots for {party_size} guest(s) across {len(open_dates)} days ***")
    return outcome
