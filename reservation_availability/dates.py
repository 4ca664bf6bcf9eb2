import logging
from datetime import date, timedelta
from typing import List

from reservation_availability.errors import MalformedSchedule
from reservation_availability.models import RestaurantAvailability
from reservation_availability.schedule import resolve, validate_template

logger = logging.getLogger(__name__)


def enumerate_dates(start: date, days: int) -> List[date]:
    """Returns `days` consecutive dates beginning with `start`."""
    return [start + timedelta(days=i) for i in range(max(0, days))]


def bookable_dates(availability: RestaurantAvailability, start: date, days: int | None = None) -> List[date]:
    """Pre-screens the rolling booking window for dates with an open schedule.

    The window defaults to the restaurant's advance booking days. A date qualifies
    if it resolves to an open, well-formed template; existing bookings are not
    considered here.
    """
    if days is None:
        days = availability.advance_booking_days

    open_dates = []
    for day in enumerate_dates(start, days):
        template = resolve(availability, day)
        if template is None:
            continue
        try:
            validate_template(template, availability.management_mode)
        except MalformedSchedule as e:
            logger.warning(f"Skipping {day.isoformat()} for {availability.restaurant_id}: {e}")
            continue
        open_dates.append(day)

    logger.debug(f"{len(open_dates)} of {days} dates open for {availability.restaurant_id}")
    return open_dates
