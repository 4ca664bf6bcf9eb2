import logging
from datetime import date

from reservation_availability.errors import MalformedSchedule
from reservation_availability.models import DayTemplate, ManagementMode, RestaurantAvailability, Weekday

logger = logging.getLogger(__name__)

WEEKDAYS = list(Weekday)


def weekday_for(day: date) -> Weekday:
    """Returns the canonical weekday name for a date."""
    return WEEKDAYS[day.weekday()]


def resolve(availability: RestaurantAvailability, day: date) -> DayTemplate | None:
    """Resolves the effective day template for a date.

    A special-date override replaces the weekly template outright, so an override
    that is not open closes the day even when its weekday is normally open.

    Returns:
        The open DayTemplate, or None if the restaurant is closed that day.
    """
    override = availability.special_dates.get(day)
    if override is not None:
        logger.debug(f"Special date override for {day.isoformat()}: open={override.is_open}")
        return override if override.is_open else None

    weekday = weekday_for(day)
    template = availability.schedule.get(weekday)
    if template is None or not template.is_open:
        logger.debug(f"{availability.restaurant_id} closed on {weekday.value} {day.isoformat()}")
        return None

    return template


def validate_template(template: DayTemplate, mode: ManagementMode):
    """Raises MalformedSchedule if an open template cannot yield any slots."""
    if not template.slots:
        raise MalformedSchedule("day template is open but has no slots")
    # Table mode takes its capacity from the table inventory.
    if mode == ManagementMode.GUEST_COUNT and template.capacity_per_slot <= 0:
        raise MalformedSchedule(f"capacity per slot must be positive, got {template.capacity_per_slot}")
