import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Callable, List, Protocol

from reservation_availability import dates
from reservation_availability.allocators import allocator_for, timed_slots
from reservation_availability.errors import MalformedSchedule, MalformedTime
from reservation_availability.models import Booking, RestaurantAvailability, SlotResult
from reservation_availability.schedule import resolve, validate_template
from reservation_availability.timeparse import to_minutes

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class AvailabilityStore(Protocol):
    def get_availability(self, restaurant_id: str) -> RestaurantAvailability | None: ...


class BookingStore(Protocol):
    def list_active_bookings(self, restaurant_id: str, day: date) -> List[Booking]:
        """Returns bookings for the date whose status is pending, confirmed or seated."""
        ...


def _check_party_size(party_size: int):
    if party_size < 1:
        raise ValueError(f"party_size must be at least 1, got {party_size}")


def upcoming_slots(slots: List[str], day: date, now: datetime) -> List[str]:
    """Drops slots at or before the current time of day when `day` is today."""
    if day != now.date():
        return list(slots)
    now_minutes = now.hour * 60 + now.minute
    return [slot for slot_minutes, slot in timed_slots(slots) if slot_minutes > now_minutes]


def compute_slots(
    availability: RestaurantAvailability,
    active_bookings: List[Booking],
    day: date,
    party_size: int,
    now: datetime,
) -> List[SlotResult]:
    """Computes the bookable slots for a party on a date.

    This is a pure computation over an already-fetched snapshot: the caller supplies
    the restaurant's availability record, the active bookings for the date and the
    current time.

    Returns:
        SlotResults that can take the party, ordered by ascending slot time. Empty if
        the restaurant is closed or the day's schedule is malformed.
    """
    _check_party_size(party_size)

    template = resolve(availability, day)
    if template is None:
        return []

    try:
        validate_template(template, availability.management_mode)
    except MalformedSchedule as e:
        logger.warning(f"Malformed schedule for {availability.restaurant_id} on {day.isoformat()}: {e}")
        return []

    slots = upcoming_slots(template.slots, day, now)
    allocator = allocator_for(availability, template)
    results = allocator.compute_availability(slots, active_bookings, party_size, availability.table_turning_time)

    bookable = [r for r in results if allocator.qualifies(r, party_size)]
    bookable.sort(key=lambda r: to_minutes(r.time))

    logger.debug(
        f"{availability.restaurant_id} {day.isoformat()} ({availability.management_mode.value}): "
        f"{len(bookable)} of {len(slots)} slots bookable for {party_size} guest(s)"
    )
    return bookable


class AvailabilityQueryService:
    """Answers availability queries against the availability and booking stores.

    The service holds no state between calls. It reads a consistent snapshot from
    the stores and runs `compute_slots` over it. Preventing two concurrent bookings
    from overfilling a slot is the booking writer's job: it must re-check with
    `is_slot_bookable` inside its own transaction or conditional write.
    """

    def __init__(self, availability_store: AvailabilityStore, booking_store: BookingStore, clock: Clock = datetime.now):
        self.availability_store = availability_store
        self.booking_store = booking_store
        self.clock = clock

    def _fetch_snapshot(self, restaurant_id: str, day: date):
        """Reads the availability record and the day's active bookings concurrently."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            availability_future = executor.submit(self.availability_store.get_availability, restaurant_id)
            bookings_future = executor.submit(self.booking_store.list_active_bookings, restaurant_id, day)
            return availability_future.result(), bookings_future.result()

    def get_available_slots(self, restaurant_id: str, day: date, party_size: int) -> List[SlotResult]:
        """Returns the slots on `day` that can take `party_size` guests.

        An empty list means either "fully booked" or "no availability configured";
        callers that need to tell those apart must check the record themselves.

        Raises:
            StoreError: if either store cannot be read.
        """
        _check_party_size(party_size)
        availability, bookings = self._fetch_snapshot(restaurant_id, day)
        if availability is None:
            logger.info(f"No availability configured for restaurant {restaurant_id}")
            return []

        logger.info(
            f"Checking availability for {restaurant_id} on {day.isoformat()}: "
            f"party_size={party_size}, {len(bookings)} active booking(s)"
        )
        return compute_slots(availability, bookings, day, party_size, self.clock())

    def get_available_times(self, restaurant_id: str, day: date, party_size: int) -> List[str]:
        """Same as get_available_slots, but returns only the slot times."""
        return [slot.time for slot in self.get_available_slots(restaurant_id, day, party_size)]

    def is_slot_bookable(self, restaurant_id: str, day: date, time: str, party_size: int) -> bool:
        """Re-checks a single slot before a booking is written."""
        try:
            requested = to_minutes(time)
        except MalformedTime as e:
            logger.warning(f"Rejecting booking request for {restaurant_id}: {e}")
            return False
        slots = self.get_available_slots(restaurant_id, day, party_size)
        return any(to_minutes(slot.time) == requested for slot in slots)

    def bookable_dates(self, restaurant_id: str, start: date | None = None, days: int | None = None) -> List[date]:
        """Lists the dates in the booking window with an open schedule."""
        availability = self.availability_store.get_availability(restaurant_id)
        if availability is None:
            logger.info(f"No availability configured for restaurant {restaurant_id}")
            return []
        if start is None:
            start = self.clock().date()
        return dates.bookable_dates(availability, start, days)
