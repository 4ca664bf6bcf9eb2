from typing import List, Tuple

from reservation_availability.models import Booking
from reservation_availability.timeparse import to_minutes

# A booking paired with its start time in minutes since midnight.
TimedBooking = Tuple[int, Booking]


def blocks_minutes(slot_minutes: int, booking_minutes: int, turning_time: int) -> bool:
    """A booking occupies [start, start + turning_time); a slot starting inside it is blocked."""
    return booking_minutes <= slot_minutes < booking_minutes + turning_time


def blocks(slot_time: str, booking_time: str, turning_time: int) -> bool:
    """Checks whether a booking at booking_time blocks the slot at slot_time.

    Raises:
        MalformedTime: if either time string cannot be parsed.
    """
    return blocks_minutes(to_minutes(slot_time), to_minutes(booking_time), turning_time)


def blocking_bookings(slot_minutes: int, timed_bookings: List[TimedBooking], turning_time: int) -> List[Booking]:
    """Returns the bookings whose occupancy window contains the slot."""
    return [
        booking
        for booking_minutes, booking in timed_bookings
        if blocks_minutes(slot_minutes, booking_minutes, turning_time)
    ]
