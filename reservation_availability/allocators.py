"""
Capacity allocation strategies.

A restaurant manages its capacity either as a pooled guest count per slot or as an
inventory of discrete tables. Both strategies compute a SlotResult per configured
slot; the query service then keeps only the results that `qualifies` accepts for
the requested party size.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

from reservation_availability.errors import MalformedTime
from reservation_availability.models import Booking, DayTemplate, ManagementMode, RestaurantAvailability, SlotResult, Table
from reservation_availability.occupancy import TimedBooking, blocking_bookings
from reservation_availability.timeparse import format_minutes, to_minutes

logger = logging.getLogger(__name__)


def timed_slots(slots: List[str]) -> List[Tuple[int, str]]:
    """Pairs each slot with its minute of day, skipping slots that cannot be parsed."""
    result = []
    for slot in slots:
        try:
            result.append((to_minutes(slot), slot))
        except MalformedTime as e:
            logger.warning(f"Skipping slot with malformed time: {e}")
    return result


def timed_bookings(bookings: List[Booking]) -> List[TimedBooking]:
    """Pairs each booking with its start minute, skipping bookings that cannot be parsed."""
    result = []
    for booking in bookings:
        try:
            result.append((to_minutes(booking.time), booking))
        except MalformedTime as e:
            logger.warning(f"Excluding booking {booking.id} from occupancy: {e}")
    return result


class CapacityAllocator(ABC):
    mode: ManagementMode

    def compute_availability(
        self,
        slots: List[str],
        active_bookings: List[Booking],
        party_size: int,
        turning_time: int,
    ) -> List[SlotResult]:
        """Computes remaining capacity for every slot, in slot order.

        Slots and bookings with malformed times are logged and left out; one bad
        record never fails the whole computation.
        """
        bookings = timed_bookings(active_bookings)
        results = []
        for slot_minutes, slot in timed_slots(slots):
            blocking = blocking_bookings(slot_minutes, bookings, turning_time)
            result = self.slot_availability(slot, blocking, party_size)
            logger.debug(
                f"[{self.mode.value}] slot {slot} ({format_minutes(slot_minutes)}): {len(blocking)} blocking booking(s), "
                f"available={result.available}/{result.capacity}, party_size={party_size}"
            )
            results.append(result)
        return results

    @abstractmethod
    def slot_availability(self, slot: str, blocking: List[Booking], party_size: int) -> SlotResult:
        """Computes the result for one slot given the bookings that block it."""

    @abstractmethod
    def qualifies(self, result: SlotResult, party_size: int) -> bool:
        """Whether a slot result can take a party of the given size."""


class GuestCountAllocator(CapacityAllocator):
    """Pooled seat count per slot."""

    mode = ManagementMode.GUEST_COUNT

    def __init__(self, capacity_per_slot: int):
        self.capacity_per_slot = capacity_per_slot

    def slot_availability(self, slot: str, blocking: List[Booking], party_size: int) -> SlotResult:
        booked_guests = sum(b.party_size for b in blocking)
        available = max(0, self.capacity_per_slot - booked_guests)
        return SlotResult(time=slot, available=available, capacity=self.capacity_per_slot)

    def qualifies(self, result: SlotResult, party_size: int) -> bool:
        return result.available >= party_size


class TableAllocator(CapacityAllocator):
    """Discrete table inventory.

    This estimates contention by counting blocking bookings against the tables
    large enough for the party. It does not assign bookings to specific tables, so
    it can overstate availability when small parties sit at large tables.
    """

    mode = ManagementMode.TABLE

    def __init__(self, tables: List[Table]):
        self.tables = [t for t in tables if t.is_active]

    def suitable_tables(self, party_size: int) -> List[Table]:
        return [t for t in self.tables if t.capacity >= party_size]

    def slot_availability(self, slot: str, blocking: List[Booking], party_size: int) -> SlotResult:
        suitable = self.suitable_tables(party_size)
        largest = max((t.capacity for t in suitable), default=0)

        tables_needed = 0
        for booking in blocking:
            # An unassigned booking only competes if it fits one of the suitable tables.
            if booking.table_id or booking.party_size <= largest:
                tables_needed += 1

        total_tables = len(suitable)
        return SlotResult(time=slot, available=max(0, total_tables - tables_needed), capacity=total_tables)

    def qualifies(self, result: SlotResult, party_size: int) -> bool:
        return result.available > 0


def allocator_for(availability: RestaurantAvailability, template: DayTemplate) -> CapacityAllocator:
    """Selects the allocation strategy configured for the restaurant."""
    if availability.management_mode == ManagementMode.TABLE:
        return TableAllocator(availability.tables)
    return GuestCountAllocator(template.capacity_per_slot)
