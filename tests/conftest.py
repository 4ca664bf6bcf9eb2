from datetime import date

import pytest

from reservation_availability.models import Booking, RestaurantAvailability

MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


def make_booking(time, party_size, table_id=None, status="confirmed", booking_id="b1", day=MONDAY):
    return Booking(
        id=booking_id,
        restaurant_id="r1",
        date=day,
        time=time,
        party_size=party_size,
        status=status,
        table_id=table_id,
    )


@pytest.fixture
def guest_count_availability():
    return RestaurantAvailability.model_validate(
        {
            "restaurantId": "r1",
            "managementMode": "guest-count",
            "schedule": {
                "Monday": {"isOpen": True, "slots": ["18:00", "18:30", "19:00"], "capacityPerSlot": 10},
                "Saturday": {"isOpen": True, "slots": ["12:00", "12:30"], "capacityPerSlot": 20},
                "Sunday": {"isOpen": False, "slots": ["12:00"], "capacityPerSlot": 20},
            },
            "specialDates": {},
            "tableTurningTime": 60,
        }
    )


@pytest.fixture
def table_availability():
    return RestaurantAvailability.model_validate(
        {
            "restaurantId": "r1",
            "managementMode": "table",
            "schedule": {
                "Monday": {"isOpen": True, "slots": ["18:00", "18:30", "19:00", "19:30"], "capacityPerSlot": 4},
            },
            "tableTurningTime": 90,
            "tables": [
                {"id": "t1", "name": "Table 1", "capacity": 2, "isActive": True},
                {"id": "t2", "name": "Table 2", "capacity": 4, "isActive": True},
                {"id": "t3", "name": "Table 3", "capacity": 4, "isActive": True},
            ],
        }
    )
