from datetime import date
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from reservation_availability import config


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class ManagementMode(str, Enum):
    GUEST_COUNT = "guest-count"
    TABLE = "table"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.SEATED})


class Document(BaseModel):
    """Base for models stored as camelCase documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DayTemplate(Document):
    is_open: bool
    slots: List[str] = Field(default_factory=list)
    capacity_per_slot: int = 0


class Table(Document):
    id: str
    name: str | None = None
    capacity: int
    is_active: bool = True


class Booking(Document):
    id: str
    restaurant_id: str
    date: date
    time: str  # staff-entered, e.g. "18:30" or "6:30 PM"
    party_size: int
    status: BookingStatus = BookingStatus.PENDING
    table_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("table_id", mode="before")
    @classmethod
    def blank_table_is_unassigned(cls, v):
        return v or None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class RestaurantAvailability(Document):
    restaurant_id: str
    management_mode: ManagementMode = ManagementMode.GUEST_COUNT
    schedule: Dict[Weekday, DayTemplate] = Field(default_factory=dict)
    special_dates: Dict[date, DayTemplate] = Field(default_factory=dict)
    table_turning_time: int = config.DEFAULT_TURNING_TIME
    tables: List[Table] = Field(default_factory=list)
    advance_booking_days: int = config.DEFAULT_ADVANCE_BOOKING_DAYS

    @field_validator("management_mode", mode="before")
    @classmethod
    def legacy_table_mode(cls, v):
        # Older documents spell table mode as "table-based".
        return ManagementMode.TABLE if v == "table-based" else v

    @field_validator("table_turning_time", mode="before")
    @classmethod
    def default_turning_time(cls, v):
        return v or config.DEFAULT_TURNING_TIME

    @field_validator("schedule", "special_dates", mode="before")
    @classmethod
    def null_mapping(cls, v):
        return {} if v is None else v

    @field_validator("tables", mode="before")
    @classmethod
    def null_tables(cls, v):
        return [] if v is None else v


class SlotResult(BaseModel):
    time: str
    available: int
    capacity: int


class DayReport(BaseModel):
    date: str  # ISO format YYYY-MM-DD
    slots: List[SlotResult]
    is_today: bool = False  # slots at or before the current time were left out


def active_bookings(bookings: List[Booking]) -> List[Booking]:
    """Keeps only bookings that still occupy capacity."""
    return [b for b in bookings if b.is_active]
