import json
import logging
import os
from datetime import date, datetime, timezone
from typing import Dict, List

from pydantic import ValidationError

from reservation_availability import config
from reservation_availability.errors import StoreError
from reservation_availability.models import Booking, DayReport, RestaurantAvailability, active_bookings

logger = logging.getLogger(__name__)


def ensure_data_dir():
    """Ensures the data directory exists."""
    if not os.path.exists(config.DATA_DIR):
        os.makedirs(config.DATA_DIR)


def _load_json(path: str, empty):
    """Loads a JSON document, treating a missing file as empty.

    The top-level value must have the same type as `empty`.
    """
    if not os.path.exists(path):
        logger.info(f"No data file found at {path}.")
        return empty
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        raise StoreError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, type(empty)):
        raise StoreError(f"Expected a JSON {type(empty).__name__} in {path}, got {type(data).__name__}")
    return data


class JsonAvailabilityStore:
    """Availability records kept in a JSON object keyed by restaurant id."""

    def __init__(self, path: str | None = None):
        self.path = path or config.AVAILABILITY_FILE

    def get_availability(self, restaurant_id: str) -> RestaurantAvailability | None:
        documents: Dict = _load_json(self.path, {})
        document = documents.get(restaurant_id)
        if document is None:
            return None
        if not isinstance(document, dict):
            raise StoreError(f"Availability record for {restaurant_id} is not an object")
        try:
            return RestaurantAvailability.model_validate({"restaurantId": restaurant_id, **document})
        except ValidationError as e:
            raise StoreError(f"Invalid availability record for {restaurant_id}: {e}") from e


class JsonBookingStore:
    """Bookings kept in a JSON list."""

    def __init__(self, path: str | None = None):
        self.path = path or config.BOOKINGS_FILE

    def list_active_bookings(self, restaurant_id: str, day: date) -> List[Booking]:
        documents: List = _load_json(self.path, [])
        bookings = []
        for document in documents:
            if not isinstance(document, dict):
                logger.warning(f"Skipping booking entry that is not an object: {document!r}")
                continue
            if document.get("restaurantId") != restaurant_id or document.get("date") != day.isoformat():
                continue
            try:
                bookings.append(Booking.model_validate(document))
            except ValidationError as e:
                logger.warning(f"Skipping invalid booking {document.get('id')}: {e}")
        return active_bookings(bookings)


def save_report(restaurant_id: str, party_size: int, reports: List[DayReport]):
    """Saves the availability report to a JSON file."""
    ensure_data_dir()
    try:
        data = {
            "last_updated": datetime.now(timezone.utc).isoformat(),
            "restaurant_id": restaurant_id,
            "party_size": party_size,
            "days": [r.model_dump() for r in reports],
        }
        with open(config.REPORT_FILE, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved report to {config.REPORT_FILE}")
    except IOError as e:
        logger.error(f"Failed to save report: {e}")
