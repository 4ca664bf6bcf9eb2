import logging
from datetime import date
from typing import Dict, List

import requests
from pydantic import ValidationError

from reservation_availability import config
from reservation_availability.errors import StoreError
from reservation_availability.models import ACTIVE_STATUSES, Booking, RestaurantAvailability, active_bookings

logger = logging.getLogger(__name__)

AVAILABILITY_COLLECTION = "restaurant_availability"
BOOKINGS_COLLECTION = "bookings"


class DocumentStoreClient:
    """Reads availability records and bookings from the document store's REST API.

    Implements both the availability store and the booking store interfaces.
    """

    def __init__(self, base_url: str | None = None, timeout: int | None = None):
        self.base_url = (base_url or config.DOCUMENT_STORE_URL or "").rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT

    def _get(self, path: str, params: Dict | None = None) -> requests.Response:
        url = f"{self.base_url}/{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise StoreError(f"Failed to reach document store: {e}") from e
        return response

    def get_availability(self, restaurant_id: str) -> RestaurantAvailability | None:
        response = self._get(f"{AVAILABILITY_COLLECTION}/{restaurant_id}")
        if response.status_code == 404:
            return None
        try:
            response.raise_for_status()
            return RestaurantAvailability.model_validate(response.json())
        except requests.exceptions.RequestException as e:
            raise StoreError(f"Failed to load availability for {restaurant_id}: {e}") from e
        except (ValueError, ValidationError) as e:
            raise StoreError(f"Invalid availability record for {restaurant_id}: {e}") from e

    def list_active_bookings(self, restaurant_id: str, day: date) -> List[Booking]:
        params = {
            "restaurantId": restaurant_id,
            "date": day.isoformat(),
            "status": sorted(s.value for s in ACTIVE_STATUSES),
        }
        response = self._get(BOOKINGS_COLLECTION, params=params)
        try:
            response.raise_for_status()
            documents: List[Dict] = response.json()
        except requests.exceptions.RequestException as e:
            raise StoreError(f"Failed to load bookings for {restaurant_id} on {day.isoformat()}: {e}") from e
        except ValueError as e:
            raise StoreError(f"Unexpected bookings response: {e}") from e
        if not isinstance(documents, list):
            raise StoreError(f"Unexpected bookings response: expected a list, got {type(documents).__name__}")

        bookings = []
        for document in documents:
            if not isinstance(document, dict):
                logger.warning(f"Skipping booking entry that is not an object: {document!r}")
                continue
            try:
                bookings.append(Booking.model_validate(document))
            except ValidationError as e:
                logger.warning(f"Skipping invalid booking {document.get('id')}: {e}")

        # The status parameter may be ignored by the server.
        return active_bookings(bookings)
