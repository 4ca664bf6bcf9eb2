import logging
import os

logger = logging.getLogger(__name__)

# --- File Paths ---
DATA_DIR = os.environ.get("RESERVATION_DATA_DIR", "data")
AVAILABILITY_FILE = os.path.join(DATA_DIR, "restaurant_availability.json")
BOOKINGS_FILE = os.path.join(DATA_DIR, "bookings.json")
REPORT_FILE = os.path.join(DATA_DIR, "report.json")

# --- Document store ---
# When set, run() reads from the HTTP document store instead of the JSON files.
DOCUMENT_STORE_URL = os.environ.get("DOCUMENT_STORE_URL")
REQUEST_TIMEOUT = int(os.environ.get("DOCUMENT_STORE_TIMEOUT", "10"))

# --- Engine defaults ---
DEFAULT_TURNING_TIME = 60  # minutes
DEFAULT_ADVANCE_BOOKING_DAYS = 30
DEFAULT_PARTY_SIZE = 2

if not DOCUMENT_STORE_URL:
    logger.debug(f"DOCUMENT_STORE_URL not set. Reading availability from {DATA_DIR}.")
