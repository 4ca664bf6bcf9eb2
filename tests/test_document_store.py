from unittest.mock import MagicMock, patch

import pytest
import requests

from conftest import MONDAY
from reservation_availability.document_store import DocumentStoreClient
from reservation_availability.errors import StoreError
from reservation_availability.models import ManagementMode


def make_response(status_code=200, payload=None):
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    if status_code >= 400:
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        mock_response.raise_for_status.return_value = None
    return mock_response


@pytest.fixture
def client():
    return DocumentStoreClient("http://store.test/api/", timeout=5)


@patch("reservation_availability.document_store.requests.get")
def test_get_availability_success(mock_get, client):
    mock_get.return_value = make_response(
        payload={
            "restaurantId": "r1",
            "managementMode": "guest-count",
            "schedule": {"Monday": {"isOpen": True, "slots": ["6:00 PM"], "capacityPerSlot": 8}},
            "specialDates": {},
            "tableTurningTime": 60,
        }
    )

    availability = client.get_availability("r1")

    assert availability.management_mode == ManagementMode.GUEST_COUNT
    args, kwargs = mock_get.call_args
    assert args[0] == "http://store.test/api/restaurant_availability/r1"
    assert kwargs["timeout"] == 5


@patch("reservation_availability.document_store.requests.get")
def test_get_availability_not_found(mock_get, client):
    mock_get.return_value = make_response(status_code=404)
    assert client.get_availability("r1") is None


@patch("reservation_availability.document_store.requests.get")
def test_get_availability_server_error(mock_get, client):
    mock_get.return_value = make_response(status_code=500)
    with pytest.raises(StoreError):
        client.get_availability("r1")


@patch("reservation_availability.document_store.requests.get")
def test_get_availability_network_error(mock_get, client):
    mock_get.side_effect = requests.exceptions.ConnectionError("Network error")
    with pytest.raises(StoreError):
        client.get_availability("r1")


@patch("reservation_availability.document_store.requests.get")
def test_list_active_bookings(mock_get, client):
    mock_get.return_value = make_response(
        payload=[
            {"id": "b1", "restaurantId": "r1", "date": "2025-01-06", "time": "18:00", "partySize": 2, "status": "pending"},
            {"id": "b2", "restaurantId": "r1", "date": "2025-01-06", "time": "18:00", "partySize": 2, "status": "no-show"},
            {"id": "b3", "restaurantId": "r1", "date": "2025-01-06", "time": "18:00"},
        ]
    )

    bookings = client.list_active_bookings("r1", MONDAY)

    assert [b.id for b in bookings] == ["b1"]
    _, kwargs = mock_get.call_args
    assert kwargs["params"]["restaurantId"] == "r1"
    assert kwargs["params"]["date"] == "2025-01-06"
    assert set(kwargs["params"]["status"]) == {"pending", "confirmed", "seated"}


@patch("reservation_availability.document_store.requests.get")
def test_list_active_bookings_server_error(mock_get, client):
    mock_get.return_value = make_response(status_code=503)
    with pytest.raises(StoreError):
        client.list_active_bookings("r1", MONDAY)


@patch("reservation_availability.document_store.requests.get")
def test_list_active_bookings_bad_json(mock_get, client):
    mock_response = make_response()
    mock_response.json.side_effect = ValueError("Expecting value")
    mock_get.return_value = mock_response
    with pytest.raises(StoreError):
        client.list_active_bookings("r1", MONDAY)


@patch("reservation_availability.document_store.requests.get")
def test_list_active_bookings_not_a_list(mock_get, client):
    mock_get.return_value = make_response(payload={"b1": {"id": "b1"}})
    with pytest.raises(StoreError):
        client.list_active_bookings("r1", MONDAY)


@patch("reservation_availability.document_store.requests.get")
def test_list_active_bookings_skips_non_object_entries(mock_get, client):
    mock_get.return_value = make_response(
        payload=[
            "b0",
            {"id": "b1", "restaurantId": "r1", "date": "2025-01-06", "time": "18:00", "partySize": 2, "status": "pending"},
        ]
    )
    assert [b.id for b in client.list_active_bookings("r1", MONDAY)] == ["b1"]
