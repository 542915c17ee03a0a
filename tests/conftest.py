"""Shared fixtures for the GoDrive test suite."""

import re
from urllib.parse import urlsplit

import pytest
import responses

from godrive.docstore import create_app as create_docstore_app
from godrive.models import Contact, Payment, PaymentMethod, RideLocation, Vehicle, VehicleType
from godrive.repositories import InMemoryRepository
from godrive.services import QueryService, RideService

DOCSTORE_URL = "http://docstore.test"


def forward_to(client):
    """Build a responses callback that serves requests from a Flask test client."""
    def callback(request):
        parsed = urlsplit(request.url)
        response = client.open(
            parsed.path,
            method=request.method,
            query_string=parsed.query,
            data=request.body,
            content_type=request.headers.get("Content-Type"),
        )
        return response.status_code, {}, response.get_data()
    return callback


@pytest.fixture
def docstore_bridge(tmp_path):
    """Route every request to DOCSTORE_URL into a real document store app."""
    app = create_docstore_app(str(tmp_path / "db.json"))
    callback = forward_to(app.test_client())
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        for method in (responses.GET, responses.POST, responses.PUT, responses.DELETE):
            rsps.add_callback(method, re.compile(rf"{re.escape(DOCSTORE_URL)}/.*"), callback=callback)
        yield DOCSTORE_URL


@pytest.fixture
def vehicle():
    """Fixture for a sample vehicle."""
    return Vehicle("ABC123", "Mazda", "3", 2021, "Red", VehicleType.SEDAN)


@pytest.fixture
def origin():
    return RideLocation("Aeropuerto El Dorado", 4.7016, -74.1469)


@pytest.fixture
def destination():
    return RideLocation("Centro Internacional", 4.6146, -74.0705)


@pytest.fixture
def cash_payment():
    return Payment(35000, PaymentMethod.CASH, "COP")


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def rides(repository):
    return RideService(repository)


@pytest.fixture
def queries(repository):
    return QueryService(repository)


@pytest.fixture
def driver_and_passenger(rides, vehicle):
    """Fixture registering driver D1 and passenger P1."""
    rides.create_driver("D1", "Carlos", "Gomez", "carlos@godrive.co",
                        Contact("carlos@godrive.co", "+57 300 123 4567"),
                        driver_id="DRV-001", license_number="LIC-1", vehicle=vehicle)
    rides.create_passenger("P1", "Ana", "Rodriguez", "ana@mail.co", None, passenger_id="PAS-001")
    return "D1", "P1"
