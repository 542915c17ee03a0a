"""Demo data commands for the GoDrive CLI."""

import click

from godrive.cli_module.utils import DEFAULT_COMMAND_STORAGE, build_services
from godrive.errors import GoDriveError
from godrive.models import (
    Address, Contact, Payment, PaymentMethod, Rating, RideLocation, Vehicle, VehicleType,
)
from godrive.services import RideService


def seed_demo_data(rides: RideService) -> dict:
    """
    Create a small demo data set through the ride service.

    Returns:
        dict: How many users and rides were created
    """
    bogota = Address(street="Calle 80 #10-20", city="Bogota", country="Colombia", zip_code="110221")

    rides.create_driver(
        "D1", "Carlos", "Gomez", "carlos.gomez@godrive.co",
        Contact("carlos.gomez@godrive.co", "+57 300 123 4567", bogota),
        driver_id="DRV-001", license_number="LIC-45821",
        vehicle=Vehicle("ABC123", "Mazda", "3", 2021, "Red", VehicleType.SEDAN),
    )
    rides.create_driver(
        "D2", "Laura", "Martinez", "laura.martinez@godrive.co",
        Contact("laura.martinez@godrive.co", "+57 310 555 0101", bogota),
        driver_id="DRV-002", license_number="LIC-99310",
        vehicle=Vehicle("XYZ987", "Renault", "Duster", 2020, "Gray", VehicleType.SUV),
    )
    rides.set_driver_availability("D2", False)

    rides.create_passenger(
        "P1", "Ana", "Rodriguez", "ana.rodriguez@mail.co",
        Contact("ana.rodriguez@mail.co", "+57 320 444 1212", bogota), passenger_id="PAS-001",
    )
    rides.create_passenger(
        "P2", "Juan", "Perez", "juan.perez@mail.co",
        Contact("juan.perez@mail.co", "+57 315 222 3434", bogota), passenger_id="PAS-002",
    )
    rides.add_funds_to_passenger("P2", 50000)
    rides.add_favorite_driver("P1", "D1")

    rides.create_administrator(
        "A1", "Sofia", "Lopez", "sofia.lopez@godrive.co", None,
        admin_id="ADM-001", department="Operations", access_level=3,
    )

    airport = RideLocation("Aeropuerto El Dorado", 4.7016, -74.1469)
    downtown = RideLocation("Centro Internacional", 4.6146, -74.0705)
    usaquen = RideLocation("Usaquen", 4.6950, -74.0303)

    rides.create_ride("R1", "P1", airport, downtown, 35000, distance=14.2, estimated_duration=35)
    rides.accept_ride("R1", "D1")
    rides.start_ride("R1")
    rides.complete_ride("R1", 35000, Payment(35000, PaymentMethod.CASH, "COP"))
    rides.rate_driver("D1", Rating("R1", 5, "Very kind driver"))

    rides.create_ride("R2", "P2", downtown, usaquen, 18000, distance=9.5, estimated_duration=25)
    rides.accept_ride("R2", "D1")

    rides.create_ride("R3", "P1", usaquen, airport, 42000, distance=18.0, estimated_duration=45)
    rides.cancel_ride("R3", "passenger no-show")

    rides.create_ride("R4", "P2", usaquen, downtown, 20000, distance=9.8, estimated_duration=26)

    return {"users": 5, "rides": 4}


@click.command(name="seed")
@click.option("--storage", type=click.Choice(["memory", "document"]), default=DEFAULT_COMMAND_STORAGE,
              help="Repository backend; memory is rejected since nothing would persist")
def seed_command(storage):
    """Load demo users and rides."""
    try:
        _, rides, _ = build_services(storage)
        created = seed_demo_data(rides)
    except GoDriveError as e:
        raise click.ClickException(str(e))
    click.echo(f"Seeded {created['users']} users and {created['rides']} rides.")
