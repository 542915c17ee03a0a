"""Tests for driver, passenger and administrator behavior."""

import pytest

from godrive.errors import InvalidArgumentError
from godrive.models import (
    Administrator, Contact, Driver, Passenger, Payment, PaymentMethod, Rating,
    UserRole, user_from_record,
)


@pytest.fixture
def driver(vehicle):
    return Driver("D1", "Carlos", "Gomez", "carlos@godrive.co", None,
                  driver_id="DRV-001", license_number="LIC-1", vehicle=vehicle)


@pytest.fixture
def passenger():
    return Passenger("P1", "Ana", "Rodriguez", "ana@mail.co", None, passenger_id="PAS-001")


class TestUserValidation:
    """Test class for shared user validation."""

    def test_invalid_email_rejected(self):
        with pytest.raises(InvalidArgumentError) as excinfo:
            Passenger("P1", "Ana", "Rodriguez", "not-an-email", None, passenger_id="PAS-001")

        assert excinfo.value.field == "email"

    def test_invalid_phone_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Passenger("P1", "Ana", "Rodriguez", "ana@mail.co", Contact("ana@mail.co", "call me"),
                      passenger_id="PAS-001")

    def test_role_fixed_by_class(self, driver, passenger):
        assert driver.role == UserRole.DRIVER
        assert passenger.role == UserRole.PASSENGER

    def test_user_from_record_rebuilds_subclass(self, driver):
        driver.add_rating(Rating("R1", 4))
        restored = user_from_record(driver.to_record())

        assert isinstance(restored, Driver)
        assert restored.average_rating == 4
        assert restored.vehicle == driver.vehicle

    def test_user_from_record_unknown_role(self):
        with pytest.raises(InvalidArgumentError):
            user_from_record({"id": "X", "email": "x@y.co", "role": "PILOT"})


class TestDriver:
    """Test class for driver accounts."""

    def test_average_rating(self, driver):
        assert driver.average_rating == 0

        driver.add_rating(Rating("R1", 5))
        driver.add_rating(Rating("R2", 4))
        driver.add_rating(Rating("R3", 4))

        assert driver.average_rating == 4.33

    def test_rating_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            Rating("R1", 6)

    def test_ratings_getter_returns_copy(self, driver):
        driver.ratings.append(Rating("R1", 1))
        assert driver.ratings == []

    def test_record_completed_ride(self, driver):
        driver.record_completed_ride(35000)
        driver.record_completed_ride(12000)

        assert driver.total_rides == 2
        assert driver.earnings == 47000

    def test_display_info(self, driver):
        driver.set_availability(False)
        info = driver.get_display_info()

        assert info["fullName"] == "Carlos Gomez"
        assert info["isAvailable"] is False
        assert info["permissions"] == 7
        assert info["role"] == "DRIVER"


class TestPassenger:
    """Test class for passenger accounts."""

    def test_favorite_drivers_are_unique(self, passenger):
        passenger.add_favorite_driver("D1")
        passenger.add_favorite_driver("D1")

        assert passenger.favorite_drivers == ["D1"]

        passenger.remove_favorite_driver("D1")
        assert passenger.favorite_drivers == []

    def test_add_funds(self, passenger):
        passenger.add_funds(50000)
        assert passenger.wallet_balance == 50000

    @pytest.mark.parametrize("amount", [0, -10])
    def test_add_funds_rejects_non_positive(self, passenger, amount):
        with pytest.raises(InvalidArgumentError):
            passenger.add_funds(amount)

        assert passenger.wallet_balance == 0

    def test_wallet_payment_debits_balance(self, passenger):
        passenger.add_funds(50000)
        passenger.add_payment(Payment(20000, PaymentMethod.WALLET))

        assert passenger.wallet_balance == 30000
        assert len(passenger.payment_history) == 1

    def test_cash_payment_leaves_wallet(self, passenger):
        passenger.add_payment(Payment(20000, PaymentMethod.CASH))
        assert passenger.wallet_balance == 0

    def test_wallet_may_go_negative(self, passenger):
        passenger.add_payment(Payment(5000, PaymentMethod.WALLET))
        assert passenger.wallet_balance == -5000


class TestAdministrator:
    """Test class for administrator accounts."""

    def test_base_permissions_below_level_three(self):
        admin = Administrator("A1", "Sofia", "Lopez", "sofia@godrive.co", None,
                              admin_id="ADM-1", department="Ops", access_level=2)
        assert "full_access" not in admin.get_permissions()

    def test_extended_permissions_from_level_three(self):
        admin = Administrator("A1", "Sofia", "Lopez", "sofia@godrive.co", None,
                              admin_id="ADM-1", department="Ops", access_level=3)
        assert "full_access" in admin.get_permissions()
        assert admin.get_display_info()["permissions"] == 11

    @pytest.mark.parametrize("level", [0, 6])
    def test_access_level_bounds(self, level):
        with pytest.raises(InvalidArgumentError):
            Administrator("A1", "Sofia", "Lopez", "sofia@godrive.co", None,
                          admin_id="ADM-1", department="Ops", access_level=level)

    def test_managed_cities_unique(self):
        admin = Administrator("A1", "Sofia", "Lopez", "sofia@godrive.co", None,
                              admin_id="ADM-1", department="Ops")
        admin.add_managed_city("Bogota")
        admin.add_managed_city("Bogota")

        assert admin.managed_cities == ["Bogota"]


class TestPaymentValidation:
    """Test class for payment amounts."""

    @pytest.mark.parametrize("amount", [0, -50000])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(InvalidArgumentError) as excinfo:
            Payment(amount, PaymentMethod.WALLET)

        assert excinfo.value.field == "amount"


class TestContactDetails:
    """Test class for email and contact consistency."""

    def test_set_email_updates_contact(self, passenger):
        passenger.set_email("ana.new@mail.co")

        assert passenger.email == "ana.new@mail.co"
        assert passenger.contact.email == "ana.new@mail.co"

    def test_set_email_rejects_invalid(self, passenger):
        with pytest.raises(InvalidArgumentError):
            passenger.set_email("broken")

        assert passenger.contact.email == "ana@mail.co"
