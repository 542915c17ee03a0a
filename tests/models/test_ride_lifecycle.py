"""Tests for the ride state machine."""

import pytest

from godrive.errors import InvalidArgumentError, InvalidTransitionError
from godrive.models import Payment, PaymentMethod, Ride, RideStatus, RIDE_TRANSITIONS


@pytest.fixture
def ride(origin, destination):
    """Fixture for a ride in REQUESTED status."""
    return Ride("R1", "P1", origin, destination, 35000, distance=14.2, estimated_duration=35)


class TestRideLifecycle:
    """Test class for ride status transitions."""

    def test_new_ride_is_requested(self, ride):
        assert ride.status == RideStatus.REQUESTED
        assert ride.driver_id is None
        assert ride.final_price is None
        assert ride.payment is None
        assert ride.started_at is None
        assert ride.completed_at is None

    def test_full_lifecycle(self, ride, cash_payment):
        """Test REQUESTED -> ACCEPTED -> IN_PROGRESS -> COMPLETED."""
        ride.accept_ride("D1")
        assert ride.status == RideStatus.ACCEPTED
        assert ride.driver_id == "D1"

        ride.start_ride()
        assert ride.status == RideStatus.IN_PROGRESS
        assert ride.started_at is not None

        ride.complete_ride(35000, cash_payment)
        assert ride.status == RideStatus.COMPLETED
        assert ride.final_price == 35000
        assert ride.payment == cash_payment
        assert ride.completed_at is not None
        assert ride.is_terminal

    def test_start_requires_accepted(self, ride):
        with pytest.raises(InvalidTransitionError) as excinfo:
            ride.start_ride()

        assert "Cannot start ride with status REQUESTED" in str(excinfo.value)
        assert ride.status == RideStatus.REQUESTED
        assert ride.started_at is None

    def test_complete_requires_in_progress(self, ride, cash_payment):
        ride.accept_ride("D1")

        with pytest.raises(InvalidTransitionError):
            ride.complete_ride(35000, cash_payment)

        assert ride.status == RideStatus.ACCEPTED
        assert ride.final_price is None

    def test_accept_twice_keeps_first_driver(self, ride):
        ride.accept_ride("D1")

        with pytest.raises(InvalidTransitionError):
            ride.accept_ride("D2")

        assert ride.driver_id == "D1"

    @pytest.mark.parametrize("steps", [[], ["accept"], ["accept", "start"]])
    def test_cancel_from_non_terminal_states(self, ride, steps):
        if "accept" in steps:
            ride.accept_ride("D1")
        if "start" in steps:
            ride.start_ride()

        ride.cancel_ride("passenger no-show")

        assert ride.status == RideStatus.CANCELLED
        assert ride.notes == "passenger no-show"

    def test_cancel_keeps_driver(self, ride):
        ride.accept_ride("D1")
        ride.cancel_ride()

        assert ride.driver_id == "D1"
        assert ride.notes is None

    def test_terminal_states_reject_everything(self, ride, cash_payment):
        ride.cancel_ride("changed plans")

        for action in (lambda: ride.accept_ride("D1"), ride.start_ride,
                       lambda: ride.complete_ride(1, cash_payment), ride.cancel_ride):
            with pytest.raises(InvalidTransitionError):
                action()

        assert ride.status == RideStatus.CANCELLED
        assert ride.notes == "changed plans"

    def test_transition_table_has_no_way_out_of_terminal_states(self):
        assert RIDE_TRANSITIONS[RideStatus.COMPLETED] == set()
        assert RIDE_TRANSITIONS[RideStatus.CANCELLED] == set()

    def test_negative_final_price_rejected(self, ride):
        ride.accept_ride("D1")
        ride.start_ride()

        with pytest.raises(InvalidArgumentError):
            ride.complete_ride(-1, Payment(1, PaymentMethod.CASH))

        assert ride.status == RideStatus.IN_PROGRESS

    def test_record_round_trip_keeps_lifecycle_fields(self, ride, cash_payment):
        ride.accept_ride("D1")
        ride.start_ride()
        ride.complete_ride(36000, cash_payment)

        record = ride.to_record()
        restored = Ride.from_record(record)

        assert record["status"] == "COMPLETED"
        assert record["payment"]["method"] == "CASH"
        assert restored.status == RideStatus.COMPLETED
        assert restored.driver_id == "D1"
        assert restored.final_price == 36000
        assert restored.started_at == ride.started_at
        assert restored.origin == ride.origin
