"""Tests for listings and statistics."""

from godrive.models import Payment, PaymentMethod, RideStatus, UserRole


class TestQueryService:
    """Test class for the query service."""

    def test_user_info(self, queries, driver_and_passenger):
        info = queries.get_user_info("D1")

        assert info["fullName"] == "Carlos Gomez"
        assert queries.get_user_info("nobody") is None

    def test_listings_by_role(self, queries, driver_and_passenger):
        assert [u["id"] for u in queries.list_all_drivers()] == ["D1"]
        assert [u["id"] for u in queries.list_all_passengers()] == ["P1"]
        assert queries.list_users_by_role(UserRole.ADMINISTRATOR) == []

    def test_available_drivers(self, queries, rides, driver_and_passenger):
        assert len(queries.list_available_drivers()) == 1

        rides.set_driver_availability("D1", False)

        assert queries.list_available_drivers() == []

    def test_search_users(self, queries, driver_and_passenger):
        assert [u["id"] for u in queries.search_users("GOMEZ")] == ["D1"]
        assert queries.search_users("zzz") == []

    def test_ride_listings(self, queries, rides, driver_and_passenger, origin, destination):
        rides.create_ride("R1", "P1", origin, destination, 35000)
        rides.create_ride("R2", "P1", destination, origin, 20000)
        rides.accept_ride("R2", "D1")

        assert [r["id"] for r in queries.list_available_rides()] == ["R1"]
        assert [r["id"] for r in queries.list_rides_by_status(RideStatus.ACCEPTED)] == ["R2"]
        assert [r["id"] for r in queries.list_rides_by_driver("D1")] == ["R2"]
        assert len(queries.list_rides_by_passenger("P1")) == 2
        assert queries.get_ride_info("R2")["driverId"] == "D1"
        assert queries.get_ride_info("R9") is None

    def test_statistics_follow_lifecycle(self, queries, rides, driver_and_passenger,
                                         origin, destination):
        rides.create_ride("R1", "P1", origin, destination, 35000)
        rides.accept_ride("R1", "D1")
        rides.start_ride("R1")
        rides.complete_ride("R1", 35000, Payment(35000, PaymentMethod.CASH))
        rides.create_ride("R2", "P1", origin, destination, 20000)
        rides.cancel_ride("R2")

        stats = queries.get_system_statistics()

        assert stats["totalUsers"] == 2
        assert stats["activeUsers"] == 2
        assert stats["totalRides"] == 2
        assert stats["completedRides"] == 1
        assert stats["cancelledRides"] == 1
        assert stats["requestedRides"] == 0
