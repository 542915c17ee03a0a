"""Ride service for the GoDrive application."""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from godrive.errors import NotFoundError
from godrive.models import (
    Administrator, Contact, Driver, Passenger, Payment, Rating, Ride,
    RideLocation, User, UserRole, Vehicle, user_from_record,
)
from godrive.repositories.base import Repository
from godrive.services.locks import LockRegistry, ride_key, user_key

logger = logging.getLogger(__name__)


class RideService:
    """
    Coordinator of the ride lifecycle and the accounts it affects.

    The service keeps no state of its own: every operation reads from the
    repository, validates, mutates and writes back while holding the locks
    of every entity it touches. Ride locks are always taken before user
    locks.
    """

    def __init__(self, repository: Repository, locks: Optional[LockRegistry] = None):
        self.repository = repository
        self._locks = locks or LockRegistry()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_ride(self, ride_id: str) -> Ride:
        ride = self.repository.get_ride_by_id(ride_id)
        if ride is None:
            raise NotFoundError("Ride", ride_id)
        return ride

    def _create_user(self, user: User) -> Dict[str, Any]:
        with self._locks.hold(user_key(user.id)):
            self.repository.create_user(user)
        logger.info(f"Created {user.role.value.lower()} {user.id}")
        return user.get_display_info()

    def _update_account(self, user_id: str, role: UserRole,
                        change: Callable[[Any], None]) -> Dict[str, Any]:
        """Resolve a user of *role*, apply *change* and persist it."""
        with self._locks.hold(user_key(user_id)):
            user = self.repository.resolve_user(user_id, role)
            change(user)
            self.repository.update_user(user_id, user)
            return user.get_display_info()

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def create_driver(self, id: str, first_name: str, last_name: str, email: str,
                      contact: Optional[Contact], driver_id: str, license_number: str,
                      vehicle: Vehicle) -> Dict[str, Any]:
        """
        Register a new driver.

        Returns:
            Dict: Display info of the new driver

        Raises:
            AlreadyExistsError: If a user with this id exists
            InvalidArgumentError: If the email or phone is malformed
        """
        driver = Driver(id, first_name, last_name, email, contact,
                        driver_id=driver_id, license_number=license_number, vehicle=vehicle)
        return self._create_user(driver)

    def update_driver_location(self, driver_id: str, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._update_account(
            driver_id, UserRole.DRIVER, lambda d: d.update_location(latitude, longitude))

    def set_driver_availability(self, driver_id: str, available: bool) -> Dict[str, Any]:
        return self._update_account(
            driver_id, UserRole.DRIVER, lambda d: d.set_availability(available))

    def rate_driver(self, driver_id: str, rating: Rating) -> Dict[str, Any]:
        """
        Add a rating to a driver.

        Args:
            driver_id: ID of the driver
            rating: The rating to append

        Returns:
            Dict: Display info of the driver, with the new average rating

        Raises:
            NotFoundError: If the driver does not exist
        """
        info = self._update_account(driver_id, UserRole.DRIVER, lambda d: d.add_rating(rating))
        logger.info(f"Driver {driver_id} rated {rating.rating} for ride {rating.ride_id}")
        return info

    # ------------------------------------------------------------------
    # Passengers
    # ------------------------------------------------------------------

    def create_passenger(self, id: str, first_name: str, last_name: str, email: str,
                         contact: Optional[Contact], passenger_id: str) -> Dict[str, Any]:
        passenger = Passenger(id, first_name, last_name, email, contact, passenger_id=passenger_id)
        return self._create_user(passenger)

    def add_funds_to_passenger(self, passenger_id: str, amount: float) -> Dict[str, Any]:
        """
        Top up a passenger's wallet.

        Raises:
            NotFoundError: If the passenger does not exist
            InvalidArgumentError: If amount is not positive; nothing is saved
        """
        info = self._update_account(passenger_id, UserRole.PASSENGER, lambda p: p.add_funds(amount))
        logger.info(f"Added {amount} to wallet of passenger {passenger_id}")
        return info

    def add_favorite_driver(self, passenger_id: str, driver_id: str) -> Dict[str, Any]:
        return self._update_account(
            passenger_id, UserRole.PASSENGER, lambda p: p.add_favorite_driver(driver_id))

    def remove_favorite_driver(self, passenger_id: str, driver_id: str) -> Dict[str, Any]:
        return self._update_account(
            passenger_id, UserRole.PASSENGER, lambda p: p.remove_favorite_driver(driver_id))

    def update_passenger_location(self, passenger_id: str, latitude: float,
                                  longitude: float) -> Dict[str, Any]:
        return self._update_account(
            passenger_id, UserRole.PASSENGER, lambda p: p.update_location(latitude, longitude))

    # ------------------------------------------------------------------
    # Administrators and general user management
    # ------------------------------------------------------------------

    def create_administrator(self, id: str, first_name: str, last_name: str, email: str,
                             contact: Optional[Contact], admin_id: str, department: str,
                             access_level: int = 2) -> Dict[str, Any]:
        admin = Administrator(id, first_name, last_name, email, contact,
                              admin_id=admin_id, department=department, access_level=access_level)
        return self._create_user(admin)

    def set_user_active(self, user_id: str, active: bool) -> Dict[str, Any]:
        """Activate or deactivate any user."""
        with self._locks.hold(user_key(user_id)):
            user = self.repository.get_user_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if active:
                user.activate()
            else:
                user.deactivate()
            self.repository.update_user(user_id, user)
            return user.get_display_info()

    def delete_user(self, user_id: str) -> bool:
        with self._locks.hold(user_key(user_id)):
            deleted = self.repository.delete_user(user_id)
        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted

    def delete_all_users(self) -> int:
        count = self.repository.delete_all_users()
        logger.warning(f"Deleted all {count} users")
        return count

    # ------------------------------------------------------------------
    # Ride lifecycle
    # ------------------------------------------------------------------

    def create_ride(self, id: str, passenger_id: str, origin: RideLocation,
                    destination: RideLocation, requested_price: float,
                    distance: float = 0, estimated_duration: float = 0) -> Dict[str, Any]:
        """
        Create a ride request for an existing passenger.

        Args:
            id: ID of the new ride
            passenger_id: ID of the requesting passenger
            origin: Pickup location
            destination: Dropoff location
            requested_price: Price offered by the passenger
            distance: Distance in kilometers
            estimated_duration: Estimated duration in minutes

        Returns:
            Dict: The new ride, in REQUESTED status

        Raises:
            NotFoundError: If the passenger does not exist; nothing is stored
            AlreadyExistsError: If a ride with this id exists
        """
        with self._locks.hold(ride_key(id)):
            with self._locks.hold(user_key(passenger_id)):
                self.repository.resolve_user(passenger_id, UserRole.PASSENGER)
                ride = Ride(id, passenger_id, origin, destination, requested_price,
                            distance=distance, estimated_duration=estimated_duration)
                self.repository.create_ride(ride)
        logger.info(f"Ride {id} requested by passenger {passenger_id}")
        return ride.get_display_info()

    def accept_ride(self, ride_id: str, driver_id: str) -> Dict[str, Any]:
        """
        Bind a driver to a requested ride.

        The driver's availability flag is not enforced.

        Raises:
            NotFoundError: If the ride or the driver does not exist
            InvalidTransitionError: If the ride is not REQUESTED
        """
        with self._locks.hold(ride_key(ride_id)):
            ride = self._get_ride(ride_id)
            with self._locks.hold(user_key(driver_id)):
                driver = self.repository.resolve_user(driver_id, UserRole.DRIVER)
                if not driver.is_available:
                    logger.info(f"Driver {driver_id} accepted ride {ride_id} while unavailable")
                ride.accept_ride(driver_id)
                self.repository.update_ride(ride_id, ride)
        logger.info(f"Ride {ride_id} accepted by driver {driver_id}")
        return ride.get_display_info()

    def start_ride(self, ride_id: str) -> Dict[str, Any]:
        """
        Start an accepted ride.

        Raises:
            NotFoundError: If the ride does not exist
            InvalidTransitionError: If the ride is not ACCEPTED
        """
        with self._locks.hold(ride_key(ride_id)):
            ride = self._get_ride(ride_id)
            ride.start_ride()
            self.repository.update_ride(ride_id, ride)
        logger.info(f"Ride {ride_id} started")
        return ride.get_display_info()

    def complete_ride(self, ride_id: str, final_price: float, payment: Payment) -> Dict[str, Any]:
        """
        Complete a ride in progress and settle both accounts.

        The ride, its driver and its passenger are written as one unit:
        the driver gains one ride and *final_price* in earnings, the
        passenger gains one ride and the payment (debiting the wallet for
        WALLET payments). If any write fails, the records already written
        are restored before the error propagates.

        Args:
            ride_id: ID of the ride
            final_price: Price charged for the ride
            payment: Payment made by the passenger

        Returns:
            Dict: The completed ride

        Raises:
            NotFoundError: If the ride, its bound driver or its passenger
                does not exist; nothing is changed
            InvalidTransitionError: If the ride is not IN_PROGRESS
            StorageError: If the backend fails; prior state is restored
        """
        with self._locks.hold(ride_key(ride_id)):
            ride = self._get_ride(ride_id)
            with self._locks.hold(user_key(ride.passenger_id), user_key(ride.driver_id)):
                driver = None
                if ride.driver_id:
                    driver = self.repository.resolve_user(ride.driver_id, UserRole.DRIVER)
                passenger = self.repository.resolve_user(ride.passenger_id, UserRole.PASSENGER)

                snapshots = [("ride", ride_id, Ride.from_record(ride.to_record()))]
                if driver is not None:
                    snapshots.append(("user", driver.id, user_from_record(driver.to_record())))
                snapshots.append(("user", passenger.id, user_from_record(passenger.to_record())))

                ride.complete_ride(final_price, payment)
                if driver is not None:
                    driver.record_completed_ride(final_price)
                passenger.increment_rides()
                passenger.add_payment(payment)

                writes = [(self.repository.update_ride, ride_id, ride)]
                if driver is not None:
                    writes.append((self.repository.update_user, driver.id, driver))
                writes.append((self.repository.update_user, passenger.id, passenger))
                self._write_all(writes, snapshots)

        logger.info(f"Ride {ride_id} completed for {final_price} {payment.currency} "
                    f"via {payment.method.value}")
        return ride.get_display_info()

    def _write_all(self, writes: List[Tuple[Callable, str, Any]],
                   snapshots: List[Tuple[str, str, Any]]) -> None:
        done = 0
        try:
            for write, entity_id, entity in writes:
                write(entity_id, entity)
                done += 1
        except Exception:
            logger.error(f"Ride completion failed after {done} of {len(writes)} writes, restoring")
            self._restore(snapshots[:done])
            raise

    def _restore(self, snapshots: List[Tuple[str, str, Any]]) -> None:
        for kind, entity_id, previous in snapshots:
            try:
                if kind == "ride":
                    self.repository.update_ride(entity_id, previous)
                else:
                    self.repository.update_user(entity_id, previous)
            except Exception as e:
                logger.critical(f"Could not restore {kind} {entity_id}: {str(e)}")

    def cancel_ride(self, ride_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
        """
        Cancel a ride that has not finished.

        Raises:
            NotFoundError: If the ride does not exist
            InvalidTransitionError: If the ride is COMPLETED or CANCELLED
        """
        with self._locks.hold(ride_key(ride_id)):
            ride = self._get_ride(ride_id)
            ride.cancel_ride(reason)
            self.repository.update_ride(ride_id, ride)
        logger.info(f"Ride {ride_id} cancelled: {reason or 'no reason given'}")
        return ride.get_display_info()
