"""Entity models for the GoDrive application."""
from godrive.models.contact import Address, Contact
from godrive.models.location import GeoPoint, RideLocation
from godrive.models.vehicle import Vehicle, VehicleType
from godrive.models.payment import Payment, PaymentMethod
from godrive.models.rating import Rating
from godrive.models.user import User, UserRole, user_from_record
from godrive.models.driver import Driver
from godrive.models.passenger import Passenger
from godrive.models.administrator import Administrator
from godrive.models.ride import Ride, RideStatus, RIDE_TRANSITIONS


__all__ = [
    'Address',
    'Contact',
    'GeoPoint',
    'RideLocation',
    'Vehicle',
    'VehicleType',
    'Payment',
    'PaymentMethod',
    'Rating',
    'User',
    'UserRole',
    'user_from_record',
    'Driver',
    'Passenger',
    'Administrator',
    'Ride',
    'RideStatus',
    'RIDE_TRANSITIONS',
]
