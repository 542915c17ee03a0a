"""Services for the GoDrive application."""
from godrive.services.locks import LockRegistry
from godrive.services.query_service import QueryService
from godrive.services.ride_service import RideService

__all__ = ['LockRegistry', 'QueryService', 'RideService']
