"""REST API for the GoDrive application."""
from godrive.api.app import create_app

__all__ = ['create_app']
