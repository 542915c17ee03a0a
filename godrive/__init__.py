"""GoDrive ride-hailing administration demo."""

__version__ = "0.1.0"
