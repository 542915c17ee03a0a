"""Command line interface for the GoDrive application."""
