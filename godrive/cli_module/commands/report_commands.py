"""Reporting commands for the GoDrive CLI."""

import click

from godrive.cli_module.utils import DEFAULT_COMMAND_STORAGE, build_services, echo_table
from godrive.errors import GoDriveError
from godrive.models import RideStatus, UserRole

STORAGE_OPTION = click.option(
    "--storage", type=click.Choice(["memory", "document"]), default=DEFAULT_COMMAND_STORAGE,
    help="Repository backend; memory is rejected since nothing would persist")

USER_COLUMNS = [
    ("ID", "id"),
    ("Name", "fullName"),
    ("Email", "email"),
    ("Role", "role"),
    ("Active", "isActive"),
]

RIDE_COLUMNS = [
    ("ID", "id"),
    ("Passenger", "passengerId"),
    ("Driver", "driverId"),
    ("Status", "status"),
    ("Requested", "requestedPrice"),
    ("Final", "finalPrice"),
    ("Notes", "notes"),
]


@click.command(name="stats")
@STORAGE_OPTION
def stats_command(storage):
    """Show user and ride statistics."""
    try:
        _, _, queries = build_services(storage)
        stats = queries.get_system_statistics()
    except GoDriveError as e:
        raise click.ClickException(str(e))
    echo_table([{"name": k, "value": v} for k, v in stats.items()],
               [("Statistic", "name"), ("Value", "value")], "No statistics available.")


@click.group(name="users")
def users_group():
    """User listing commands."""
    pass


@users_group.command(name="list")
@click.option("--role", type=click.Choice([r.value for r in UserRole], case_sensitive=False),
              help="Only list users with this role")
@STORAGE_OPTION
def list_users(role, storage):
    """List users."""
    try:
        _, _, queries = build_services(storage)
        if role:
            users = queries.list_users_by_role(UserRole(role.upper()))
        else:
            users = queries.list_all_users()
    except GoDriveError as e:
        raise click.ClickException(str(e))
    echo_table(users, USER_COLUMNS, "No users found.")


@click.group(name="rides")
def rides_group():
    """Ride listing commands."""
    pass


@rides_group.command(name="list")
@click.option("--status", type=click.Choice([s.value for s in RideStatus], case_sensitive=False),
              help="Only list rides with this status")
@STORAGE_OPTION
def list_rides(status, storage):
    """List rides."""
    try:
        _, _, queries = build_services(storage)
        if status:
            rides = queries.list_rides_by_status(RideStatus(status.upper()))
        else:
            rides = queries.list_all_rides()
    except GoDriveError as e:
        raise click.ClickException(str(e))
    echo_table(rides, RIDE_COLUMNS, "No rides found.")
