"""Utility functions for the CLI interface."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import click
from tabulate import tabulate

from godrive.repositories import Repository, create_repository
from godrive.services import QueryService, RideService

# One-shot commands need storage that outlives the process
DEFAULT_COMMAND_STORAGE = "document"


def build_services(storage: Optional[str] = None) -> Tuple[Repository, RideService, QueryService]:
    """
    Connect to persistent storage and create the services over it.

    Raises:
        click.ClickException: If in-memory storage is requested
    """
    storage = (storage or DEFAULT_COMMAND_STORAGE).lower()
    if storage == "memory":
        raise click.ClickException(
            "In-memory storage is lost when the command exits. "
            "Use --storage document, or 'godrive serve --seed' for an in-memory demo.")
    repository = create_repository(storage)
    repository.connect()
    return repository, RideService(repository), QueryService(repository)


def echo_table(rows: List[Dict[str, Any]], columns: Sequence[Tuple[str, str]],
               empty_message: str) -> None:
    """Print *rows* as a table; *columns* pairs a header with a row key."""
    if not rows:
        click.echo(empty_message)
        return
    headers = [header for header, _ in columns]
    table = [[_cell(row.get(key)) for _, key in columns] for row in rows]
    click.echo(tabulate(table, headers=headers, tablefmt="simple"))


def _cell(value: Any) -> Any:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return value
