"""Main CLI entry point for the GoDrive application."""

import click

from godrive import config
from godrive.cli_module.commands import (
    docstore_group, rides_group, seed_command, serve_command, stats_command, users_group,
)

# Set context settings to properly display help for all commands
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
    "show_default": True
}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--log-level", default=config.LOG_LEVEL,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging verbosity")
def cli(log_level):
    """GoDrive ride-hailing administration CLI."""
    config.configure_logging(log_level.upper())


# Register all command groups
cli.add_command(serve_command)
cli.add_command(docstore_group)
cli.add_command(seed_command)
cli.add_command(stats_command)
cli.add_command(users_group)
cli.add_command(rides_group)


def main():
    """Entry point for the application."""
    cli()


if __name__ == '__main__':
    main()
