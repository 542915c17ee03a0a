"""Command modules for the GoDrive CLI."""

from godrive.cli_module.commands.report_commands import rides_group, stats_command, users_group
from godrive.cli_module.commands.seed_commands import seed_command
from godrive.cli_module.commands.server_commands import docstore_group, serve_command

__all__ = [
    'docstore_group',
    'rides_group',
    'seed_command',
    'serve_command',
    'stats_command',
    'users_group',
]
