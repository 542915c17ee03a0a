"""Commands that run the GoDrive API and manage the document store process."""

import json
import logging
import os
import signal
import subprocess
import sys
import time

import click

from godrive import config
from godrive.docstore.server import empty_database
from godrive.errors import GoDriveError
from godrive.repositories import create_repository

logger = logging.getLogger(__name__)


def _pid_file(db_file: str) -> str:
    return os.path.join(os.path.dirname(os.path.abspath(db_file)), "docstore.pid")


def _read_pid(pid_file: str):
    with open(pid_file, 'r') as f:
        return int(f.read().strip())


def _process_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


@click.command(name="serve")
@click.option('--host', default=config.HOST, help='Interface to bind')
@click.option('--port', default=config.PORT, help='Port to run the API on')
@click.option('--storage', type=click.Choice(['memory', 'document']), default=config.STORAGE,
              help='Repository backend')
@click.option('--seed', is_flag=True, help='Load demo data before serving')
def serve_command(host, port, storage, seed):
    """Run the GoDrive REST API and dashboard."""
    from godrive.api import create_app
    from godrive.cli_module.commands.seed_commands import seed_demo_data

    try:
        repository = create_repository(storage)
        repository.connect()
        app = create_app(repository)
        if seed:
            seed_demo_data(app.extensions["godrive"]["rides"])
    except GoDriveError as e:
        raise click.ClickException(str(e))

    logger.info(f"GoDrive API listening on http://{host}:{port} ({storage} storage)")
    try:
        app.run(host=host, port=port, threaded=True)
    finally:
        repository.close()
        logger.info("GoDrive API stopped")


@click.group(name="docstore")
@click.option('--db', 'db_file', default=config.DOCSTORE_FILE, help='JSON database file')
@click.pass_context
def docstore_group(ctx, db_file):
    """Document store management commands."""
    ctx.obj = {"db_file": db_file, "pid_file": _pid_file(db_file)}


@docstore_group.command()
@click.option('--port', default=3000, help='Port to run the server on')
@click.pass_obj
def start(obj, port):
    """Start the document store in the background."""
    pid_file = obj["pid_file"]

    if os.path.exists(pid_file):
        click.echo(f"Server already running with PID {_read_pid(pid_file)}")
        click.echo(f"If the server is not running, delete '{pid_file}' and try again")
        return

    click.echo(f"Starting document store on port {port}...")
    click.echo(f"Using database: {obj['db_file']}")

    process = subprocess.Popen(
        [sys.executable, '-m', 'godrive.docstore', '--port', str(port), '--db', obj['db_file']],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE)

    # Give the server a moment to start
    time.sleep(1)

    if process.poll() is not None:
        stdout, stderr = process.communicate()
        click.echo("Server failed to start!", err=True)
        click.echo(f"STDOUT: {stdout.decode('utf-8')}")
        click.echo(f"STDERR: {stderr.decode('utf-8')}")
        return

    with open(pid_file, 'w') as f:
        f.write(str(process.pid))

    click.echo(f"Server running with PID {process.pid}")
    click.echo(f"Server accessible at: http://localhost:{port}")


@docstore_group.command()
@click.pass_obj
def stop(obj):
    """Stop the document store."""
    pid_file = obj["pid_file"]

    if not os.path.exists(pid_file):
        click.echo("No running server found")
        return

    try:
        pid = _read_pid(pid_file)
    except ValueError:
        click.echo("Invalid PID in the PID file")
        os.remove(pid_file)
        return

    click.echo(f"Stopping server with PID {pid}...")
    try:
        os.kill(pid, signal.SIGTERM)
        time.sleep(1)
        if _process_alive(pid):
            click.echo("Server did not terminate gracefully, force killing...")
            os.kill(pid, signal.SIGKILL)
        click.echo("Server stopped")
    except OSError as e:
        click.echo(f"Error stopping server: {str(e)}")

    os.remove(pid_file)


@docstore_group.command()
@click.pass_obj
def status(obj):
    """Check if the document store is running."""
    pid_file = obj["pid_file"]

    if not os.path.exists(pid_file):
        click.echo("Server is not running")
        return

    try:
        pid = _read_pid(pid_file)
    except ValueError:
        click.echo("Invalid PID in the PID file")
        return

    if _process_alive(pid):
        click.echo(f"Server is running with PID {pid}")
    else:
        click.echo("Server PID file exists but process is not running")
        click.echo(f"You may want to remove '{pid_file}'")


@docstore_group.command()
@click.pass_obj
def reset(obj):
    """Reset the database to empty state, keeping a backup."""
    db_file = obj["db_file"]

    if not os.path.exists(db_file):
        click.echo(f"Database file not found: {db_file}")
        return

    backup_path = f"{db_file}.bak"
    with open(db_file, 'r') as src, open(backup_path, 'w') as dst:
        dst.write(src.read())

    with open(db_file, 'w') as f:
        json.dump(empty_database(), f, indent=2)

    click.echo(f"Database reset. Backup created at {backup_path}")
