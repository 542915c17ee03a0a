"""Tests for the GoDrive command line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from godrive import config
from godrive.cli_module.cli import cli
from godrive.cli_module.commands.seed_commands import seed_demo_data
from godrive.errors import StorageError
from godrive.models import RideStatus


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def docstore(docstore_bridge, monkeypatch):
    """Fixture pointing the CLI at an empty, bridged document store."""
    monkeypatch.setattr(config, "DOCSTORE_URL", docstore_bridge)
    return docstore_bridge


class TestSeed:
    """Test class for the demo data set."""

    def test_seed_demo_data(self, repository, rides):
        created = seed_demo_data(rides)

        assert created == {"users": 5, "rides": 4}
        assert repository.get_ride_by_id("R1").status == RideStatus.COMPLETED
        assert repository.get_ride_by_id("R2").status == RideStatus.ACCEPTED
        assert repository.get_ride_by_id("R3").status == RideStatus.CANCELLED
        assert repository.get_ride_by_id("R4").status == RideStatus.REQUESTED
        assert repository.get_user_by_id("D1").earnings == 35000
        assert repository.get_user_by_id("P2").wallet_balance == 50000

    def test_seed_persists_for_later_commands(self, runner, docstore):
        result = runner.invoke(cli, ["seed"])

        assert result.exit_code == 0
        assert "Seeded 5 users and 4 rides." in result.output

        result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 0
        assert "totalUsers" in result.output
        rows = {parts[0]: parts[1] for parts in map(str.split, result.output.splitlines())
                if len(parts) == 2}
        assert rows["totalUsers"] == "5"
        assert rows["completedRides"] == "1"

    def test_seed_twice_fails(self, runner, docstore):
        runner.invoke(cli, ["seed"])

        result = runner.invoke(cli, ["seed"])

        assert result.exit_code != 0
        assert "already exists" in result.output

    @pytest.mark.parametrize("command", [
        ["seed"], ["stats"], ["users", "list"], ["rides", "list"],
    ])
    def test_memory_storage_rejected(self, runner, command):
        result = runner.invoke(cli, command + ["--storage", "memory"])

        assert result.exit_code == 1
        assert "--storage document" in result.output


class TestReports:
    """Test class for the listing commands."""

    def test_list_users_by_role(self, runner, docstore):
        runner.invoke(cli, ["seed"])

        result = runner.invoke(cli, ["users", "list", "--role", "driver"])

        assert result.exit_code == 0
        assert "Carlos Gomez" in result.output
        assert "Ana Rodriguez" not in result.output

    def test_list_rides_by_status(self, runner, docstore):
        runner.invoke(cli, ["seed"])

        result = runner.invoke(cli, ["rides", "list", "--status", "cancelled"])

        assert result.exit_code == 0
        assert "R3" in result.output
        assert "R1" not in result.output

    def test_list_rides_empty(self, runner, docstore):
        result = runner.invoke(cli, ["rides", "list"])

        assert result.exit_code == 0
        assert "No rides found." in result.output

    def test_storage_failure_reported(self, runner):
        with patch('godrive.cli_module.commands.report_commands.build_services',
                   side_effect=StorageError("Document store is unavailable")):
            result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 1
        assert "Document store is unavailable" in result.output


class TestDocstoreCommands:
    """Test class for document store management."""

    def test_status_without_pid_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["docstore", "--db", str(tmp_path / "db.json"), "status"])

        assert result.exit_code == 0
        assert "Server is not running" in result.output

    def test_reset_keeps_backup(self, runner, tmp_path):
        db_file = tmp_path / "db.json"
        db_file.write_text(json.dumps({"users": [{"id": "P1"}], "rides": []}))

        result = runner.invoke(cli, ["docstore", "--db", str(db_file), "reset"])

        assert result.exit_code == 0
        assert json.loads(db_file.read_text()) == {"users": [], "rides": []}
        backup = tmp_path / "db.json.bak"
        assert json.loads(backup.read_text())["users"] == [{"id": "P1"}]
