"""Tests for the `myapp-migrate` command."""

import pytest
from click.testing import CliRunner

from myapp.migrations import MigrationExecutionError
from myapp.migrations import runner as migration_runner
from myapp.migrations.cli import USAGE, cli


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def with_database(monkeypatch, database_url):
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("LOG_FORMAT", "console")
    return database_url


@pytest.fixture
def forbid_runner(monkeypatch):
    """Fail the test if any runner operation is reached."""

    def _fail(*args, **kwargs):
        raise AssertionError("migration runner must not be called")

    for name in ("up", "down", "redo", "status"):
        monkeypatch.setattr(migration_runner, name, _fail)


@pytest.mark.unit
class TestUsage:
    def test_missing_action_prints_usage(self, cli_runner, forbid_runner):
        result = cli_runner.invoke(cli, [])

        assert result.exit_code == 1
        assert USAGE in result.output

    def test_unknown_action_prints_usage(self, cli_runner, forbid_runner):
        result = cli_runner.invoke(cli, ["sideways"])

        assert result.exit_code == 1
        assert USAGE in result.output

    def test_missing_database_url_fails_before_connecting(
        self, cli_runner, monkeypatch, forbid_runner
    ):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        result = cli_runner.invoke(cli, ["up"])

        assert result.exit_code == 1
        assert "DATABASE_URL is required" in result.output


@pytest.mark.unit
class TestDispatch:
    @pytest.mark.parametrize(
        "args, expected",
        [
            (["up"], ("up",)),
            (["down"], ("down", 1)),
            (["down", "--steps=3"], ("down", 3)),
            (["down", "--steps", "0"], ("down", 0)),
            (["redo"], ("redo",)),
        ],
    )
    def test_actions_reach_the_runner(self, cli_runner, monkeypatch, with_database, args, expected):
        calls = []
        monkeypatch.setattr(migration_runner, "up", lambda url: calls.append(("up",)))
        monkeypatch.setattr(
            migration_runner, "down", lambda url, steps: calls.append(("down", steps))
        )
        monkeypatch.setattr(migration_runner, "redo", lambda url: calls.append(("redo",)))

        result = cli_runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert calls == [expected]

    def test_runner_failure_exits_non_zero(self, cli_runner, monkeypatch, with_database):
        def _boom(url):
            raise MigrationExecutionError("execute migration: syntax error", action="up")

        monkeypatch.setattr(migration_runner, "up", _boom)

        result = cli_runner.invoke(cli, ["up"])

        assert result.exit_code == 1
        assert "migrations up failed: execute migration: syntax error" in result.output


@pytest.mark.integration
class TestAgainstSqlite:
    def test_up_then_status(self, cli_runner, with_database):
        assert cli_runner.invoke(cli, ["up"]).exit_code == 0

        result = cli_runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "applied  0001  create users table" in result.output
        assert "applied  0002  create refresh_tokens table" in result.output

    def test_down_with_zero_steps_rolls_back_one(self, cli_runner, with_database):
        cli_runner.invoke(cli, ["up"])

        assert cli_runner.invoke(cli, ["down", "--steps=0"]).exit_code == 0

        result = cli_runner.invoke(cli, ["status"])
        assert "applied  0001" in result.output
        assert "pending  0002" in result.output

    def test_nothing_to_roll_back_is_success(self, cli_runner, with_database):
        assert cli_runner.invoke(cli, ["down"]).exit_code == 0
        assert cli_runner.invoke(cli, ["redo"]).exit_code == 0

    def test_unreachable_database_exits_non_zero(
        self, cli_runner, monkeypatch, unreachable_database_url
    ):
        monkeypatch.setenv("DATABASE_URL", unreachable_database_url)

        result = cli_runner.invoke(cli, ["status"])

        assert result.exit_code == 1
        assert "migrations status failed: ping database" in result.output
