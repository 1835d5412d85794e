"""Tests for the describe command."""

import json

from click.testing import CliRunner

from propbind.cli import cli


class TestDescribeCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["describe", "lakehouse"])
        assert result.exit_code == 0
        assert "lakehouse.table-type" in result.stdout
        assert "ICEBERG" in result.stdout

    def test_verbose_lists_constraints(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "describe", "mysql-event-listener"])
        assert result.exit_code == 0
        assert "is_valid_url" in result.stdout

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "describe", "mysql-event-listener"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        keys = [p["key"] for p in data["data"]["properties"]]
        assert keys == [
            "mysql-event-listener.db.url",
            "mysql-event-listener.db.user",
            "mysql-event-listener.db.password",
            "mysql-event-listener.db.prune-columns",
        ]
        url = data["data"]["properties"][0]
        assert url["sensitive"] is True
        assert url["description"] == "JDBC URL of the MySQL database receiving query events"

    def test_unknown_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "describe", "nope"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "UNKNOWN_TYPE"
