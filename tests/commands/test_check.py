"""Tests for the check command."""

import json

from click.testing import CliRunner

from propbind.cli import cli

MYSQL_VALID = (
    "mysql-event-listener.db.url=jdbc:mysql://example.net:3306\n"
    "mysql-event-listener.db.user=trino\n"
    "mysql-event-listener.db.password=hunter2\n"
)


class TestCheckCommand:
    def test_valid_file(self, cli_runner: CliRunner, properties_file) -> None:
        path = properties_file(MYSQL_VALID)
        result = cli_runner.invoke(cli, ["check", "mysql-event-listener", str(path)])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "mysql-event-listener.db.user = trino" in result.stdout
        assert "hunter2" not in result.output

    def test_json_output(self, cli_runner: CliRunner, properties_file) -> None:
        path = properties_file(MYSQL_VALID)
        result = cli_runner.invoke(cli, ["--json", "check", "mysql-event-listener", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        props = data["data"]["properties"]
        assert props["mysql-event-listener.db.password"] == "[REDACTED]"
        assert props["mysql-event-listener.db.url"] == "[REDACTED]"
        assert props["mysql-event-listener.db.prune-columns"] == ""

    def test_invalid_url(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "check",
                "mysql-event-listener",
                "--set",
                "mysql-event-listener.db.url=jdbc:postgresql://example.net:5432",
            ],
        )
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "VALIDATION_FAILED"
        (problem,) = payload["error"]["detail"]["problems"]
        assert problem["keys"] == ["mysql-event-listener.db.url"]
        assert "postgresql" not in result.stderr

    def test_human_error_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "lakehouse", "--set", "lakehouse.table-type=orc"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "lakehouse.table-type: Invalid TableType value" in result.stderr

    def test_set_overrides_files(self, cli_runner: CliRunner, properties_file) -> None:
        path = properties_file("lakehouse.table-type=hive\n")
        result = cli_runner.invoke(
            cli,
            ["--json", "check", "lakehouse", str(path), "--set", "lakehouse.table-type=delta"],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["properties"] == {"lakehouse.table-type": "DELTA"}

    def test_unused_property_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "lakehouse", "--set", "lakehouse.extra=1"])
        assert result.exit_code == 0
        assert "WARNING: Unused property lakehouse.extra" in result.stderr

    def test_strict_rejects_unused_property(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--strict", "check", "lakehouse", "--set", "lakehouse.extra=1"]
        )
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "BINDING_FAILED"
        assert payload["error"]["detail"]["problems"][0]["code"] == "unknown_property"

    def test_malformed_set(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "lakehouse", "--set", "no-separator"])
        assert result.exit_code == 2
        assert "expected KEY=VALUE" in result.output

    def test_missing_file(self, cli_runner: CliRunner, tmp_path) -> None:
        result = cli_runner.invoke(cli, ["check", "lakehouse", str(tmp_path / "absent")])
        assert result.exit_code == 2

    def test_non_utf8_file(self, cli_runner: CliRunner, tmp_path) -> None:
        path = tmp_path / "binary.properties"
        path.write_bytes(b"lakehouse.table-type=\xff\xfehunter2\n")
        result = cli_runner.invoke(cli, ["--json", "check", "lakehouse", str(path)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "PROPERTIES_FILE"
        assert "byte offset 21" in payload["error"]["message"]
        assert "hunter2" not in result.output

    def test_malformed_set_does_not_echo_value(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "lakehouse", "--set", "hunter2"])
        assert result.exit_code == 2
        assert "expected KEY=VALUE" in result.output
        assert "hunter2" not in result.output

    def test_malformed_file(self, cli_runner: CliRunner, properties_file) -> None:
        path = properties_file("lakehouse.table-type\n")
        result = cli_runner.invoke(cli, ["--json", "check", "lakehouse", str(path)])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "PROPERTIES_FILE"


class TestExamples:
    def test_every_command_has_examples(self, cli_runner: CliRunner) -> None:
        for command, expected in (
            ("types", "propbind types"),
            ("describe", "propbind describe lakehouse"),
            ("check", "propbind check mysql-event-listener"),
        ):
            result = cli_runner.invoke(cli, [command, "--examples"])
            assert result.exit_code == 0, command
            assert expected in result.output
