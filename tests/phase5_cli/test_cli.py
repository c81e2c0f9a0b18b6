"""
Phase 5 Tests: CLI

Tests for the CLI commands:
- Main CLI group
- check command
- run command
"""

import json

import pytest
from click.testing import CliRunner

from linedissect.cli.main import cli


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


class TestCLIGroup:
    """Tests for main CLI group."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "delimiter-based field extraction" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "Linedissect v" in result.output

    def test_cli_no_command(self, runner):
        result = runner.invoke(cli)
        assert result.exit_code == 0
        assert "Usage:" in result.output


class TestCheckCommand:
    """Tests for check command."""

    def test_valid_pattern(self, runner):
        result = runner.invoke(cli, ["check", "[%{ts}] %{+ts/1} %{msg}"])
        assert result.exit_code == 0
        assert "valid: [%{ts}] %{+ts/1} %{msg}" in result.output
        assert "prefix: '['" in result.output
        assert "append_ordered" in result.output

    def test_invalid_pattern(self, runner):
        result = runner.invoke(cli, ["check", "%{+&timestamp}"])
        assert result.exit_code == 1
        assert (
            "Field cannot prefix with both Append and Indirect Prefix (+&): +&timestamp"
            in result.output
        )

    def test_mixed_patterns_fail(self, runner):
        result = runner.invoke(cli, ["check", "%{a}", "%{&+b}"])
        assert result.exit_code == 1
        assert "valid: %{a}" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["check", "--json", "%{?k}=%{&k}"])
        assert result.exit_code == 0
        data = json_lines(result.output)[0]
        assert data["pattern"] == "%{?k}=%{&k}"
        assert [t["modifier"] for t in data["tokens"]] == ["indirect_key", "indirect_value"]


class TestRunCommand:
    """Tests for run command."""

    def test_run_from_stdin(self, runner):
        result = runner.invoke(
            cli,
            ["--log-level", "ERROR", "run", "--pattern", "%{host} %{?k}=%{&k}", "--convert", "cpu=float"],
            input="web01 cpu=95.5\n\nweb02 cpu=12\n",
        )
        assert result.exit_code == 0
        records = json_lines(result.output)
        assert records == [
            {"message": "web01 cpu=95.5", "host": "web01", "cpu": 95.5},
            {"message": "web02 cpu=12", "host": "web02", "cpu": 12.0},
        ]

    def test_run_tags_failures(self, runner):
        result = runner.invoke(
            cli,
            ["--log-level", "ERROR", "run", "-p", "%{a}|%{b}"],
            input="no pipe here\n",
        )
        assert result.exit_code == 0
        assert json_lines(result.output) == [{"message": "no pipe here", "tags": ["_dissectfailure"]}]

    def test_run_from_file_with_config(self, runner, tmp_path):
        config = tmp_path / "dissect.json"
        config.write_text(
            json.dumps(
                {
                    "mapping": {"line": "[%{ts}] %{code} %{msg}"},
                    "convert_datatype": {"code": "int"},
                    "add_tag": ["dissected"],
                }
            ),
            encoding="utf-8",
        )
        source = tmp_path / "input.log"
        source.write_text("[25/05/16] 00000001 started\n", encoding="utf-8")

        result = runner.invoke(
            cli,
            ["--log-level", "ERROR", "run", "--config", str(config), "--field", "line", str(source)],
        )

        assert result.exit_code == 0
        assert json_lines(result.output) == [
            {
                "line": "[25/05/16] 00000001 started",
                "ts": "25/05/16",
                "code": 1,
                "msg": "started",
                "tags": ["dissected"],
            }
        ]

    def test_run_requires_one_source_of_patterns(self, runner):
        result = runner.invoke(cli, ["run"], input="x\n")
        assert result.exit_code != 0
        assert "exactly one of --pattern or --config" in result.output

    def test_run_invalid_pattern(self, runner):
        result = runner.invoke(cli, ["run", "-p", "%{&+ts}"], input="x\n")
        assert result.exit_code == 2
        assert "Invalid field format in dissect pattern." in result.output

    def test_run_bad_convert(self, runner):
        result = runner.invoke(cli, ["run", "-p", "%{a}", "--convert", "a"], input="x\n")
        assert result.exit_code != 0
        assert "FIELD=TYPE" in result.output

    def test_run_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", "-c", str(tmp_path / "none.json")], input="x\n")
        assert result.exit_code == 2
        assert "Configuration file not found" in result.output
