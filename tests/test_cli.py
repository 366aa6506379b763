"""Tests for the datarules CLI."""

import json
import textwrap

import pytest
from click.testing import CliRunner

from datarules.cli.main import cli

RULES_YAML = textwrap.dedent(
    """
    enums:
      Colors: [Red, Green, Blue]

    ruleSets:
      signup:
        - firstname,string,required,,1,20,title
        - age,integer,optional,,13,120
        - color,enum,optional,Red,Colors
    """
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(RULES_YAML)
    return path


class TestCheck:
    def test_valid_record(self, runner, rules_file, tmp_path):
        record = tmp_path / "record.json"
        record.write_text(json.dumps({"firstname": "sherlock", "age": "42", "color": "green"}))

        result = runner.invoke(cli, ["check", str(rules_file), "signup", str(record)])

        assert result.exit_code == 0
        assert "Record is valid" in result.output
        assert '"firstname": "Sherlock"' in result.output
        assert '"age": 42' in result.output
        assert '"color": "Green"' in result.output

    def test_invalid_record(self, runner, rules_file):
        result = runner.invoke(
            cli,
            ["check", str(rules_file), "signup", "-"],
            input=json.dumps({"age": "7", "color": "purple"}),
        )

        assert result.exit_code == 1
        assert "firstname is required" in result.output
        assert "age cannot be less than 13" in result.output
        assert "color is not a valid Colors" in result.output
        assert "3 error(s) found" in result.output

    def test_yaml_record_from_stdin(self, runner, rules_file):
        result = runner.invoke(
            cli,
            ["check", "--quiet", str(rules_file), "signup", "-"],
            input="firstname: ann\n",
        )
        assert result.exit_code == 0
        assert "Record is valid" in result.output
        assert "firstname" not in result.output

    def test_unknown_title(self, runner, rules_file):
        result = runner.invoke(cli, ["check", str(rules_file), "missing", "-"], input="{}")
        assert result.exit_code == 2
        assert "rules not defined" in result.output

    def test_record_must_be_an_object(self, runner, rules_file):
        result = runner.invoke(cli, ["check", str(rules_file), "signup", "-"], input="[1, 2]")
        assert result.exit_code == 2
        assert "record must be an object" in result.output

    def test_malformed_rules_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("ruleSets:\n  signup:\n    - email,email,maybe\n")
        result = runner.invoke(cli, ["check", str(path), "signup", "-"], input="{}")
        assert result.exit_code == 2
        assert "[signup]" in result.output


class TestRulesAndTypes:
    def test_rules_lists_sets(self, runner, rules_file):
        result = runner.invoke(cli, ["rules", str(rules_file)])
        assert result.exit_code == 0
        assert "Colors: Red, Green, Blue" in result.output
        assert "signup (3 fields)" in result.output
        assert "firstname: string, required" in result.output
        assert "age: integer, optional" in result.output

    def test_types(self, runner):
        result = runner.invoke(cli, ["types"])
        assert result.exit_code == 0
        assert "authRole (auth_role)" in result.output
        assert "time (time)" in result.output


class TestCLIEntryPoint:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "datarules" in result.output
        for command in ("check", "rules", "types"):
            assert command in result.output
