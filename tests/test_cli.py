"""Tests for the root ddnsctl CLI and its commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ddnsctl import __version__
from ddnsctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "ddnsctl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("name", ["domains", "match", "address"])
def test_command_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0


# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["domains", "--examples"], ["ddnsctl domains --proxied"]),
    (["match", "--examples"], ["ddnsctl match 'sub(example.org)'"]),
    (["address", "--examples"], ["ddnsctl address aa:bb:cc:dd:ee:ff"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


class TestDomainsCommand:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["domains"], env={"DOMAINS": "a.org", "IP6_DOMAINS": "b.org[::1]"}
        )
        assert result.exit_code == 0
        assert "a.org" in result.output
        assert "::1" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "domains", "--proxied"],
            env={"DOMAINS": "a.org", "IP4_DOMAINS": "b.org", "PROXIED": "is(a.org)"},
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["ipv4"] == ["a.org", "b.org"]
        assert data["data"]["ipv6"] == ["a.org"]
        assert data["data"]["proxied"] == {"a.org": True, "b.org": False}

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "domains"], env={"DOMAINS": "b.org,a.org"})
        assert result.exit_code == 0
        assert result.output.strip() == "a.org\nb.org"

    def test_warning_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains"], env={"DOMAINS": "a.org b.org"})
        assert result.exit_code == 0
        assert "WARNING: DOMAINS ('a.org b.org') is missing a comma" in result.output

    def test_warning_printed_once(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains"], env={"DOMAINS": "a.org b.org"})
        assert result.output.count("is missing a comma") == 1

    def test_warning_kept_on_failure(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["domains", "--proxied"],
            env={"DOMAINS": "a.org b.org", "PROXIED": "true &"},
        )
        assert result.exit_code == 1
        assert result.output.count("is missing a comma") == 1
        assert "SINGLE_AND" in result.output

    def test_invalid_value_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains"], env={"DOMAINS": "*"})
        assert result.exit_code == 1
        assert "NOT_FQDN" in result.output

    def test_reads_toml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "ddnsctl.toml").write_text('domains = "toml.org"\n')
        result = cli_runner.invoke(cli, ["-q", "domains"])
        assert result.exit_code == 0
        assert result.output.strip() == "toml.org"

    def test_config_option(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        custom = tmp_path / "other.toml"
        custom.write_text('ip6_domains = "six.org"\n')
        result = cli_runner.invoke(cli, ["-q", "-c", str(custom), "domains"])
        assert result.output.strip() == "six.org"

    def test_invalid_prefix_len(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains"], env={"IP6_PREFIX_LEN": "200"})
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestMatchCommand:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "match", "sub(example.org)", "www.example.org", "example.com"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["matches"] == {
            "www.example.org": True,
            "example.com": False,
        }

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "!is(a.org)", "a.org"])
        assert result.exit_code == 0
        assert "a.org" in result.output
        assert "false" in result.output

    def test_requires_domain(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "true"])
        assert result.exit_code == 2

    def test_bad_expression(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "true |", "a.org"])
        assert result.exit_code == 1
        assert "SINGLE_OR" in result.output


class TestAddressCommand:
    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "address", "aa:bb:cc:dd:ee:ff", "1122::/24"])
        assert result.exit_code == 0
        assert result.output.strip() == "1122::a8bb:ccff:fedd:eeff"

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["address", "::1:2", "2001:db8:1:2::/64"])
        assert result.exit_code == 0
        assert "address: 2001:db8:1:2::1:2" in result.output

    def test_subnet_too_small(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["address", "aa:bb:cc:dd:ee:ff", "1122::/96"])
        assert result.exit_code == 1
        assert "INVALID_HOST_ID" in result.output
