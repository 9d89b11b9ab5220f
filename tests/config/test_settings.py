"""Tests for DdnsSettings: env vars, TOML source and defaults."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ddnsctl.config.settings import DdnsSettings


class TestDdnsSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = DdnsSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.domains == ""
        assert settings.ip4_domains == ""
        assert settings.ip6_domains == ""
        assert settings.ip6_prefix_len == 64
        assert settings.proxied == "false"
        assert settings.json_output is False
        assert settings.quiet is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DdnsSettings.from_cli(start=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestEnvSource:
    def test_bare_names(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOMAINS", "a.org, b.org")
        monkeypatch.setenv("IP6_DOMAINS", "c.org[::1]")
        monkeypatch.setenv("IP6_PREFIX_LEN", "56")
        monkeypatch.setenv("PROXIED", "sub(a.org)")
        settings = DdnsSettings.from_cli(start=tmp_path)
        assert settings.domains == "a.org, b.org"
        assert settings.ip6_domains == "c.org[::1]"
        assert settings.ip6_prefix_len == 56
        assert settings.proxied == "sub(a.org)"

    @pytest.mark.parametrize("value", ["-1", "129", "sixty-four"])
    def test_invalid_prefix_len(
        self, value: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("IP6_PREFIX_LEN", value)
        with pytest.raises(ValidationError):
            DdnsSettings.from_cli(start=tmp_path)


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "ddnsctl.toml"
        toml.write_text('domains = "a.org"\nip6_prefix_len = 48\n')
        settings = DdnsSettings.from_cli(start=tmp_path)
        assert settings.domains == "a.org"
        assert settings.ip6_prefix_len == 48
        assert settings.proxied == "false"  # default preserved
        assert settings.config_path == toml.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "ddnsctl.toml").write_text('ip4_domains = "four.org"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = DdnsSettings.from_cli(start=nested)
        assert settings.ip4_domains == "four.org"

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ddnsctl.toml").write_text('domains = "toml.org"\nproxied = "true"\n')
        monkeypatch.setenv("DOMAINS", "env.org")
        settings = DdnsSettings.from_cli(start=tmp_path)
        assert settings.domains == "env.org"
        assert settings.proxied == "true"

    def test_cli_flags_beat_everything(self, tmp_path: Path) -> None:
        (tmp_path / "ddnsctl.toml").write_text("quiet = false\n")
        settings = DdnsSettings.from_cli(start=tmp_path, quiet=True)
        assert settings.quiet is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('domains = "custom.org"\n')
        settings = DdnsSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.domains == "custom.org"
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        settings = DdnsSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None

    def test_env_var_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "elsewhere.toml"
        custom.write_text('ip6_domains = "six.org"\n')
        monkeypatch.setenv("DDNSCTL_CONFIG", str(custom))
        settings = DdnsSettings.from_cli(start=tmp_path)
        assert settings.ip6_domains == "six.org"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        import click

        (tmp_path / "ddnsctl.toml").write_text("domains = [unclosed\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            DdnsSettings.from_cli(start=tmp_path)
