"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — the bare names DOMAINS, IP4_DOMAINS, IP6_DOMAINS,
                    IP6_PREFIX_LEN, PROXIED (no prefix)
  3. TOML file    — ``ddnsctl.toml`` discovered via walk-up
  4. Code defaults

Domain lists and expressions stay raw strings here.  They are parsed by
the services so that every diagnostic names the variable it came from.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ddnsctl.config.discovery import find_config


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``ddnsctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DdnsSettings(BaseSettings):
    """Unified settings for the ddnsctl CLI.

    Attributes:
        domains: Raw DOMAINS list, applied to both IPv4 and IPv6.
        ip4_domains: Raw IP4_DOMAINS list.
        ip6_domains: Raw IP6_DOMAINS list; entries may carry ``[hostid]``.
        ip6_prefix_len: Length of the delegated IPv6 prefix that host
            IDs are combined with.
        proxied: Raw PROXIED boolean expression.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "",
    }

    config_path: Path | None = None

    # --- Raw configuration values ---
    domains: str = ""
    ip4_domains: str = ""
    ip6_domains: str = ""
    ip6_prefix_len: int = Field(default=64, ge=0, le=128)
    proxied: str = "false"

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> DdnsSettings:
        """Construct settings from CLI invocation.

        Discovers ``ddnsctl.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
