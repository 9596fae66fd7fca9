"""The CLI's own settings, kept apart from anything being inspected.

Priority chain (highest to lowest):
  1. CLI flags passed by Click (only the ones actually set)
  2. ``NODECFG_*`` env vars, ``__`` for nested fields
  3. The nodecfg.toml chosen by :func:`nodecfg.config.discovery.find_config`
  4. Defaults on the models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from nodecfg.config.discovery import find_config
from nodecfg.config.models import ResolveConfig
from nodecfg.config.sources import MappingSource


def read_settings_file(path: Path | None) -> dict[str, Any]:
    """Parse *path* as TOML; no path means no file-level settings.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    if path is None:
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(MappingSource):
    """Tables from the selected nodecfg.toml."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls, read_settings_file(toml_path))


# Settings file chosen for the construction in progress on this thread.
_tls = threading.local()


class NodecfgSettings(BaseSettings):
    """Settings for the nodecfg CLI itself.

    These never leak into resolution results: the p2pool ``P2POOL_*``
    environment is read separately by the pool loader.

    Attributes:
        config_path: The nodecfg.toml in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NODECFG_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    resolve: ResolveConfig = Field(default_factory=ResolveConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Flags, then env, then the settings file."""
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
    ) -> NodecfgSettings:
        """Build settings for one CLI invocation.

        *config_path* is the raw ``--config`` value. CLI flags in
        *cli_flags* outrank every other layer.

        Raises:
            click.ClickException: If the named settings file is missing
                or is not valid TOML.
        """
        try:
            toml_path = find_config(start, explicit=config_path)
        except FileNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
