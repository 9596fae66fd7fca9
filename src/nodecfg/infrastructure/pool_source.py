"""p2pool.toml + ``P2POOL_*`` environment loading.

Priority chain (highest to lowest):
  1. Env vars     — ``P2POOL_<SECTION>_<FIELD>``
  2. TOML file    — the selected p2pool config
  3. Code defaults — baked into the section models

Uses Pydantic Settings v2 with two custom sources. The environment is an
injected mapping rather than ``os.environ`` read ad hoc, so a load is a
pure function of (file contents, environment).
"""

from __future__ import annotations

import logging
import re
import threading
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from nodecfg.config.sources import MappingSource
from nodecfg.domain.errors import DeserializationError, DomainMismatchError, SourceFormatError
from nodecfg.domain.pool_models import (
    ApiSettings,
    BitcoinRpcSettings,
    LoggingSettings,
    MinerSettings,
    NetworkSettings,
    PoolConfig,
    StoreSettings,
    StratumSettings,
)
from nodecfg.domain.types import POOL_SECTIONS

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "P2POOL"

_SECTION_HEADER_RE = re.compile(
    r"^\s*\[\s*(" + "|".join(POOL_SECTIONS) + r")\s*\]\s*(#.*)?$",
    re.MULTILINE,
)


@dataclass(frozen=True)
class PoolSources:
    """Everything read for one pool load: file text, tables and overrides."""

    path: Path
    text: str = ""
    tables: dict[str, Any] = field(default_factory=dict)
    env_overrides: dict[str, dict[str, str]] = field(default_factory=dict)

    @property
    def sections_present(self) -> frozenset[str]:
        """Sections written as tables in the file itself."""
        return frozenset(
            name for name in POOL_SECTIONS if isinstance(self.tables.get(name), dict)
        )

    @property
    def env_fields(self) -> frozenset[tuple[str, str]]:
        """``(section, field)`` pairs set by an environment override."""
        return frozenset(
            (section, key) for section, values in self.env_overrides.items() for key in values
        )


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


def has_env_overrides(env: Mapping[str, str], prefix: str = DEFAULT_ENV_PREFIX) -> bool:
    """True if any variable lives under ``<prefix>_``."""
    marker = f"{prefix}_"
    return any(name.startswith(marker) for name in env)


def collect_env_overrides(
    env: Mapping[str, str], prefix: str = DEFAULT_ENV_PREFIX
) -> dict[str, dict[str, str]]:
    """Map ``<prefix>_<SECTION>_<FIELD>`` variables onto nested fields.

    ``P2POOL_STRATUM_START_DIFFICULTY=5`` becomes
    ``{"stratum": {"start_difficulty": "5"}}``. Variables naming an
    unknown section are ignored.
    """
    marker = f"{prefix}_"
    overrides: dict[str, dict[str, str]] = {}
    for name in sorted(env):
        if not name.startswith(marker):
            continue
        section, _, key = name[len(marker) :].lower().partition("_")
        if section not in POOL_SECTIONS or not key:
            logger.debug("Ignoring environment variable %s", name)
            continue
        overrides.setdefault(section, {})[key] = env[name]
    return overrides


# ---------------------------------------------------------------------------
# Settings sources
# ---------------------------------------------------------------------------


class TomlTableSource(MappingSource):
    """Tables parsed from the p2pool TOML file."""


class EnvOverrideSource(MappingSource):
    """Nested overrides collected from the injected environment."""


# Thread-local storage for per-load sources during construction.
_tls = threading.local()


class PoolSettingsLoader(BaseSettings):
    """Merges env overrides over TOML tables over code defaults.

    Field coercion is driven by the declared type of each target field:
    ``"1"`` becomes ``True`` for a bool field and ``1`` for an int field.
    """

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    store: StoreSettings | None = None
    stratum: StratumSettings | None = None
    miner: MinerSettings | None = None
    bitcoinrpc: BitcoinRpcSettings | None = None
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Replace process env and dotenv with the per-load sources."""
        sources: PoolSources | None = getattr(_tls, "sources", None)
        if sources is None:
            return (init_settings,)
        return (
            init_settings,
            EnvOverrideSource(settings_cls, sources.env_overrides),
            TomlTableSource(settings_cls, sources.tables),
        )

    @classmethod
    def from_sources(cls, sources: PoolSources) -> PoolConfig:
        """Deserialize *sources* into an unvalidated :class:`PoolConfig`.

        Raises:
            DeserializationError: If a field does not match its declared shape.
        """
        _tls.sources = sources
        try:
            loaded = cls()
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(part) for part in first.get("loc", ()))
            msg = f"Failed to deserialize config: {exc}\nFile: {sources.path}"
            raise DeserializationError(msg, path=sources.path, field=loc or None) from exc
        finally:
            _tls.sources = None
        return PoolConfig.model_validate(loaded, from_attributes=True)


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def looks_like_pool_config(text: str, env: Mapping[str, str], prefix: str) -> bool:
    """True if *text* has a known table header or *env* has an override."""
    return has_env_overrides(env, prefix) or _SECTION_HEADER_RE.search(text) is not None


def load_pool_sources(
    path: Path,
    env: Mapping[str, str],
    *,
    prefix: str = DEFAULT_ENV_PREFIX,
) -> PoolSources:
    """Read *path* and *env* into :class:`PoolSources`.

    A missing file reads as empty text so environment overrides still apply.

    Raises:
        DomainMismatchError: No known section header and no override.
        SourceFormatError: The file exists but is not valid TOML.
    """
    text = ""
    if path.exists():
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read {path}: {exc}"
            raise SourceFormatError(msg, path=path) from exc

    if not looks_like_pool_config(text, env, prefix):
        msg = f"Invalid P2Pool config: not a p2pool configuration ({path})"
        raise DomainMismatchError(msg, path=path)

    try:
        tables = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise SourceFormatError(msg, path=path) from exc

    overrides = collect_env_overrides(env, prefix)
    logger.debug(
        "Loaded pool sources from %s: tables=%s overrides=%s",
        path,
        sorted(tables),
        sorted(overrides),
    )
    return PoolSources(path=path, text=text, tables=tables, env_overrides=overrides)
