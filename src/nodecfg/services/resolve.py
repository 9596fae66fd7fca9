"""Resolution entry points — load, validate, flatten.

Both pipelines run end-to-end per call on freshly built sources and
models; nothing is shared between calls except the read-only schema.

- :func:`resolve_daemon_config` raises :class:`ConfigError` subclasses.
- :func:`resolve_pool_config` likewise.
- :class:`ResolveService` wraps both in the ServiceResult contract.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from nodecfg.domain.daemon import validate_daemon_source
from nodecfg.domain.entries import INVALID_PUBKEY, DaemonEntry, PoolEntry
from nodecfg.domain.errors import ConfigError
from nodecfg.domain.pool_models import validate_pool_config
from nodecfg.domain.schema import DAEMON_SCHEMA, SchemaRegistry
from nodecfg.domain.types import DAEMON_NETWORK_SCOPES
from nodecfg.infrastructure.daemon_source import read_daemon_source
from nodecfg.infrastructure.pool_source import (
    DEFAULT_ENV_PREFIX,
    PoolSettingsLoader,
    load_pool_sources,
)
from nodecfg.services.flatten import flatten_daemon, flatten_pool
from nodecfg.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def resolve_daemon_config(
    path: Path | str,
    *,
    scopes: Sequence[str] = DAEMON_NETWORK_SCOPES,
    registry: SchemaRegistry = DAEMON_SCHEMA,
) -> list[DaemonEntry]:
    """Resolve a bitcoin.conf into one entry per known or found key.

    A missing file yields every schema key at its default, disabled.
    """
    path = Path(path)
    source = read_daemon_source(path)
    validated = validate_daemon_source(source, registry=registry, scopes=scopes)
    entries = flatten_daemon(validated)
    logger.debug(
        "Resolved daemon config %s: %d entries, %d explicit, %d unknown",
        path,
        len(entries),
        len(validated.explicit),
        len(validated.unknown),
    )
    return entries


def resolve_pool_config(
    path: Path | str,
    env: Mapping[str, str] | None = None,
    *,
    prefix: str = DEFAULT_ENV_PREFIX,
) -> list[PoolEntry]:
    """Resolve a p2pool TOML file plus environment overrides.

    Args:
        path: The selected config file. A missing file is read as empty.
        env: Environment to read overrides from. Defaults to a snapshot
            of ``os.environ``; the mapping is never modified.
        prefix: Environment variable prefix, without the trailing ``_``.
    """
    path = Path(path)
    env = dict(os.environ) if env is None else env
    sources = load_pool_sources(path, env, prefix=prefix)
    raw = PoolSettingsLoader.from_sources(sources)
    validated = validate_pool_config(raw, path=sources.path)
    entries = flatten_pool(
        validated,
        sections_present=sources.sections_present,
        env_fields=sources.env_fields,
    )
    logger.debug(
        "Resolved pool config %s: %d entries, sections=%s",
        path,
        len(entries),
        sorted(sources.sections_present),
    )
    return entries


class ResolveService:
    """Runs the resolution pipelines and reports through ServiceResult."""

    def __init__(
        self,
        *,
        daemon_scopes: Sequence[str] = DAEMON_NETWORK_SCOPES,
        pool_env_prefix: str = DEFAULT_ENV_PREFIX,
    ) -> None:
        self._daemon_scopes = tuple(daemon_scopes)
        self._pool_env_prefix = pool_env_prefix

    def resolve_daemon(self, path: Path | str) -> ServiceResult:
        op = "resolve_daemon"
        try:
            entries = resolve_daemon_config(path, scopes=self._daemon_scopes)
        except ConfigError as exc:
            return _error(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "count": len(entries),
                "enabled_count": sum(1 for e in entries if e.enabled),
                "entries": [e.model_dump() for e in entries],
            },
        )

    def resolve_pool(
        self, path: Path | str, env: Mapping[str, str] | None = None
    ) -> ServiceResult:
        op = "resolve_pool"
        try:
            entries = resolve_pool_config(path, env, prefix=self._pool_env_prefix)
        except ConfigError as exc:
            return _error(op, exc)
        warnings = [
            f"{e.section}.{e.key} is not a valid public key"
            for e in entries
            if e.value == INVALID_PUBKEY
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "count": len(entries),
                "explicit_count": sum(1 for e in entries if not e.is_default),
                "entries": [e.model_dump() for e in entries],
            },
            warnings=warnings,
        )


def _error(op: str, exc: ConfigError) -> ServiceResult:
    logger.debug("%s failed: %s", op, exc.code, exc_info=True)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail()),
    )
