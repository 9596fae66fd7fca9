"""Flattener — validated models into ordered, display-ready entries.

The pool layout below is a declarative table: one row per field with its
key, how to render it, and how to tell whether it still holds its
default. The table is also the authoritative output order.

A pool field is reported as default only when its value equals the
intrinsic default, its section was not written in the file, and no
environment variable overrode it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from nodecfg.domain.addresses import is_valid_pubkey
from nodecfg.domain.daemon import ValidatedDaemonConfig
from nodecfg.domain.entries import INVALID_PUBKEY, DaemonEntry, PoolEntry, redact
from nodecfg.domain.pool_models import (
    DEFAULT_API_HOSTNAME,
    DEFAULT_DIFFICULTY_MULTIPLIER,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MINIMUM_DIFFICULTY,
    DEFAULT_NETWORK,
    DEFAULT_RPC_URL,
    DEFAULT_RPC_USERNAME,
    DEFAULT_START_DIFFICULTY,
    DEFAULT_STATS_DIR,
    DEFAULT_STORE_PATH,
    DEFAULT_STRATUM_HOSTNAME,
    DEFAULT_STRATUM_PORT,
    DEFAULT_VERSION_MASK,
    DEFAULT_ZMQPUBHASHBLOCK,
    ValidatedPoolConfig,
)

Render = Callable[[Any], str | None]
IsDefault = Callable[[Any], bool]


@dataclass(frozen=True)
class FieldSpec:
    """One output row: key, renderer, and default predicate.

    ``default=None`` means the field is never reported as default.
    A renderer returning None omits the row.
    """

    key: str
    render: Render
    default: IsDefault | None = None


@dataclass(frozen=True)
class SectionSpec:
    name: str
    select: Callable[[ValidatedPoolConfig], Any]
    fields: tuple[FieldSpec, ...]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_basis_points(value: int) -> str:
    """``100`` -> ``"100 bp (1%)"``, ``150`` -> ``"150 bp (1.50%)"``."""
    pct = value / 100
    if pct.is_integer():
        return f"{value} bp ({pct:.0f}%)"
    return f"{value} bp ({pct:.2f}%)"


def format_version_mask(value: int) -> str:
    return f"{value:08x}"


def _text(attr: str) -> Render:
    return lambda m: str(getattr(m, attr))


def _address(attr: str) -> Render:
    def render(m: Any) -> str | None:
        parsed = getattr(m, f"{attr}_parsed")
        return None if parsed is None else parsed.canonical

    return render


def _optional(attr: str, fmt: Callable[[Any], str] = str) -> Render:
    def render(m: Any) -> str | None:
        value = getattr(m, attr)
        return None if value is None else fmt(value)

    return render


def _equals(attr: str, default: Any) -> IsDefault:
    return lambda m: getattr(m, attr) == default


def _field(attr: str, default: Any) -> FieldSpec:
    """A plain field rendered with ``str()`` and compared to *default*."""
    return FieldSpec(attr, _text(attr), _equals(attr, default))


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def _pubkey(m: Any) -> str:
    # Unlike every other rule, a bad pubkey degrades to a sentinel
    # instead of failing the load.
    return m.pubkey if is_valid_pubkey(m.pubkey) else INVALID_PUBKEY


# ---------------------------------------------------------------------------
# Pool layout
# ---------------------------------------------------------------------------

POOL_LAYOUT: tuple[SectionSpec, ...] = (
    SectionSpec(
        "network",
        lambda c: c.network,
        (
            _field("listen_address", DEFAULT_LISTEN_ADDRESS),
            FieldSpec("dial_peers", lambda m: ", ".join(m.dial_peers), lambda m: not m.dial_peers),
            _field("max_pending_incoming", 10),
            _field("max_pending_outgoing", 10),
            _field("max_established_incoming", 50),
            _field("max_established_outgoing", 50),
            _field("max_established_per_peer", 1),
            _field("max_workbase_per_second", 10),
            _field("max_userworkbase_per_second", 10),
            _field("max_miningshare_per_second", 100),
            _field("max_inventory_per_second", 100),
            _field("max_transaction_per_second", 100),
            _field("rate_limit_window_secs", 1),
            _field("max_requests_per_second", 1),
            _field("peer_inactivity_timeout_secs", 60),
            _field("dial_timeout_secs", 30),
        ),
    ),
    SectionSpec(
        "store",
        lambda c: c.store,
        (
            _field("path", DEFAULT_STORE_PATH),
            _field("background_task_frequency_hours", 1),
            _field("pplns_ttl_days", 7),
        ),
    ),
    SectionSpec(
        "stratum",
        lambda c: c.stratum,
        (
            _field("hostname", DEFAULT_STRATUM_HOSTNAME),
            _field("port", DEFAULT_STRATUM_PORT),
            _field("start_difficulty", DEFAULT_START_DIFFICULTY),
            _field("minimum_difficulty", DEFAULT_MINIMUM_DIFFICULTY),
            FieldSpec("maximum_difficulty", _optional("maximum_difficulty")),
            FieldSpec("solo_address", _address("solo_address")),
            _field("zmqpubhashblock", DEFAULT_ZMQPUBHASHBLOCK),
            FieldSpec("bootstrap_address", _address("bootstrap_address")),
            FieldSpec("donation_address", _address("donation_address")),
            FieldSpec("donation", _optional("donation", format_basis_points)),
            FieldSpec("fee_address", _address("fee_address")),
            FieldSpec("fee", _optional("fee", format_basis_points)),
            FieldSpec("network", lambda m: m.network.value, _equals("network", DEFAULT_NETWORK)),
            FieldSpec(
                "version_mask",
                lambda m: format_version_mask(m.version_mask),
                _equals("version_mask", DEFAULT_VERSION_MASK),
            ),
            FieldSpec(
                "difficulty_multiplier",
                lambda m: f"{m.difficulty_multiplier:.1f}",
                _equals("difficulty_multiplier", DEFAULT_DIFFICULTY_MULTIPLIER),
            ),
            FieldSpec("ignore_difficulty", _optional("ignore_difficulty", _bool_text)),
            FieldSpec("pool_signature", _optional("pool_signature")),
        ),
    ),
    SectionSpec("miner", lambda c: c.miner, (FieldSpec("pubkey", _pubkey),)),
    SectionSpec(
        "bitcoinrpc",
        lambda c: c.bitcoinrpc,
        (
            _field("url", DEFAULT_RPC_URL),
            _field("username", DEFAULT_RPC_USERNAME),
            FieldSpec("password", lambda m: redact(m.password)),
        ),
    ),
    SectionSpec(
        "logging",
        lambda c: c.logging,
        (
            FieldSpec("file", _optional("file")),
            _field("level", DEFAULT_LOG_LEVEL),
            _field("stats_dir", DEFAULT_STATS_DIR),
        ),
    ),
    SectionSpec(
        "api",
        lambda c: c.api,
        (
            _field("hostname", DEFAULT_API_HOSTNAME),
            FieldSpec("port", _text("port")),
            FieldSpec("auth_user", _optional("auth_user")),
            FieldSpec("auth_token", _optional("auth_token", redact)),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Flatteners
# ---------------------------------------------------------------------------


def flatten_pool(
    config: ValidatedPoolConfig,
    *,
    sections_present: frozenset[str] = frozenset(),
    env_fields: frozenset[tuple[str, str]] = frozenset(),
) -> list[PoolEntry]:
    """Walk *config* through :data:`POOL_LAYOUT`.

    Args:
        config: A validated configuration. Anything else is a programming
            error and raises TypeError.
        sections_present: Sections written as tables in the file.
        env_fields: ``(section, key)`` pairs set by environment overrides.
    """
    if not isinstance(config, ValidatedPoolConfig):
        msg = (
            f"flatten_pool requires a ValidatedPoolConfig, got {type(config).__name__}; "
            "run validate_pool_config first"
        )
        raise TypeError(msg)

    entries: list[PoolEntry] = []
    for section in POOL_LAYOUT:
        model = section.select(config)
        if model is None:
            continue
        explicit_section = section.name in sections_present
        for spec in section.fields:
            value = spec.render(model)
            if value is None:
                continue
            is_default = (
                spec.default is not None
                and not explicit_section
                and (section.name, spec.key) not in env_fields
                and spec.default(model)
            )
            entries.append(
                PoolEntry(section=section.name, key=spec.key, value=value, is_default=is_default)
            )
    return entries


def flatten_daemon(config: ValidatedDaemonConfig) -> list[DaemonEntry]:
    """Schema keys in declaration order, then unknown keys in first-seen order."""
    if not isinstance(config, ValidatedDaemonConfig):
        msg = f"flatten_daemon requires a ValidatedDaemonConfig, got {type(config).__name__}"
        raise TypeError(msg)

    entries: list[DaemonEntry] = []
    for schema in config.registry:
        enabled = schema.key in config.explicit
        value = config.explicit[schema.key] if enabled else schema.default
        if schema.secret:
            value = redact(value)
        entries.append(DaemonEntry(key=schema.key, value=value, enabled=enabled))

    for key, value in config.unknown.items():
        entries.append(DaemonEntry(key=key, value=value, enabled=True))
    return entries
