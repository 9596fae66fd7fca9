"""bitcoin.conf resolution — scope precedence and per-key kind checks."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from nodecfg.domain.coercion import coerce_display, coerce_to_kind
from nodecfg.domain.errors import ConfigValidationError
from nodecfg.domain.raw import RawSource
from nodecfg.domain.schema import DAEMON_SCHEMA, SchemaRegistry
from nodecfg.domain.types import DAEMON_NETWORK_SCOPES


@dataclass(frozen=True)
class ValidatedDaemonConfig:
    """Resolved daemon values, every schema value already kind-checked.

    Attributes:
        explicit: Schema keys found in the source, mapped to their
            normalized value. Absent keys fall back to the schema default.
        unknown: Keys no schema entry knows, in first-seen order, with a
            best-effort display value.
    """

    registry: SchemaRegistry
    explicit: dict[str, str] = field(default_factory=dict)
    unknown: dict[str, str] = field(default_factory=dict)


def validate_daemon_source(
    source: RawSource,
    *,
    registry: SchemaRegistry = DAEMON_SCHEMA,
    scopes: Sequence[str] = DAEMON_NETWORK_SCOPES,
) -> ValidatedDaemonConfig:
    """Pick one value per key and check it against its declared kind.

    The global scope is tried first, then *scopes* in the given order.

    Raises:
        ConfigValidationError: A schema value does not parse as its kind.
    """
    explicit: dict[str, str] = {}
    for entry in registry:
        found = source.lookup(entry.key, scopes)
        if found is None:
            continue
        scope, raw = found
        try:
            explicit[entry.key] = coerce_to_kind(raw, entry.kind)
        except ValueError as exc:
            where = f" in [{scope}]" if scope else ""
            msg = f"Invalid value for {entry.key}{where}: expected {entry.kind}, {exc}"
            raise ConfigValidationError(
                msg, path=source.origin or None, field=entry.key
            ) from exc

    unknown: dict[str, str] = {}
    for key in source.keys():
        if key in registry:
            continue
        found = source.lookup(key, scopes)
        if found is not None:
            unknown[key] = coerce_display(found[1])

    return ValidatedDaemonConfig(registry=registry, explicit=explicit, unknown=unknown)
