"""Pydantic models for nodecfg.toml sections, with code-baked defaults.

Sparse TOML contract: defaults baked here, nodecfg.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from nodecfg.domain.types import DAEMON_NETWORK_SCOPES


class ResolveConfig(BaseModel):
    """[resolve] section."""

    model_config = {"frozen": True}

    daemon_scopes: tuple[str, ...] = DAEMON_NETWORK_SCOPES
    pool_env_prefix: str = "P2POOL"

    @field_validator("daemon_scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(s.strip() for s in value.split(",") if s.strip())
        return value

    @field_validator("daemon_scopes")
    @classmethod
    def _known_scopes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = [s for s in value if s not in DAEMON_NETWORK_SCOPES]
        if unknown:
            msg = f"Unknown daemon scopes {unknown}; expected a subset of {DAEMON_NETWORK_SCOPES}"
            raise ValueError(msg)
        return value

    @field_validator("pool_env_prefix")
    @classmethod
    def _bare_prefix(cls, value: str) -> str:
        return value.rstrip("_")
