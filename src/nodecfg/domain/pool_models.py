"""Typed p2pool configuration with code-baked defaults.

Two states, two types:

- :class:`PoolConfig` is what deserialization produces. Its stratum
  section keeps ``network``, ``version_mask`` and every address as the
  raw text the user wrote.
- :class:`ValidatedPoolConfig` is what :func:`validate_pool_config`
  returns once every semantic rule has passed. It carries the parsed
  network, the integer version mask and the decoded addresses.

INVARIANT: only a ValidatedPoolConfig is ever flattened.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from nodecfg.domain.addresses import BitcoinAddress, parse_address_for
from nodecfg.domain.errors import ConfigValidationError
from nodecfg.domain.types import Network

MAX_POOL_SIGNATURE_LENGTH = 16

DEFAULT_LISTEN_ADDRESS = "/ip4/0.0.0.0/tcp/6884"
DEFAULT_STRATUM_HOSTNAME = "0.0.0.0"
DEFAULT_STRATUM_PORT = 3333
DEFAULT_START_DIFFICULTY = 10000
DEFAULT_MINIMUM_DIFFICULTY = 100
DEFAULT_ZMQPUBHASHBLOCK = "tcp://127.0.0.1:28332"
DEFAULT_NETWORK = Network.SIGNET
DEFAULT_VERSION_MASK = 0x1FFFE000
DEFAULT_DIFFICULTY_MULTIPLIER = 1.0
DEFAULT_STORE_PATH = "./store.db"
DEFAULT_RPC_URL = "http://127.0.0.1:38332"
DEFAULT_RPC_USERNAME = "p2pool"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_STATS_DIR = "./logs/stats"
DEFAULT_API_HOSTNAME = "127.0.0.1"

U16 = Annotated[int, Field(ge=0, le=2**16 - 1)]
U32 = Annotated[int, Field(ge=0, le=2**32 - 1)]
U64 = Annotated[int, Field(ge=0, le=2**64 - 1)]

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_I32_MAX = 2**31 - 1


class _Section(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}


# --- p2pool.toml sections ---


class NetworkSettings(_Section):
    """[network] section."""

    listen_address: str = DEFAULT_LISTEN_ADDRESS
    dial_peers: tuple[str, ...] = ()
    max_pending_incoming: U32 = 10
    max_pending_outgoing: U32 = 10
    max_established_incoming: U32 = 50
    max_established_outgoing: U32 = 50
    max_established_per_peer: U32 = 1
    max_workbase_per_second: U32 = 10
    max_userworkbase_per_second: U32 = 10
    max_miningshare_per_second: U32 = 100
    max_inventory_per_second: U32 = 100
    max_transaction_per_second: U32 = 100
    rate_limit_window_secs: U64 = 1
    max_requests_per_second: U64 = 1
    peer_inactivity_timeout_secs: U64 = 60
    dial_timeout_secs: U64 = 30

    @field_validator("dial_peers", mode="before")
    @classmethod
    def _split_peer_list(cls, value: object) -> object:
        # Environment overrides arrive as one comma-separated string.
        if isinstance(value, str):
            return tuple(p.strip() for p in value.split(",") if p.strip())
        return value


class StoreSettings(_Section):
    """[store] section."""

    path: str
    background_task_frequency_hours: U64 = 1
    pplns_ttl_days: U64 = 7


class _StratumFields(_Section):
    hostname: str = DEFAULT_STRATUM_HOSTNAME
    port: U16 = DEFAULT_STRATUM_PORT
    start_difficulty: U64 = DEFAULT_START_DIFFICULTY
    minimum_difficulty: U64 = DEFAULT_MINIMUM_DIFFICULTY
    maximum_difficulty: U64 | None = None
    solo_address: str | None = None
    zmqpubhashblock: str = DEFAULT_ZMQPUBHASHBLOCK
    bootstrap_address: str | None = None
    donation_address: str | None = None
    donation: U16 | None = None
    fee_address: str | None = None
    fee: U16 | None = None
    difficulty_multiplier: float = DEFAULT_DIFFICULTY_MULTIPLIER
    ignore_difficulty: bool | None = None
    pool_signature: str | None = None


class StratumSettings(_StratumFields):
    """[stratum] section, as deserialized (unvalidated)."""

    network: str = DEFAULT_NETWORK.to_core_arg()
    version_mask: str = f"{DEFAULT_VERSION_MASK:08x}"


class ValidatedStratum(_StratumFields):
    """[stratum] section after :func:`validate_stratum` succeeded."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    network: Network = DEFAULT_NETWORK
    version_mask: int = DEFAULT_VERSION_MASK
    solo_address_parsed: BitcoinAddress | None = None
    bootstrap_address_parsed: BitcoinAddress | None = None
    donation_address_parsed: BitcoinAddress | None = None
    fee_address_parsed: BitcoinAddress | None = None

    def to_unvalidated(self) -> StratumSettings:
        """Drop derived fields and return to the raw textual form."""
        data = self.model_dump(
            exclude={
                "network",
                "version_mask",
                "solo_address_parsed",
                "bootstrap_address_parsed",
                "donation_address_parsed",
                "fee_address_parsed",
            }
        )
        return StratumSettings(
            **data,
            network=self.network.to_core_arg(),
            version_mask=f"{self.version_mask:08x}",
        )


class MinerSettings(_Section):
    """[miner] section."""

    pubkey: str


class BitcoinRpcSettings(_Section):
    """[bitcoinrpc] section."""

    url: str
    username: str
    password: str


class LoggingSettings(_Section):
    """[logging] section."""

    file: str | None = None
    level: str = DEFAULT_LOG_LEVEL
    stats_dir: str = DEFAULT_STATS_DIR


class ApiSettings(_Section):
    """[api] section."""

    hostname: str
    port: U16
    auth_user: str | None = None
    auth_token: str | None = None


class PoolConfig(BaseModel):
    """Root of a deserialized, not yet validated p2pool configuration."""

    model_config = {"frozen": True}

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    store: StoreSettings | None = None
    stratum: StratumSettings | None = None
    miner: MinerSettings | None = None
    bitcoinrpc: BitcoinRpcSettings | None = None
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings | None = None


class ValidatedPoolConfig(BaseModel):
    """Root of a p2pool configuration whose semantic checks all passed."""

    model_config = {"frozen": True}

    network: NetworkSettings
    store: StoreSettings | None
    stratum: ValidatedStratum | None
    miner: MinerSettings | None
    bitcoinrpc: BitcoinRpcSettings | None
    logging: LoggingSettings
    api: ApiSettings | None


# --- Validation ---


def _invalid(field: str, message: str, path: Path | None) -> ConfigValidationError:
    return ConfigValidationError(message, path=path, field=f"stratum.{field}")


def parse_version_mask(text: str) -> int:
    """Parse a hex version mask such as ``1fffe000``.

    Raises:
        ValueError: If *text* is not plain hex or overflows 31 bits.
    """
    if not _HEX_RE.match(text) or int(text, 16) > _I32_MAX:
        msg = "version_mask must be hex (e.g. 1fffe000)"
        raise ValueError(msg)
    return int(text, 16)


def _address(
    raw: StratumSettings, field: str, network: Network, path: Path | None
) -> BitcoinAddress | None:
    text: str | None = getattr(raw, field)
    if text is None:
        return None
    try:
        return parse_address_for(text, network)
    except ValueError as exc:
        raise _invalid(field, f"Invalid {field}: {exc}", path) from exc


def validate_stratum(raw: StratumSettings, *, path: Path | None = None) -> ValidatedStratum:
    """Run every stratum rule and return the validated section.

    *path* names the file the section came from and is carried by errors.

    Raises:
        ConfigValidationError: On the first rule that fails.
    """
    try:
        network = Network.from_core_arg(raw.network)
    except ValueError as exc:
        raise _invalid("network", str(exc), path) from exc

    try:
        version_mask = parse_version_mask(raw.version_mask)
    except ValueError as exc:
        raise _invalid("version_mask", str(exc), path) from exc

    if raw.pool_signature is not None and len(raw.pool_signature) > MAX_POOL_SIGNATURE_LENGTH:
        raise _invalid(
            "pool_signature",
            f"Pool signature exceeds max length ({MAX_POOL_SIGNATURE_LENGTH} characters)",
            path,
        )

    bootstrap = _address(raw, "bootstrap_address", network, path)

    donation = _address(raw, "donation_address", network, path)
    if raw.donation is not None and donation is None:
        msg = "donation_address is required when donation is set"
        raise _invalid("donation_address", msg, path)

    fee = _address(raw, "fee_address", network, path)
    if raw.fee is not None and fee is None:
        raise _invalid("fee_address", "fee_address is required when fee is set", path)

    solo = _address(raw, "solo_address", network, path)

    return ValidatedStratum(
        **raw.model_dump(exclude={"network", "version_mask"}),
        network=network,
        version_mask=version_mask,
        solo_address_parsed=solo,
        bootstrap_address_parsed=bootstrap,
        donation_address_parsed=donation,
        fee_address_parsed=fee,
    )


def validate_pool_config(config: PoolConfig, *, path: Path | None = None) -> ValidatedPoolConfig:
    """The one fallible conversion from unvalidated to validated."""
    if not isinstance(config, PoolConfig):
        msg = f"Expected PoolConfig, got {type(config).__name__}"
        raise TypeError(msg)
    stratum = validate_stratum(config.stratum, path=path) if config.stratum is not None else None
    return ValidatedPoolConfig(
        network=config.network,
        store=config.store,
        stratum=stratum,
        miner=config.miner,
        bitcoinrpc=config.bitcoinrpc,
        logging=config.logging,
        api=config.api,
    )
