"""Value kinds and network enums shared by both configuration domains."""

from __future__ import annotations

from enum import StrEnum


class ValueKind(StrEnum):
    """Expected kind of a schema value."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"


class Network(StrEnum):
    """Chains a node or pool can run on.

    Values are the lower-case display names. Configuration files spell
    networks with the daemon's command-line names instead, see
    :meth:`from_core_arg`.
    """

    BITCOIN = "bitcoin"
    TESTNET = "testnet"
    TESTNET4 = "testnet4"
    SIGNET = "signet"
    REGTEST = "regtest"

    @classmethod
    def from_core_arg(cls, value: str) -> Network:
        """Parse a ``-chain=`` style name. Case-sensitive.

        Raises:
            ValueError: If *value* is not one of the known chain names.
        """
        try:
            return _CORE_ARGS[value]
        except KeyError:
            msg = f"Invalid network {value!r}: expected one of {', '.join(_CORE_ARGS)}"
            raise ValueError(msg) from None

    def to_core_arg(self) -> str:
        """Inverse of :meth:`from_core_arg`."""
        return next(arg for arg, net in _CORE_ARGS.items() if net is self)


_CORE_ARGS: dict[str, Network] = {
    "main": Network.BITCOIN,
    "test": Network.TESTNET,
    "testnet4": Network.TESTNET4,
    "signet": Network.SIGNET,
    "regtest": Network.REGTEST,
}

# Sections a bitcoin.conf may declare, in lookup precedence order.
DAEMON_NETWORK_SCOPES: tuple[str, ...] = ("main", "test", "testnet4", "signet", "regtest")

# Top-level tables of a p2pool TOML file, in flattening order.
POOL_SECTIONS: tuple[str, ...] = (
    "network",
    "store",
    "stratum",
    "miner",
    "bitcoinrpc",
    "logging",
    "api",
)
