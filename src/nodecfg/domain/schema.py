"""Schema registry — known configuration keys with defaults and kinds.

A registry is built once at import time and never mutated. Iteration
follows declaration order, which is also the display order of resolved
entries. Keys a source carries but no registry knows are still reported;
they are treated as explicit strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel

from nodecfg.domain.types import ValueKind


class SchemaEntry(BaseModel):
    """One known key: default value (as text), kind and description."""

    model_config = {"frozen": True}

    key: str
    default: str
    kind: ValueKind = ValueKind.STRING
    description: str = ""
    category: str = ""
    secret: bool = False


class SchemaRegistry:
    """Read-only, ordered index of :class:`SchemaEntry` by key."""

    def __init__(self, entries: Iterable[SchemaEntry]) -> None:
        index: dict[str, SchemaEntry] = {}
        for entry in entries:
            if entry.key in index:
                msg = f"Duplicate schema key: {entry.key!r}"
                raise ValueError(msg)
            index[entry.key] = entry
        self._index = index

    def get(self, key: str) -> SchemaEntry | None:
        return self._index.get(key)

    def keys(self) -> list[str]:
        return list(self._index)

    def categories(self) -> list[str]:
        """Distinct categories, in first-declared order."""
        return list(dict.fromkeys(e.category for e in self._index.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[SchemaEntry]:
        return iter(self._index.values())

    def __len__(self) -> int:
        return len(self._index)


# rpcpassword is the only plaintext credential a bitcoin.conf carries.
_SECRET_KEYS = frozenset({"rpcpassword"})


def _entries(category: str, *rows: tuple[str, str, ValueKind, str]) -> list[SchemaEntry]:
    return [
        SchemaEntry(
            key=key,
            default=default,
            kind=kind,
            description=desc,
            category=category,
            secret=key in _SECRET_KEYS,
        )
        for key, default, kind, desc in rows
    ]


_S, _B, _I, _F = ValueKind.STRING, ValueKind.BOOL, ValueKind.INT, ValueKind.FLOAT

DAEMON_SCHEMA = SchemaRegistry(
    [
        *_entries(
            "core",
            ("datadir", "", _S, "Data directory"),
            ("txindex", "0", _B, "Maintain a full transaction index"),
            ("prune", "0", _I, "Prune target in MiB (0 disables pruning)"),
            ("blocksonly", "0", _B, "Reject transactions from network peers"),
            ("dbcache", "450", _I, "Database cache size in MiB"),
            ("maxmempool", "300", _I, "Keep the transaction memory pool below this many MiB"),
            ("pid", "bitcoind.pid", _S, "Process ID file"),
        ),
        *_entries(
            "network",
            ("testnet", "0", _B, "Use the test chain"),
            ("regtest", "0", _B, "Use the regression test chain"),
            ("signet", "0", _B, "Use the signet chain"),
            ("listen", "1", _B, "Accept connections from outside"),
            ("bind", "", _S, "Bind to the given address and always listen on it"),
            ("port", "8333", _I, "Listen for connections on this port"),
            ("maxconnections", "125", _I, "Maintain at most this many peer connections"),
            ("proxy", "", _S, "Connect through a SOCKS5 proxy"),
            ("onion", "", _S, "Separate SOCKS5 proxy for Tor onion services"),
            ("upnp", "0", _B, "Use UPnP to map the listening port"),
        ),
        *_entries(
            "rpc",
            ("server", "0", _B, "Accept JSON-RPC commands"),
            ("rpcuser", "", _S, "Username for JSON-RPC connections"),
            ("rpcpassword", "", _S, "Password for JSON-RPC connections"),
            ("rpcauth", "", _S, "Salted username and HMAC password for JSON-RPC"),
            ("rpcport", "8332", _I, "Listen for JSON-RPC connections on this port"),
            ("rpcbind", "", _S, "Bind the RPC server to this address"),
            ("rpcallowip", "", _S, "Allow JSON-RPC connections from this source"),
            ("rpcthreads", "4", _I, "Number of threads serving RPC calls"),
        ),
        *_entries(
            "wallet",
            ("disablewallet", "0", _B, "Do not load the wallet"),
            ("fallbackfee", "0", _F, "Fee rate (BTC/kvB) used when estimation fails"),
            ("discardfee", "0.0001", _F, "Fee rate (BTC/kvB) for discarding change"),
            ("mintxfee", "0.00001", _F, "Minimum fee rate (BTC/kvB) for wallet transactions"),
            ("paytxfee", "0", _F, "Fee rate (BTC/kvB) to add to wallet transactions"),
        ),
        *_entries(
            "debug",
            ("debug", "", _S, "Output debug logging for the given category"),
            ("logips", "0", _B, "Include IP addresses in debug output"),
            ("shrinkdebugfile", "1", _B, "Shrink debug.log on client startup"),
        ),
        *_entries(
            "mining",
            ("blockmaxweight", "3996000", _I, "Maximum block weight when mining"),
            ("minrelaytxfee", "0.00001", _F, "Minimum fee rate (BTC/kvB) for relaying"),
        ),
        *_entries(
            "zmq",
            ("zmqpubhashblock", "", _S, "Publish block hashes on this address"),
            ("zmqpubhashtx", "", _S, "Publish transaction hashes on this address"),
            ("zmqpubrawblock", "", _S, "Publish raw blocks on this address"),
            ("zmqpubrawtx", "", _S, "Publish raw transactions on this address"),
        ),
    ]
)

