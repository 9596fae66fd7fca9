"""Bitcoin address and public key checks.

Addresses are decoded structurally first (bech32/bech32m for segwit,
base58check for legacy P2PKH/P2SH), then checked against a network.
Test networks share legacy version bytes, so a legacy test address is
valid on testnet, testnet4, signet and regtest alike; segwit addresses
are narrowed by their human-readable part.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import base58
import bech32
from coincurve import PublicKey

from nodecfg.domain.types import Network


class AddressKind(StrEnum):
    P2PKH = "p2pkh"
    P2SH = "p2sh"
    SEGWIT = "segwit"


_TEST_NETWORKS = frozenset({Network.TESTNET, Network.TESTNET4, Network.SIGNET, Network.REGTEST})

_SEGWIT_HRPS: dict[str, frozenset[Network]] = {
    "bc": frozenset({Network.BITCOIN}),
    "tb": frozenset({Network.TESTNET, Network.TESTNET4, Network.SIGNET}),
    "bcrt": frozenset({Network.REGTEST}),
}

_BASE58_VERSIONS: dict[int, tuple[AddressKind, frozenset[Network]]] = {
    0x00: (AddressKind.P2PKH, frozenset({Network.BITCOIN})),
    0x05: (AddressKind.P2SH, frozenset({Network.BITCOIN})),
    0x6F: (AddressKind.P2PKH, _TEST_NETWORKS),
    0xC4: (AddressKind.P2SH, _TEST_NETWORKS),
}


@dataclass(frozen=True)
class BitcoinAddress:
    """A structurally valid address and the networks it belongs to."""

    text: str
    kind: AddressKind
    networks: frozenset[Network]
    program: bytes
    witness_version: int | None = None

    def is_valid_for(self, network: Network) -> bool:
        return network in self.networks

    @property
    def canonical(self) -> str:
        """The address as it should be displayed; bech32 is lower-cased."""
        return self.text.lower() if self.kind is AddressKind.SEGWIT else self.text


def parse_address(text: str) -> BitcoinAddress:
    """Decode *text* without regard to network.

    Raises:
        ValueError: If *text* is not a well-formed address.
    """
    sep = text.rfind("1")
    hrp = text[:sep].lower() if sep > 0 else ""
    if hrp in _SEGWIT_HRPS:
        version, program = bech32.decode(hrp, text)
        if version is None or program is None:
            msg = f"{text!r} is not a valid segwit address"
            raise ValueError(msg)
        return BitcoinAddress(
            text=text,
            kind=AddressKind.SEGWIT,
            networks=_SEGWIT_HRPS[hrp],
            program=bytes(program),
            witness_version=version,
        )

    payload = base58.b58decode_check(text)
    if len(payload) != 21 or payload[0] not in _BASE58_VERSIONS:
        msg = f"{text!r} is not a valid base58 address"
        raise ValueError(msg)
    kind, networks = _BASE58_VERSIONS[payload[0]]
    return BitcoinAddress(text=text, kind=kind, networks=networks, program=payload[1:])


def require_network(address: BitcoinAddress, network: Network) -> BitcoinAddress:
    """Return *address* if it is valid on *network*.

    Raises:
        ValueError: If the address belongs to a different network.
    """
    if not address.is_valid_for(network):
        msg = f"{address.text!r} is not valid for network {network}"
        raise ValueError(msg)
    return address


def parse_address_for(text: str, network: Network) -> BitcoinAddress:
    """Decode *text* and check it against *network* in one step."""
    return require_network(parse_address(text), network)


def is_valid_pubkey(text: str) -> bool:
    """True if *text* is a hex-encoded secp256k1 point (33 or 65 bytes)."""
    try:
        raw = bytes.fromhex(text)
    except ValueError:
        return False
    if len(raw) not in (33, 65):
        return False
    try:
        PublicKey(raw)
    except ValueError:
        return False
    return True
