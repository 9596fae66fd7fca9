"""Shared pytest fixtures and test helpers for nodecfg tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

# Known-good vectors (BIP173 and well-known legacy addresses).
MAINNET_SEGWIT = "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"
MAINNET_P2PKH = "1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2"
MAINNET_P2SH = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"
TESTNET_SEGWIT = "tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx"
TESTNET_SEGWIT_P2WSH = "tb1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3q0sl5k7"
SIGNET_ADDRESS = "tb1qyazxde6558qj6z3d9np5e6msmrspwpf6k0qggk"
TESTNET_P2PKH = "mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRfn"
REGTEST_SEGWIT = "bcrt1qw508d6qejxtdg4y5r3zarvary0c5xw7kygt080"

# secp256k1 generator point, compressed.
VALID_PUBKEY = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"

MINIMAL_POOL_TOML = """\
[store]
path = "./store.db"

[stratum]
hostname = "0.0.0.0"
port = 3333

[miner]
pubkey = "{pubkey}"

[bitcoinrpc]
url = "http://127.0.0.1:38332"
username = "p2pool"
password = "p2pool"
""".format(pubkey=VALID_PUBKEY)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in a clean directory without P2POOL_/NODECFG_ variables."""
    for name in list(os.environ):
        if name.startswith(("P2POOL_", "NODECFG_")):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_file(tmp_path: Path):
    """Write *text* to ``tmp_path / name`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
