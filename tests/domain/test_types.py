"""Tests for shared enums."""

import pytest

from nodecfg.domain.types import DAEMON_NETWORK_SCOPES, POOL_SECTIONS, Network, ValueKind


class TestNetwork:
    @pytest.mark.parametrize(
        ("arg", "network"),
        [
            ("main", Network.BITCOIN),
            ("test", Network.TESTNET),
            ("testnet4", Network.TESTNET4),
            ("signet", Network.SIGNET),
            ("regtest", Network.REGTEST),
        ],
    )
    def test_from_core_arg(self, arg: str, network: Network) -> None:
        assert Network.from_core_arg(arg) is network
        assert network.to_core_arg() == arg

    def test_display_names_are_lowercase(self) -> None:
        assert [n.value for n in Network] == ["bitcoin", "testnet", "testnet4", "signet", "regtest"]

    @pytest.mark.parametrize("bad", ["bitcoin", "Signet", "mainnet", ""])
    def test_rejects_unknown(self, bad: str) -> None:
        with pytest.raises(ValueError, match="Invalid network"):
            Network.from_core_arg(bad)


class TestConstants:
    def test_daemon_scopes_match_core_args(self) -> None:
        assert DAEMON_NETWORK_SCOPES == tuple(n.to_core_arg() for n in Network)

    def test_pool_sections_order(self) -> None:
        assert POOL_SECTIONS[0] == "network"
        assert POOL_SECTIONS[-1] == "api"

    def test_value_kind_values(self) -> None:
        assert ValueKind.BOOL == "bool"
