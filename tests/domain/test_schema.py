"""Tests for the schema registry and the daemon schema."""

import pytest

from nodecfg.domain.schema import DAEMON_SCHEMA, SchemaEntry, SchemaRegistry
from nodecfg.domain.types import ValueKind


class TestSchemaRegistry:
    def test_declaration_order(self) -> None:
        reg = SchemaRegistry([SchemaEntry(key="b", default=""), SchemaEntry(key="a", default="")])
        assert reg.keys() == ["b", "a"]
        assert [e.key for e in reg] == ["b", "a"]

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            SchemaRegistry([SchemaEntry(key="a", default=""), SchemaEntry(key="a", default="1")])

    def test_lookup(self) -> None:
        reg = SchemaRegistry([SchemaEntry(key="a", default="x")])
        assert "a" in reg
        assert "z" not in reg
        assert reg.get("a").default == "x"
        assert reg.get("z") is None
        assert len(reg) == 1


class TestDaemonSchema:
    def test_known_defaults(self) -> None:
        assert DAEMON_SCHEMA.get("port").default == "8333"
        assert DAEMON_SCHEMA.get("rpcport").default == "8332"
        assert DAEMON_SCHEMA.get("maxconnections").kind is ValueKind.INT
        assert DAEMON_SCHEMA.get("txindex").kind is ValueKind.BOOL

    def test_rpcpassword_is_secret(self) -> None:
        assert DAEMON_SCHEMA.get("rpcpassword").secret is True
        assert DAEMON_SCHEMA.get("rpcuser").secret is False

    def test_categories(self) -> None:
        assert DAEMON_SCHEMA.categories()[:3] == ["core", "network", "rpc"]
