"""Tests for daemon value resolution."""

import pytest

from nodecfg.domain.daemon import validate_daemon_source
from nodecfg.domain.errors import ConfigValidationError
from nodecfg.domain.raw import GLOBAL_SCOPE, RawSource


def _src(*values: tuple[str, str, str]) -> RawSource:
    src = RawSource(origin="bitcoin.conf")
    for scope, key, value in values:
        src.add(scope, key, value)
    return src


class TestValidateDaemonSource:
    def test_empty(self) -> None:
        cfg = validate_daemon_source(RawSource())
        assert cfg.explicit == {}
        assert cfg.unknown == {}

    def test_schema_value_normalized(self) -> None:
        cfg = validate_daemon_source(_src((GLOBAL_SCOPE, "txindex", "yes")))
        assert cfg.explicit == {"txindex": "1"}

    def test_global_beats_scope(self) -> None:
        cfg = validate_daemon_source(
            _src(("main", "port", "1"), (GLOBAL_SCOPE, "port", "2"))
        )
        assert cfg.explicit["port"] == "2"

    def test_scope_order(self) -> None:
        src = _src(("signet", "rpcport", "38332"), ("test", "rpcport", "18332"))
        assert validate_daemon_source(src).explicit["rpcport"] == "18332"
        cfg = validate_daemon_source(src, scopes=("signet", "test"))
        assert cfg.explicit["rpcport"] == "38332"

    def test_scope_not_consulted(self) -> None:
        cfg = validate_daemon_source(_src(("regtest", "port", "18444")), scopes=("main",))
        assert "port" not in cfg.explicit

    def test_bad_kind(self) -> None:
        with pytest.raises(ConfigValidationError, match=r"dbcache in \[main\]") as exc_info:
            validate_daemon_source(_src(("main", "dbcache", "big")))
        assert exc_info.value.field == "dbcache"
        assert exc_info.value.code == "VALIDATION"

    def test_unknown_keys_first_seen(self) -> None:
        cfg = validate_daemon_source(
            _src((GLOBAL_SCOPE, "zzz", "on"), (GLOBAL_SCOPE, "aaa", "0.50"))
        )
        assert list(cfg.unknown.items()) == [("zzz", "1"), ("aaa", "0.5")]
