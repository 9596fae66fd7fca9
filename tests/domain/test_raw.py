"""Tests for RawSource lookups."""

from nodecfg.domain.raw import GLOBAL_SCOPE, RawSource


def _source() -> RawSource:
    src = RawSource(origin="bitcoin.conf")
    src.add("test", "port", "18333")
    src.add(GLOBAL_SCOPE, "rpcuser", "alice")
    src.add("main", "port", "8333")
    src.add(GLOBAL_SCOPE, "rpcuser", "bob")
    return src


class TestRawSource:
    def test_keys_first_seen(self) -> None:
        assert _source().keys() == ["port", "rpcuser"]

    def test_scopes_first_seen(self) -> None:
        assert _source().scopes() == ["test", GLOBAL_SCOPE, "main"]

    def test_first_occurrence_wins(self) -> None:
        assert _source().get(GLOBAL_SCOPE, "rpcuser") == "alice"

    def test_lookup_global_first(self) -> None:
        assert _source().lookup("rpcuser", ["main"]) == (GLOBAL_SCOPE, "alice")

    def test_lookup_scope_order(self) -> None:
        src = _source()
        assert src.lookup("port", ["main", "test"]) == ("main", "8333")
        assert src.lookup("port", ["test", "main"]) == ("test", "18333")

    def test_lookup_missing(self) -> None:
        assert _source().lookup("port", ["signet"]) is None
        assert _source().lookup("dbcache", ["main"]) is None

    def test_len_and_iter(self) -> None:
        src = _source()
        assert len(src) == 4
        assert [v.key for v in src][0] == "port"
