"""Tests for the bitcoin.conf reader."""

from pathlib import Path

import pytest

from nodecfg.domain.errors import DomainMismatchError, SourceFormatError
from nodecfg.domain.raw import GLOBAL_SCOPE
from nodecfg.infrastructure.daemon_source import parse_daemon_text, read_daemon_source


class TestParseDaemonText:
    def test_global_values(self) -> None:
        src = parse_daemon_text("server=1\nrpcuser = alice \n")
        assert src.get(GLOBAL_SCOPE, "server") == "1"
        assert src.get(GLOBAL_SCOPE, "rpcuser") == "alice"

    def test_comments_and_blank_lines(self) -> None:
        src = parse_daemon_text("# comment\n\n; also a comment\ntxindex=1 # inline\n")
        assert len(src) == 1
        assert src.get(GLOBAL_SCOPE, "txindex") == "1"

    def test_sections(self) -> None:
        src = parse_daemon_text("port=1\n[test]\nport=2\n[signet] # trailing\nport=3\n")
        assert src.get(GLOBAL_SCOPE, "port") == "1"
        assert src.get("test", "port") == "2"
        assert src.get("signet", "port") == "3"

    def test_dotted_key_in_global_moves_to_scope(self) -> None:
        src = parse_daemon_text("regtest.rpcport=18443\n")
        assert src.get("regtest", "rpcport") == "18443"
        assert src.get(GLOBAL_SCOPE, "rpcport") is None

    def test_dotted_key_keeps_last_segment(self) -> None:
        src = parse_daemon_text("[test]\nmining.maxconnections=5\n")
        assert src.get("test", "maxconnections") == "5"

    def test_empty_value(self) -> None:
        assert parse_daemon_text("bind=\n").get(GLOBAL_SCOPE, "bind") == ""

    def test_unknown_section_is_domain_mismatch(self) -> None:
        with pytest.raises(DomainMismatchError, match=r"\[stratum\]"):
            parse_daemon_text("[stratum]\nport = 3333\n")

    def test_malformed_header(self) -> None:
        with pytest.raises(SourceFormatError, match="line 2"):
            parse_daemon_text("a=1\n[main\n")

    def test_line_without_equals(self) -> None:
        with pytest.raises(SourceFormatError, match="line 1"):
            parse_daemon_text("justakey\n")


class TestReadDaemonSource:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        src = read_daemon_source(tmp_path / "absent.conf")
        assert len(src) == 0
        assert src.origin.endswith("absent.conf")

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin.conf"
        path.write_text("dbcache=1000\n")
        assert read_daemon_source(path).get(GLOBAL_SCOPE, "dbcache") == "1000"

    def test_binary_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin.conf"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(SourceFormatError) as exc_info:
            read_daemon_source(path)
        assert exc_info.value.path == path
