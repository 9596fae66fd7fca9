"""Tests for p2pool TOML + environment loading."""

from pathlib import Path

import pytest

from nodecfg.domain.errors import DeserializationError, DomainMismatchError, SourceFormatError
from nodecfg.domain.pool_models import PoolConfig
from nodecfg.infrastructure.pool_source import (
    PoolSettingsLoader,
    collect_env_overrides,
    has_env_overrides,
    load_pool_sources,
    looks_like_pool_config,
)
from tests.conftest import MINIMAL_POOL_TOML


class TestEnvOverrides:
    def test_section_and_field(self) -> None:
        env = {
            "P2POOL_STRATUM_START_DIFFICULTY": "5",
            "P2POOL_API_PORT": "8080",
            "HOME": "/root",
        }
        assert collect_env_overrides(env) == {
            "stratum": {"start_difficulty": "5"},
            "api": {"port": "8080"},
        }

    def test_unknown_section_ignored(self) -> None:
        assert collect_env_overrides({"P2POOL_WALLET_KEY": "x", "P2POOL_": "y"}) == {}

    def test_custom_prefix(self) -> None:
        env = {"POOL_MINER_PUBKEY": "ab", "P2POOL_MINER_PUBKEY": "cd"}
        assert collect_env_overrides(env, "POOL") == {"miner": {"pubkey": "ab"}}

    def test_has_overrides_counts_any_prefixed_var(self) -> None:
        assert has_env_overrides({"P2POOL_ANYTHING": "1"}) is True
        assert has_env_overrides({"P2POOLX": "1"}) is False


class TestLooksLikePoolConfig:
    def test_section_header(self) -> None:
        assert looks_like_pool_config("[stratum] # pool\nport = 1\n", {}, "P2POOL")

    def test_header_must_start_line(self) -> None:
        assert not looks_like_pool_config('name = "[stratum]"\n', {}, "P2POOL")

    def test_daemon_file(self) -> None:
        assert not looks_like_pool_config("[main]\nport=8333\n", {}, "P2POOL")


class TestLoadPoolSources:
    def test_sections_present(self, tmp_path: Path) -> None:
        path = tmp_path / "p2pool.toml"
        path.write_text(MINIMAL_POOL_TOML)
        sources = load_pool_sources(path, {})
        assert sources.sections_present == frozenset({"store", "stratum", "miner", "bitcoinrpc"})
        assert sources.env_fields == frozenset()

    def test_env_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "p2pool.toml"
        path.write_text(MINIMAL_POOL_TOML)
        sources = load_pool_sources(path, {"P2POOL_STRATUM_PORT": "4444"})
        assert sources.env_fields == frozenset({("stratum", "port")})

    def test_domain_mismatch(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin.conf"
        path.write_text("server=1\n")
        with pytest.raises(DomainMismatchError, match="not a p2pool configuration") as exc_info:
            load_pool_sources(path, {})
        assert exc_info.value.code == "DOMAIN_MISMATCH"

    def test_missing_file_without_env_is_mismatch(self, tmp_path: Path) -> None:
        with pytest.raises(DomainMismatchError):
            load_pool_sources(tmp_path / "absent.toml", {})

    def test_missing_file_with_env(self, tmp_path: Path) -> None:
        sources = load_pool_sources(tmp_path / "absent.toml", {"P2POOL_API_PORT": "1"})
        assert sources.tables == {}
        assert sources.sections_present == frozenset()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "p2pool.toml"
        path.write_text("[stratum]\nport = \n")
        with pytest.raises(SourceFormatError, match="Invalid TOML"):
            load_pool_sources(path, {})


class TestPoolSettingsLoader:
    def _load(self, tmp_path: Path, text: str, env: dict[str, str] | None = None) -> PoolConfig:
        path = tmp_path / "p2pool.toml"
        path.write_text(text)
        return PoolSettingsLoader.from_sources(load_pool_sources(path, env or {}))

    def test_loads_tables(self, tmp_path: Path) -> None:
        cfg = self._load(tmp_path, MINIMAL_POOL_TOML)
        assert isinstance(cfg, PoolConfig)
        assert cfg.store.path == "./store.db"
        assert cfg.bitcoinrpc.username == "p2pool"
        assert cfg.api is None

    def test_env_wins_over_file(self, tmp_path: Path) -> None:
        cfg = self._load(tmp_path, MINIMAL_POOL_TOML, {"P2POOL_STRATUM_PORT": "4444"})
        assert cfg.stratum.port == 4444
        assert cfg.stratum.hostname == "0.0.0.0"

    def test_env_coerced_by_field_type(self, tmp_path: Path) -> None:
        env = {
            "P2POOL_STRATUM_IGNORE_DIFFICULTY": "true",
            "P2POOL_NETWORK_DIAL_PEERS": "/ip4/1.1.1.1/tcp/6884,/ip4/2.2.2.2/tcp/6884",
        }
        cfg = self._load(tmp_path, MINIMAL_POOL_TOML, env)
        assert cfg.stratum.ignore_difficulty is True
        assert len(cfg.network.dial_peers) == 2

    def test_env_creates_section(self, tmp_path: Path) -> None:
        env = {"P2POOL_API_HOSTNAME": "0.0.0.0", "P2POOL_API_PORT": "46884"}
        cfg = self._load(tmp_path, MINIMAL_POOL_TOML, env)
        assert cfg.api.port == 46884

    def test_missing_required_field(self, tmp_path: Path) -> None:
        with pytest.raises(DeserializationError, match="Failed to deserialize") as exc_info:
            self._load(tmp_path, "[store]\nbackground_task_frequency_hours = 2\n")
        assert exc_info.value.field == "store.path"

    def test_wrong_type(self, tmp_path: Path) -> None:
        with pytest.raises(DeserializationError) as exc_info:
            self._load(tmp_path, '[stratum]\nport = "high"\n')
        assert exc_info.value.field == "stratum.port"

    def test_unvalidated_network_text_kept(self, tmp_path: Path) -> None:
        cfg = self._load(tmp_path, '[stratum]\nnetwork = "nonsense"\n')
        assert cfg.stratum.network == "nonsense"
