"""nodecfg — resolve, validate and normalize node configuration files."""

from __future__ import annotations

__version__ = "0.3.0"

from nodecfg.services.resolve import resolve_daemon_config, resolve_pool_config

__all__ = ["__version__", "resolve_daemon_config", "resolve_pool_config"]
