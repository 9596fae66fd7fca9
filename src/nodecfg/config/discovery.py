"""Locating the ``nodecfg.toml`` that configures the CLI itself.

Resolution order:
  1. An explicit path (``-c/--config``)
  2. ``NODECFG_CONFIG`` in the supplied environment
  3. The nearest candidate file walking up from the start directory

The first two name a file directly, so a missing file is reported
instead of falling through to the walk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NODECFG_CONFIG"

# Checked in this order inside each directory.
CONFIG_FILENAMES = ("nodecfg.toml", ".nodecfg.toml")


def iter_candidates(start: Path) -> Iterator[Path]:
    """Yield every candidate path from *start* up to the filesystem root."""
    directory = start.resolve()
    for current in (directory, *directory.parents):
        for name in CONFIG_FILENAMES:
            yield current / name


def find_config(
    start: Path | None = None,
    *,
    explicit: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the nodecfg.toml in effect, or None when there is none.

    *env* defaults to ``os.environ``; tests pass a plain dict.

    Raises:
        FileNotFoundError: If *explicit* or ``NODECFG_CONFIG`` names a
            path that is not a file.
    """
    env = os.environ if env is None else env
    named = explicit or env.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named).expanduser()
        if not path.is_file():
            origin = "--config" if explicit else CONFIG_ENV_VAR
            msg = f"Config file not found: {path} (from {origin})"
            raise FileNotFoundError(msg)
        return path

    for candidate in iter_candidates(start or Path.cwd()):
        if candidate.is_file():
            logger.debug("Using settings file %s", candidate)
            return candidate
    return None
