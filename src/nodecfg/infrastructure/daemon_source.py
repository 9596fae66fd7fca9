"""bitcoin.conf reader.

Accepts the daemon's INI dialect: ``key=value`` lines, ``#``/``;``
comments, and ``[main]``/``[test]``/``[testnet4]``/``[signet]``/``[regtest]``
network sections. Keys written as ``<network>.<key>`` in the global
scope belong to that network, the same as inside its section.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nodecfg.domain.errors import DomainMismatchError, SourceFormatError
from nodecfg.domain.raw import GLOBAL_SCOPE, RawSource
from nodecfg.domain.types import DAEMON_NETWORK_SCOPES

logger = logging.getLogger(__name__)


def _strip_comment(line: str) -> str:
    idx = line.find("#")
    return line if idx < 0 else line[:idx]


def _split_key(scope: str, key: str) -> tuple[str, str]:
    """Normalize a possibly dotted key into ``(scope, key)``."""
    if "." not in key:
        return scope, key
    head, _, _ = key.partition(".")
    tail = key.rsplit(".", 1)[1]
    if scope == GLOBAL_SCOPE and head in DAEMON_NETWORK_SCOPES:
        return head, tail
    return scope, tail


def parse_daemon_text(text: str, *, origin: str = "") -> RawSource:
    """Parse bitcoin.conf *text* into a :class:`RawSource`.

    Raises:
        DomainMismatchError: On a section header that is not a network name.
        SourceFormatError: On a line that is neither a comment, a section
            header, nor ``key=value``.
    """
    source = RawSource(origin=origin)
    scope = GLOBAL_SCOPE
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        stripped = _strip_comment(raw_line).strip()
        if not stripped or stripped.startswith(";"):
            continue

        if stripped.startswith("["):
            if not stripped.endswith("]"):
                msg = f"Malformed section header on line {lineno}: {stripped!r}"
                raise SourceFormatError(msg, path=origin or None)
            name = stripped[1:-1].strip()
            if name not in DAEMON_NETWORK_SCOPES:
                msg = (
                    f"Section [{name}] on line {lineno} is not a bitcoin.conf network "
                    f"section (expected one of {', '.join(DAEMON_NETWORK_SCOPES)})"
                )
                raise DomainMismatchError(msg, path=origin or None)
            scope = name
            continue

        key, sep, value = stripped.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Expected key=value on line {lineno}: {stripped!r}"
            raise SourceFormatError(msg, path=origin or None)
        source.add(*_split_key(scope, key), value.strip())

    return source


def read_daemon_source(path: Path) -> RawSource:
    """Read a bitcoin.conf from disk. A missing file is an empty source."""
    if not path.exists():
        logger.debug("No daemon config at %s; using schema defaults", path)
        return RawSource(origin=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise SourceFormatError(msg, path=path) from exc
    source = parse_daemon_text(text, origin=str(path))
    logger.debug("Read %d daemon values from %s", len(source), path)
    return source
