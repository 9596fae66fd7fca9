"""structlog configuration for nodecfg.

Everything goes to stderr so resolved entries on stdout stay pipeable:
- Human (default): console renderer, colored on a TTY
- JSON (--log-json): one JSON object per line

Event keys that name a credential are masked before rendering, so a
debug log of raw config values never leaks a password.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from nodecfg.domain.entries import redact

SECRET_EVENT_KEYS = frozenset({"password", "rpcpassword", "auth_token", "token"})


def redact_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor: mask values stored under credential keys."""
    for key in SECRET_EVENT_KEYS.intersection(event_dict):
        event_dict[key] = redact(str(event_dict[key] or ""))
    return event_dict


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: ``nodecfg.*`` loggers emit DEBUG. Otherwise WARNING+.
        log_json: Render JSON lines instead of console text.

    Safe to call repeatedly; the root handler is replaced, not stacked.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("nodecfg").setLevel(logging.DEBUG if verbose else logging.WARNING)
