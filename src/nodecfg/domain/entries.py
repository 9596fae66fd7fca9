"""Output entries — the only structures a presentation layer reads."""

from __future__ import annotations

from pydantic import BaseModel

# Redaction literals for secret values.
SECRET_MASK = "*****"
SECRET_EMPTY = "<empty>"
INVALID_PUBKEY = "<invalid pubkey>"


class DaemonEntry(BaseModel):
    """One resolved bitcoin.conf key.

    ``enabled`` is True when the key was found in the file.
    """

    model_config = {"frozen": True}

    key: str
    value: str
    enabled: bool


class PoolEntry(BaseModel):
    """One resolved p2pool setting."""

    model_config = {"frozen": True}

    section: str
    key: str
    value: str
    is_default: bool


def redact(secret: str) -> str:
    """Mask a secret without leaking its length or content."""
    return SECRET_MASK if secret else SECRET_EMPTY
