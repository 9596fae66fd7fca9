"""Raw, string-typed key/value triples extracted from one input."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

GLOBAL_SCOPE = ""


class RawValue(NamedTuple):
    """``(scope, key, value)``; an empty scope means global."""

    scope: str
    key: str
    value: str


@dataclass
class RawSource:
    """Ordered bag of raw values from a single file or environment.

    Built per load call and discarded after merge.
    """

    origin: str = ""
    values: list[RawValue] = field(default_factory=list)

    def add(self, scope: str, key: str, value: str) -> None:
        self.values.append(RawValue(scope, key, value))

    def scopes(self) -> list[str]:
        """Scopes in first-seen order."""
        return list(dict.fromkeys(v.scope for v in self.values))

    def keys(self) -> list[str]:
        """Distinct keys across all scopes, in first-seen order."""
        return list(dict.fromkeys(v.key for v in self.values))

    def get(self, scope: str, key: str) -> str | None:
        """First value for *key* in *scope*, or None."""
        for v in self.values:
            if v.scope == scope and v.key == key:
                return v.value
        return None

    def lookup(self, key: str, scopes: Sequence[str]) -> tuple[str, str] | None:
        """Resolve *key* across the global scope, then *scopes* in order.

        Returns ``(scope, value)`` for the first match, or None.
        """
        for scope in (GLOBAL_SCOPE, *scopes):
            value = self.get(scope, key)
            if value is not None:
                return scope, value
        return None

    def __iter__(self) -> Iterator[RawValue]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)
