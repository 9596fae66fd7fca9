"""Pydantic Settings source over an already-parsed nested dict.

Both the tool's own settings and the p2pool loader parse their inputs
up front (TOML tables, grouped env overrides) and hand the result to
Pydantic through this one source type.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class MappingSource(PydanticBaseSettingsSource):
    """Serve a pre-built nested dict to Pydantic Settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data
