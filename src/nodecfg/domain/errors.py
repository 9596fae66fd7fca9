"""Error kinds raised by the resolution pipeline.

All four are terminal for the current load. The service layer maps
``code`` onto ``ServiceError.code``.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base class for configuration resolution failures."""

    code = "CONFIG_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.field = field

    def detail(self) -> dict[str, str]:
        """Context for callers that present the error."""
        data: dict[str, str] = {}
        if self.path is not None:
            data["path"] = str(self.path)
        if self.field is not None:
            data["field"] = self.field
        return data


class DomainMismatchError(ConfigError):
    """The input does not belong to the requested configuration domain."""

    code = "DOMAIN_MISMATCH"


class SourceFormatError(ConfigError):
    """The file cannot be parsed at all as the expected format."""

    code = "SOURCE_FORMAT"


class DeserializationError(ConfigError):
    """The file parses, but fields do not match their expected shapes."""

    code = "DESERIALIZATION"


class ConfigValidationError(ConfigError):
    """A semantic rule failed (address, length, dependent field, ...)."""

    code = "VALIDATION"
