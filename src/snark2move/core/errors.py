from __future__ import annotations
from typing import Optional


class ConversionError(Exception):
    """Base for every failure of a conversion run."""

    stage = "convert"

    def __init__(self, message: str, artifact: Optional[str] = None,
                 field: Optional[str] = None, value: object = None):
        super().__init__(message)
        self.message = message
        self.artifact = artifact
        self.field = field
        self.value = value

    def at(self, artifact: Optional[str] = None, field: Optional[str] = None) -> "ConversionError":
        """Fill in location details that were not known where the error was raised."""
        if self.artifact is None:
            self.artifact = artifact
        if field is not None:
            self.field = field if self.field is None else f"{field}{self.field}"
        return self

    def __str__(self) -> str:
        parts = [f"[{self.stage}]"]
        if self.artifact:
            parts.append(self.artifact)
        if self.field:
            parts.append(f"field {self.field}")
        head = " ".join(parts)
        tail = f" (value {self.value!r})" if self.value is not None else ""
        return f"{head}: {self.message}{tail}"


class ConfigurationError(ConversionError):
    stage = "config"


class ArtifactIOError(ConversionError, OSError):
    stage = "io"


class MalformedNumber(ConversionError, ValueError):
    stage = "decode"


class MalformedArtifact(ConversionError, ValueError):
    stage = "decode"


class TemplateError(ConversionError):
    stage = "template"
