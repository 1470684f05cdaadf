"""Validation data models."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class InputRole(str, Enum):
    """Which side of a validation an input plays."""

    schema = "schema"
    document = "document"


class ValidationInput(BaseModel):
    """A schema or document supplied either as a filesystem path or raw bytes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["path", "content"]
    path: str | None = None
    content: bytes | None = None
    name: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> ValidationInput:
        if self.kind == "path" and not self.path:
            raise ValueError("Path input requires a non-empty 'path'")
        if self.kind == "content" and self.content is None:
            raise ValueError("Content input requires 'content' bytes")
        return self

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> ValidationInput:
        return cls(kind="path", path=os.fspath(path))

    @classmethod
    def from_content(cls, content: bytes | str, name: str | None = None) -> ValidationInput:
        """Wrap in-memory content. ``str`` is encoded as UTF-8."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        return cls(kind="content", content=content, name=name)

    @classmethod
    def coerce(cls, value: Any) -> ValidationInput:
        """Accept a ValidationInput, a path (str / PathLike) or bytes."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_content(bytes(value))
        if isinstance(value, (str, os.PathLike)):
            return cls.from_path(value)
        raise TypeError(
            f"Expected a path or bytes content, got {type(value).__name__}"
        )

    @property
    def is_content(self) -> bool:
        return self.kind == "content"

    def describe(self) -> str:
        if self.kind == "path":
            return self.path or ""
        return self.name or f"<{len(self.content or b'')} bytes>"


class MaterializedInput(BaseModel):
    """A filesystem path usable by the engine, plus whether we own it."""

    path: str
    is_temporary: bool = False
    label: str | None = None


class ValidationError(BaseModel):
    """A single diagnostic line reported by the validation engine."""

    file: str = ""
    line: int = Field(default=0, ge=0)
    message: str = ""


class ValidationStatus(str, Enum):
    """Outcome of a validation run."""

    valid = "valid"
    invalid = "invalid"
    # Engine signalled failure but produced nothing we could structure
    unparsed = "unparsed"


class ValidationResult(BaseModel):
    """Result of one validation call.

    ``valid`` is the success marker. A failed run always has ``valid=False``
    even when no structured errors could be extracted (``status=unparsed``),
    so callers must branch on ``valid`` / ``status`` and not on ``errors``.
    """

    status: ValidationStatus
    errors: list[ValidationError] = Field(default_factory=list)
    exit_code: int = 0
    raw_output: str = ""

    @computed_field
    @property
    def valid(self) -> bool:
        return self.status == ValidationStatus.valid

    @property
    def unparsed(self) -> bool:
        return self.status == ValidationStatus.unparsed

    @classmethod
    def success(cls, exit_code: int = 0, raw_output: str = "") -> ValidationResult:
        return cls(status=ValidationStatus.valid, exit_code=exit_code, raw_output=raw_output)
