"""Abstract validation engine interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class ProcessOutcome(BaseModel):
    """What came back from one engine run.

    ``error_message`` describes a run that ended abnormally without going
    through the engine's own reporting, e.g. a child killed by a signal.
    It is used as diagnostic text only when stderr is empty.
    """

    returncode: int
    stderr: str = ""
    error_message: str | None = None


class ValidationEngine(ABC):
    """Abstract interface for external schema validators."""

    @property
    def executable(self) -> str:
        """Return the configured executable name (for messages and logs)."""
        return getattr(self, "_executable", "")

    @abstractmethod
    def build_command(self, schema_path: str, document_path: str) -> list[str]:
        """Return the argument vector that validates document against schema."""
        ...

    @abstractmethod
    def run(self, argv: list[str]) -> ProcessOutcome:
        """Run the command, blocking until the process exits."""
        ...

    @abstractmethod
    async def run_async(self, argv: list[str]) -> ProcessOutcome:
        """Run the command, suspending only while awaiting process exit."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the engine is installed and runnable."""
        ...
