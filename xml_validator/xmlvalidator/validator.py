"""XMLValidator: validate an XML document against an XSD via an external engine."""

from __future__ import annotations

import logging
import tempfile
from typing import Any

from xmlvalidator.diagnostics import build_result
from xmlvalidator.engine.base import ProcessOutcome, ValidationEngine
from xmlvalidator.engine.xmllint import XmllintEngine
from xmlvalidator.errors import ConfigurationError
from xmlvalidator.materializer import TempDirProvider, materialized, materialized_async
from xmlvalidator.models import InputRole, MaterializedInput, ValidationInput, ValidationResult

logger = logging.getLogger(__name__)


class XMLValidator:
    """Validates one document against one schema.

    Both inputs may be paths or raw bytes. The engine is checked once at
    construction; if it is not available :class:`ConfigurationError` is
    raised and no validator is returned.

    Example::

        validator = XMLValidator("schema.xsd", b"<root/>")
        result = validator.validate_sync()
        if not result.valid:
            for err in result.errors:
                print(err.file, err.line, err.message)
    """

    def __init__(
        self,
        schema: Any,
        document: Any,
        *,
        engine: ValidationEngine | None = None,
        tempdir_provider: TempDirProvider | None = None,
    ) -> None:
        self._engine = engine or XmllintEngine()
        if not self._engine.health_check():
            raise ConfigurationError(
                f"{self._engine.executable or 'The validation engine'} is not installed "
                "or not runnable. Please install xmllint (libxml2) to use this library."
            )
        self._schema = ValidationInput.coerce(schema)
        self._document = ValidationInput.coerce(document)
        self._tempdir_provider = tempdir_provider or tempfile.gettempdir

    @property
    def schema(self) -> ValidationInput:
        return self._schema

    @property
    def document(self) -> ValidationInput:
        return self._document

    @property
    def engine(self) -> ValidationEngine:
        return self._engine

    async def validate(self) -> ValidationResult:
        """Validate without blocking the event loop.

        Temp-file writes and deletes run in a worker thread; the coroutine
        only suspends while waiting on them and on the engine. If the call is
        cancelled (e.g. by ``asyncio.wait_for``) the engine process is
        killed and the temp files are removed.
        """
        async with materialized_async(
            self._schema, self._document, self._tempdir_provider
        ) as files:
            argv, relabel = self._prepare(*files)
            outcome = await self._engine.run_async(argv)
            return self._finish(outcome, relabel)

    def validate_sync(self) -> ValidationResult:
        """Validate, blocking until the engine exits."""
        with materialized(self._schema, self._document, self._tempdir_provider) as files:
            argv, relabel = self._prepare(*files)
            outcome = self._engine.run(argv)
            return self._finish(outcome, relabel)

    def _prepare(
        self, schema_file: MaterializedInput, document_file: MaterializedInput
    ) -> tuple[list[str], dict[str, str]]:
        """Build the command and the temp-path -> caller-label mapping."""
        argv = self._engine.build_command(schema_file.path, document_file.path)
        relabel = {
            f.path: _label(f, role)
            for f, role in (
                (schema_file, InputRole.schema),
                (document_file, InputRole.document),
            )
            if f.is_temporary
        }
        return argv, relabel

    def _finish(self, outcome: ProcessOutcome, relabel: dict[str, str]) -> ValidationResult:
        result = build_result(outcome, relabel=relabel)
        logger.info(
            "Validated %s against %s: %s (%d errors)",
            self._document.describe(),
            self._schema.describe(),
            result.status.value,
            len(result.errors),
        )
        return result


def _label(item: MaterializedInput, role: InputRole) -> str:
    # Temp files are gone once the call returns; report the caller's name instead
    return item.label or f"<{role.value}>"


async def validate(schema: Any, document: Any, **kwargs: Any) -> ValidationResult:
    """Construct an :class:`XMLValidator` and run :meth:`XMLValidator.validate`."""
    return await XMLValidator(schema, document, **kwargs).validate()


def validate_sync(schema: Any, document: Any, **kwargs: Any) -> ValidationResult:
    """Construct an :class:`XMLValidator` and run :meth:`XMLValidator.validate_sync`."""
    return XMLValidator(schema, document, **kwargs).validate_sync()
