"""Input materialization: give the engine a real file for every input."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path

from xmlvalidator.errors import InvocationError
from xmlvalidator.models import InputRole, MaterializedInput, ValidationInput

logger = logging.getLogger(__name__)

TempDirProvider = Callable[[], str | os.PathLike[str]]

TEMP_PREFIX = "xmlvalidator-"
TEMP_SUFFIXES = {InputRole.schema: ".xsd", InputRole.document: ".xml"}


def materialize_input(
    value: ValidationInput,
    role: InputRole,
    tempdir_provider: TempDirProvider = tempfile.gettempdir,
) -> MaterializedInput:
    """Return a path the engine can read.

    Paths are passed through without touching the filesystem. Content is
    written verbatim to a new, uniquely named file in the temp directory.
    """
    if not value.is_content:
        return MaterializedInput(path=value.path or "")

    tmp_dir = os.fspath(tempdir_provider())
    try:
        fd, path = tempfile.mkstemp(
            prefix=TEMP_PREFIX,
            suffix=TEMP_SUFFIXES[role],
            dir=tmp_dir,
        )
    except OSError as e:
        raise InvocationError(f"Could not create temp file for {role.value} in {tmp_dir}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(value.content or b"")
    except OSError as e:
        Path(path).unlink(missing_ok=True)
        raise InvocationError(f"Could not write {role.value} content to {path}: {e}") from e

    logger.debug("Wrote %d bytes of %s content to %s", len(value.content or b""), role.value, path)
    return MaterializedInput(path=path, is_temporary=True, label=value.name)


def cleanup_temp_files(*inputs: MaterializedInput) -> None:
    """Delete the temp files among ``inputs``. Failures are logged, not raised."""
    for item in inputs:
        if not item.is_temporary:
            continue
        try:
            Path(item.path).unlink(missing_ok=True)
            logger.debug("Removed temp file %s", item.path)
        except OSError as e:
            logger.warning("Failed to remove temp file %s: %s", item.path, e)


def materialize_inputs(
    schema: ValidationInput,
    document: ValidationInput,
    tempdir_provider: TempDirProvider = tempfile.gettempdir,
) -> tuple[MaterializedInput, MaterializedInput]:
    """Materialize schema and document; on failure nothing is left behind."""
    schema_file = materialize_input(schema, InputRole.schema, tempdir_provider)
    try:
        document_file = materialize_input(document, InputRole.document, tempdir_provider)
    except BaseException:
        cleanup_temp_files(schema_file)
        raise
    return schema_file, document_file


@contextmanager
def materialized(
    schema: ValidationInput,
    document: ValidationInput,
    tempdir_provider: TempDirProvider = tempfile.gettempdir,
) -> Iterator[tuple[MaterializedInput, MaterializedInput]]:
    """Materialize both inputs and always clean up on exit."""
    files = materialize_inputs(schema, document, tempdir_provider)
    try:
        yield files
    finally:
        cleanup_temp_files(*files)


def _cleanup_when_done(task: asyncio.Future) -> None:
    if not task.cancelled() and task.exception() is None:
        cleanup_temp_files(*task.result())


@asynccontextmanager
async def materialized_async(
    schema: ValidationInput,
    document: ValidationInput,
    tempdir_provider: TempDirProvider = tempfile.gettempdir,
) -> AsyncIterator[tuple[MaterializedInput, MaterializedInput]]:
    """Like :func:`materialized`, with file writes and deletes run off the event loop."""
    pending = asyncio.ensure_future(
        asyncio.to_thread(materialize_inputs, schema, document, tempdir_provider)
    )
    try:
        files = await asyncio.shield(pending)
    except asyncio.CancelledError:
        # The write thread keeps running; remove its files once it finishes
        pending.add_done_callback(_cleanup_when_done)
        raise

    try:
        yield files
    finally:
        await asyncio.to_thread(cleanup_temp_files, *files)
