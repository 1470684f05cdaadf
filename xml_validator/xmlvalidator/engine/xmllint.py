"""xmllint engine implementation."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import subprocess

from xmlvalidator.engine.base import ProcessOutcome, ValidationEngine
from xmlvalidator.errors import InvocationError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "xmllint"


def _decode(stream: bytes | None) -> str:
    return (stream or b"").decode("utf-8", errors="replace")


class XmllintEngine(ValidationEngine):
    """libxml2's ``xmllint --noout --schema`` validator."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE) -> None:
        self._executable = executable or DEFAULT_EXECUTABLE

    def build_command(self, schema_path: str, document_path: str) -> list[str]:
        # argv list, never a shell string: paths are passed through untouched
        return [self._executable, "--noout", "--schema", schema_path, document_path]

    def _outcome(self, returncode: int, stderr: bytes | None) -> ProcessOutcome:
        error_message = None
        if returncode < 0:
            error_message = f"{self._executable} was terminated by signal {-returncode}"
        return ProcessOutcome(
            returncode=returncode, stderr=_decode(stderr), error_message=error_message
        )

    def run(self, argv: list[str]) -> ProcessOutcome:
        logger.debug("Running %s", argv)
        try:
            proc = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise InvocationError(f"Could not run {self._executable}: {e}") from e

        logger.debug("%s exited with status %d", self._executable, proc.returncode)
        return self._outcome(proc.returncode, proc.stderr)

    async def run_async(self, argv: list[str]) -> ProcessOutcome:
        logger.debug("Running (async) %s", argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise InvocationError(f"Could not run {self._executable}: {e}") from e

        try:
            _, stderr = await proc.communicate()
        except BaseException:
            # Cancelled or timed out: the child must not outlive its input files
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
            await proc.wait()
            raise

        returncode = proc.returncode if proc.returncode is not None else -1
        logger.debug("%s exited with status %d", self._executable, returncode)
        return self._outcome(returncode, stderr)

    def health_check(self) -> bool:
        """Check that ``xmllint --version`` runs and exits cleanly."""
        try:
            proc = subprocess.run(
                [self._executable, "--version"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            logger.debug("%s not runnable: %s", self._executable, e)
            return False
        return proc.returncode == 0
