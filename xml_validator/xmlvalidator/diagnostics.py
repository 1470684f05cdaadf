"""Diagnostic parsing: turn engine stderr into structured errors."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from xmlvalidator.engine.base import ProcessOutcome
from xmlvalidator.models import ValidationError, ValidationResult, ValidationStatus

logger = logging.getLogger(__name__)

# <file>:<line>: <message>, file ends at the first ":<digits>: " marker
DIAGNOSTIC_LINE_RE = re.compile(r"^(?P<file>.+?):(?P<line>\d+): (?P<message>.*)$")


def select_diagnostic_text(outcome: ProcessOutcome) -> str:
    """Pick the text to parse: captured stderr first, then the error message."""
    if outcome.stderr and outcome.stderr.strip():
        return outcome.stderr
    if outcome.error_message:
        return outcome.error_message
    return ""


def parse_diagnostic_line(line: str) -> ValidationError:
    """Parse one line; anything that doesn't match becomes an empty record."""
    match = DIAGNOSTIC_LINE_RE.match(line.rstrip("\r"))
    if match is None:
        return ValidationError()
    return ValidationError(
        file=match.group("file"),
        line=int(match.group("line")),
        message=match.group("message"),
    )


def parse_diagnostics(text: str) -> list[ValidationError]:
    """Parse every line of diagnostic text, in order.

    Records with neither a file nor a message are dropped, so stray lines
    such as ``"doc.xml fails to validate"`` never show up as errors.
    """
    errors: list[ValidationError] = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        record = parse_diagnostic_line(line)
        if not record.file and not record.message:
            logger.debug("Ignoring unparseable diagnostic line: %r", line)
            continue
        errors.append(record)
    return errors


def build_result(
    outcome: ProcessOutcome,
    relabel: Mapping[str, str] | None = None,
) -> ValidationResult:
    """Turn an engine run into a ValidationResult.

    Exit status 0 is success regardless of what xmllint printed (it writes
    ``"<file> validates"`` to stderr). A non-zero exit is never success: if
    no error can be extracted the result is ``unparsed``.

    ``relabel`` maps temp-file paths back to the name the caller gave the
    content, so in-memory and on-disk inputs report the same ``file``.
    """
    text = select_diagnostic_text(outcome)

    if outcome.returncode == 0:
        return ValidationResult.success(raw_output=text)

    errors = parse_diagnostics(text) if text.strip() else []
    if relabel:
        errors = [
            e.model_copy(update={"file": relabel[e.file]}) if e.file in relabel else e
            for e in errors
        ]

    if not errors:
        logger.info(
            "Validation failed (exit status %d) but no errors could be extracted",
            outcome.returncode,
        )
        return ValidationResult(
            status=ValidationStatus.unparsed,
            exit_code=outcome.returncode,
            raw_output=text,
        )

    return ValidationResult(
        status=ValidationStatus.invalid,
        errors=errors,
        exit_code=outcome.returncode,
        raw_output=text,
    )
