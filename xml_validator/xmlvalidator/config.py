"""Options loading for the command-line front end."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError as PydanticValidationError

from xmlvalidator.engine.xmllint import DEFAULT_EXECUTABLE
from xmlvalidator.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_PATH = "xmlvalidator.json"


class ValidatorOptions(BaseModel):
    """Settings the CLI passes into :class:`~xmlvalidator.validator.XMLValidator`."""

    xmllint_path: str = DEFAULT_EXECUTABLE
    tmp_dir: str | None = None
    dev_mode: bool = False


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _load_raw_options() -> dict:
    """Load options from the JSON options file or env fallback."""
    opts_path = os.environ.get("XMLVALIDATOR_OPTIONS_PATH", DEFAULT_OPTIONS_PATH)
    if Path(opts_path).exists():
        try:
            return json.loads(Path(opts_path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read options file {opts_path}: {e}") from e
    return {
        "xmllint_path": os.environ.get("XMLVALIDATOR_XMLLINT", DEFAULT_EXECUTABLE),
        "tmp_dir": os.environ.get("XMLVALIDATOR_TMPDIR") or None,
        "dev_mode": _env_flag("XMLVALIDATOR_DEV_MODE"),
    }


def load_options() -> ValidatorOptions:
    """Return validated options. Invalid values raise ConfigurationError."""
    raw = _load_raw_options()
    if not isinstance(raw, dict):
        raise ConfigurationError("Options must be a JSON object")
    try:
        options = ValidatorOptions.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e
    if options.tmp_dir is not None and not Path(options.tmp_dir).is_dir():
        raise ConfigurationError(f"Temp directory does not exist: {options.tmp_dir}")
    logger.debug("Loaded options: %s", options.model_dump())
    return options
