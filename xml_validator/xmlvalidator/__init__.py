"""Validate XML documents against XSD schemas with xmllint."""

from xmlvalidator.engine import ProcessOutcome, ValidationEngine, XmllintEngine
from xmlvalidator.errors import ConfigurationError, InvocationError, XMLValidatorError
from xmlvalidator.models import (
    ValidationError,
    ValidationInput,
    ValidationResult,
    ValidationStatus,
)
from xmlvalidator.validator import XMLValidator, validate, validate_sync

__all__ = [
    "ConfigurationError",
    "InvocationError",
    "ProcessOutcome",
    "ValidationEngine",
    "ValidationError",
    "ValidationInput",
    "ValidationResult",
    "ValidationStatus",
    "XMLValidator",
    "XMLValidatorError",
    "XmllintEngine",
    "validate",
    "validate_sync",
]

__version__ = "0.1.0"
