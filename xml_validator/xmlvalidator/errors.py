"""Exceptions raised by the validator.

Validation failures are never raised; they come back as a
:class:`~xmlvalidator.models.ValidationResult`.
"""

from __future__ import annotations


class XMLValidatorError(RuntimeError):
    """Base class for validator errors."""


class ConfigurationError(XMLValidatorError):
    """The validation engine is missing or the options are unusable."""


class InvocationError(XMLValidatorError):
    """The engine could not be run, or an input could not be written to disk."""
