"""External validation engines."""

from xmlvalidator.engine.base import ProcessOutcome, ValidationEngine
from xmlvalidator.engine.xmllint import XmllintEngine

__all__ = ["ProcessOutcome", "ValidationEngine", "XmllintEngine"]
