"""
Formflow Validation Errors
==========================

Error kinds reported on fields, and the few exceptions the
engine raises for configuration defects.

Field failures are data: they live on the field as ``error`` and
``error_kind``. Exceptions are reserved for mistakes made while
building rules, which should surface immediately.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kind of a field validation failure."""

    REQUIRED_MISSING = "required_missing"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    PATTERN_MISMATCH = "pattern_mismatch"
    PATTERN_CONFIG_INVALID = "pattern_config_invalid"
    CUSTOM_REJECTED = "custom_rejected"


class FormflowError(Exception):
    """Base exception for formflow."""

    kind: Optional[ErrorKind] = None


class ConfigurationError(FormflowError, ValueError):
    """A rule or form was configured incorrectly."""


class PatternConfigError(ConfigurationError):
    """
    Pattern rule could not be compiled.

    Raised when the rule is built, never while validating a value.
    """

    kind = ErrorKind.PATTERN_CONFIG_INVALID

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class RuleViolation(FormflowError):
    """
    Raised by custom predicates to reject a value.

    Example:
        def no_admin(value: str) -> None:
            if value.lower() == "admin":
                raise RuleViolation("This username is reserved")
    """

    kind = ErrorKind.CUSTOM_REJECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
