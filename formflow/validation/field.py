"""
Formflow Fields
===============

State of a single named form input.

A field keeps its value, its rules and the outcome of its most
recent validation pass. Setting a value never validates; the
registry decides when to call `validate`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from formflow.validation.errors import ErrorKind
from formflow.validation.rules import Rule
from formflow.validation.validator import evaluate


class FieldStatus(str, Enum):
    """Validation status shown next to a control."""

    UNTOUCHED = "untouched"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    VALIDATING = "validating"


@dataclass(frozen=True)
class FieldView:
    """
    Read-only projection of a field for rendering.

    Example:
        view = registry.get("email")
        if view and view.has_error:
            render_error(view.error)
    """

    name: str
    value: str
    status: FieldStatus
    error: Optional[str] = None
    validated: bool = False

    @property
    def has_error(self) -> bool:
        return self.status is FieldStatus.ERROR

    @property
    def is_valid(self) -> bool:
        """Validated and not in error."""
        return self.validated and self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "status": self.status.value,
            "error": self.error,
            "validated": self.validated,
        }


@dataclass
class Field:
    """
    Form field state.

    Example:
        field = Field("username", rules=[Required("Required")])
        field.set_value("   ")
        field.validate()   # False
        field.error        # "Required"
    """

    name: str
    value: str = ""
    rules: List[Rule] = field(default_factory=list)

    status: FieldStatus = FieldStatus.UNTOUCHED
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    validated: bool = False

    def set_value(self, value: str) -> None:
        """Replace the value without validating."""
        self.value = value

    def validate(self) -> bool:
        """
        Run the rules against the current value.

        Returns:
            True if every rule passed
        """
        outcome = evaluate(self.value, self.rules)

        self.validated = True
        self.error = outcome.message
        self.error_kind = outcome.kind

        if not outcome.valid:
            self.status = FieldStatus.ERROR
        elif self.rules:
            self.status = FieldStatus.SUCCESS
        else:
            # No rules: nothing to succeed at
            self.status = FieldStatus.UNTOUCHED

        return outcome.valid

    def view(self) -> FieldView:
        """Snapshot for rendering."""
        return FieldView(
            name=self.name,
            value=self.value,
            status=self.status,
            error=self.error,
            validated=self.validated,
        )
