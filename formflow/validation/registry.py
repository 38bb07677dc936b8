"""
Formflow Field Registry
=======================

Owns every field of one form instance.

The registry is the only thing that mutates fields. Callers go
through its methods and read fields back as immutable FieldView
snapshots. Each form creates its own registry; nothing here is
shared between forms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from formflow.utils.logger import get_logger
from formflow.validation.field import Field, FieldView
from formflow.validation.rules import Rule

logger = get_logger("formflow.registry")


@dataclass
class ValidationSummary:
    """
    Result of validating every field.

    `values` holds every field's value as it was before validation,
    in registration order, whether or not the field passed.
    """

    all_valid: bool
    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        """Allow using summary as boolean."""
        return self.all_valid

    def failed(self) -> bool:
        """Check if any field failed."""
        return not self.all_valid

    def first_error(self) -> Optional[str]:
        """Get the first error in registration order."""
        for message in self.errors.values():
            return message
        return None


class FieldRegistry:
    """
    Name to Field mapping for one form.

    Example:
        registry = FieldRegistry()
        registry.register("username", [Required("Required")])
        registry.update_value("username", "alice")

        registry.get("username").status  # FieldStatus.SUCCESS

        summary = registry.validate_all()
        summary.values  # {"username": "alice"}
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Field] = {}

    def register(self, name: str, rules: Iterable[Rule] = ()) -> None:
        """
        Register a field or replace its rules.

        A new name creates a field with an empty value. A known name
        keeps its value and status and only swaps in the new rules.
        An empty name is ignored.
        """
        if not name:
            logger.warning("Ignoring registration without a field name")
            return

        rule_list = list(rules)
        existing = self._fields.get(name)

        if existing is None:
            self._fields[name] = Field(name=name, rules=rule_list)
            logger.debug("Field registered", field=name, rules=len(rule_list))
        else:
            existing.rules = rule_list
            logger.debug("Field rules replaced", field=name, rules=len(rule_list))

    def update_value(self, name: str, value: str) -> None:
        """
        Set a field's value and revalidate that field only.

        Unknown names are ignored.
        """
        field_ = self._fields.get(name)
        if field_ is None:
            logger.debug("Ignoring value for unknown field", field=name)
            return

        field_.set_value(value)
        field_.validate()

    def validate_all(self) -> ValidationSummary:
        """
        Validate every field.

        Values are collected before any field is validated, and
        every field is validated even after one fails.
        """
        values = {name: f.value for name, f in self._fields.items()}

        all_valid = True
        errors: Dict[str, str] = {}

        for name, field_ in self._fields.items():
            if not field_.validate():
                all_valid = False
                errors[name] = field_.error or ""

        return ValidationSummary(all_valid=all_valid, values=values, errors=errors)

    def get(self, name: str) -> Optional[FieldView]:
        """Get a read-only view of a field, or None."""
        field_ = self._fields.get(name)
        if field_ is None:
            return None
        return field_.view()

    def names(self) -> List[str]:
        """Field names in registration order."""
        return list(self._fields)

    def values(self) -> Dict[str, str]:
        """Current value of every field."""
        return {name: f.value for name, f in self._fields.items()}

    def errors(self) -> Dict[str, str]:
        """Current error of every field that has one."""
        return {
            name: f.error
            for name, f in self._fields.items()
            if f.error is not None
        }

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"<FieldRegistry fields={len(self._fields)}>"
