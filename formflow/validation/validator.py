"""
Formflow Validator
==================

Evaluates a value against an ordered rule list.

Rules run in registration order and the first failing rule
decides the outcome; later rules are not evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from formflow.validation.errors import ErrorKind
from formflow.validation.rules import Rule


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of evaluating one value.

    Attributes:
        valid: Whether every rule passed
        message: Error message of the failing rule
        kind: Error kind of the failing rule
        rule: The failing rule
    """

    valid: bool
    message: Optional[str] = None
    kind: Optional[ErrorKind] = None
    rule: Optional[Rule] = None

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def fail(cls, rule: Rule, message: str) -> ValidationOutcome:
        return cls(valid=False, message=message, kind=rule.kind, rule=rule)

    def __bool__(self) -> bool:
        """Allow using outcome as boolean."""
        return self.valid


def evaluate(value: str, rules: Iterable[Rule]) -> ValidationOutcome:
    """
    Evaluate value against rules, stopping at the first failure.

    Example:
        outcome = evaluate("ab", [Required("R"), MinLength(3, "L")])
        outcome.valid    # False
        outcome.message  # "L"
    """
    for rule in rules:
        message = rule.check(value)
        if message is not None:
            return ValidationOutcome.fail(rule, message)

    return ValidationOutcome.ok()
