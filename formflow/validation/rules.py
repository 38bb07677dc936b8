"""
Formflow Validation Rules
=========================

The rule variants a field can carry.

Rules are immutable once built. Each rule checks a single string
value and returns ``None`` when it passes or the failure message
when it does not. Lengths are counted in Unicode code points.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from formflow.utils.logger import get_logger
from formflow.validation.errors import (
    ErrorKind,
    PatternConfigError,
    RuleViolation,
)

logger = get_logger("formflow.rules")

RePattern = re.Pattern

# Unicode White_Space; str.strip() would also drop U+001C..U+001F
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# None/True pass, False fails with the rule message, str fails with itself
PredicateResult = Union[None, bool, str]
Predicate = Callable[[str], PredicateResult]


class Rule(ABC):
    """
    Abstract validation rule.

    Implement `check` to create custom rule types.

    Example:
        @dataclass(frozen=True)
        class Digits(Rule):
            message: str = "Digits only"
            kind = ErrorKind.PATTERN_MISMATCH

            def check(self, value: str) -> Optional[str]:
                return None if value.isdigit() else self.message
    """

    message: str
    kind: ErrorKind

    @abstractmethod
    def check(self, value: str) -> Optional[str]:
        """
        Check the value.

        Args:
            value: Current field value

        Returns:
            None if valid, otherwise the error message
        """
        ...

    def __call__(self, value: str) -> Optional[str]:
        """Allow rule to be called directly."""
        return self.check(value)


@dataclass(frozen=True)
class Required(Rule):
    """Require a value with at least one non-whitespace character."""

    message: str = "This field is required"
    kind = ErrorKind.REQUIRED_MISSING

    def check(self, value: str) -> Optional[str]:
        if not value.strip(WHITESPACE):
            return self.message
        return None


@dataclass(frozen=True)
class MinLength(Rule):
    """Minimum length in code points."""

    min: int
    message: str = "Too short"
    kind = ErrorKind.TOO_SHORT

    def check(self, value: str) -> Optional[str]:
        if len(value) < self.min:
            return self.message
        return None


@dataclass(frozen=True)
class MaxLength(Rule):
    """Maximum length in code points."""

    max: int
    message: str = "Too long"
    kind = ErrorKind.TOO_LONG

    def check(self, value: str) -> Optional[str]:
        if len(value) > self.max:
            return self.message
        return None


@dataclass(frozen=True)
class Pattern(Rule):
    """
    Value must match a regular expression.

    The pattern is compiled when the rule is built, so a malformed
    expression raises PatternConfigError here instead of letting
    every value pass later. Matching is unanchored; use ``^``/``$``
    to match the whole value.
    """

    pattern: Union[str, RePattern]
    message: str = "Invalid format"
    kind = ErrorKind.PATTERN_MISMATCH

    compiled: RePattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise PatternConfigError(self.pattern, str(e)) from e
        elif isinstance(self.pattern, re.Pattern):
            compiled = self.pattern
        else:
            raise PatternConfigError(
                repr(self.pattern), "expected a string or compiled pattern"
            )
        object.__setattr__(self, "compiled", compiled)

    def check(self, value: str) -> Optional[str]:
        if self.compiled.search(value) is None:
            return self.message
        return None


@dataclass(frozen=True)
class Custom(Rule):
    """
    Delegate the check to a synchronous predicate.

    The predicate returns None or True to accept, False to reject
    with this rule's message, or a string to reject with that string.
    It may also raise RuleViolation. Any other exception is logged
    and counts as a rejection.
    """

    predicate: Predicate
    message: str = "Invalid value"
    kind = ErrorKind.CUSTOM_REJECTED

    def check(self, value: str) -> Optional[str]:
        try:
            result = self.predicate(value)
        except RuleViolation as e:
            return e.message
        except Exception as e:
            logger.error(
                "Custom predicate raised",
                exception=e,
                predicate=getattr(self.predicate, "__name__", repr(self.predicate)),
            )
            return self.message

        if result is None or result is True:
            return None
        if result is False:
            return self.message
        return str(result)


# Rule factory functions

def required(message: str = "This field is required") -> Required:
    """Create Required rule."""
    return Required(message=message)


def min_length(min: int, message: str = "Too short") -> MinLength:
    """Create MinLength rule."""
    return MinLength(min=min, message=message)


def max_length(max: int, message: str = "Too long") -> MaxLength:
    """Create MaxLength rule."""
    return MaxLength(max=max, message=message)


def pattern(expression: Union[str, RePattern], message: str = "Invalid format") -> Pattern:
    """Create Pattern rule."""
    return Pattern(pattern=expression, message=message)


def custom(predicate: Predicate, message: str = "Invalid value") -> Custom:
    """Create Custom rule."""
    return Custom(predicate=predicate, message=message)


def rule_list(*items: Rule, required: Optional[str] = None) -> List[Rule]:
    """
    Build an ordered rule list.

    Args:
        *items: Rules in evaluation order
        required: If given, a Required rule with this message goes first

    Example:
        rule_list(MinLength(3, "Too short"), required="Please enter a username")
    """
    result: List[Rule] = []
    if required is not None:
        result.append(Required(message=required))
    result.extend(items)
    return result
