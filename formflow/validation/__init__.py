"""
Formflow Validation System
==========================

Field registry and validation engine behind forms.

Features:
- Ordered, fail-fast rules per field
- Independent status per field
- Whole-form validation that never stops at the first bad field
- Submit branching to host callbacks
"""

from formflow.validation.errors import (
    ConfigurationError,
    ErrorKind,
    FormflowError,
    PatternConfigError,
    RuleViolation,
)
from formflow.validation.rules import (
    Rule,
    Required,
    MinLength,
    MaxLength,
    Pattern,
    Custom,
    required,
    min_length,
    max_length,
    pattern,
    custom,
    rule_list,
)
from formflow.validation.validator import ValidationOutcome, evaluate
from formflow.validation.field import Field, FieldStatus, FieldView
from formflow.validation.registry import FieldRegistry, ValidationSummary
from formflow.validation.form import (
    FormController,
    FormItem,
    FormLayout,
    FormOptions,
    FormSize,
    FormState,
    LabelAlign,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "ErrorKind",
    "FormflowError",
    "PatternConfigError",
    "RuleViolation",
    # Rules
    "Rule",
    "Required",
    "MinLength",
    "MaxLength",
    "Pattern",
    "Custom",
    "required",
    "min_length",
    "max_length",
    "pattern",
    "custom",
    "rule_list",
    # Evaluation
    "ValidationOutcome",
    "evaluate",
    # Fields
    "Field",
    "FieldStatus",
    "FieldView",
    "FieldRegistry",
    "ValidationSummary",
    # Form
    "FormController",
    "FormItem",
    "FormLayout",
    "FormOptions",
    "FormSize",
    "FormState",
    "LabelAlign",
]
