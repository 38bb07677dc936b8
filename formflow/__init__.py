"""
Formflow - Form Field Registry and Validation Engine
====================================================

Keeps the fields of a form, validates them against ordered rules,
and branches a submit to success or failure callbacks.

Features:
---------
- Required / length / pattern / custom rules, fail-fast per field
- Per-field status for renderers (pull, no subscriptions)
- Whole-form validation that reports every invalid field
- One registry per form, no shared global state
- Layered configuration and structured logging

Quick Start:
    from formflow import ChangeNotifier, FormController, Required, MinLength

    form = FormController(notifier=ChangeNotifier(on_finish=print))
    form.on_field_register("username", [Required("Required"), MinLength(3, "Too short")])
    form.on_field_change("username", "alice")
    form.submit()
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from formflow.events import ChangeNotifier
from formflow.validation import (
    Custom,
    ErrorKind,
    Field,
    FieldRegistry,
    FieldStatus,
    FieldView,
    FormController,
    FormItem,
    FormOptions,
    MaxLength,
    MinLength,
    Pattern,
    PatternConfigError,
    Required,
    Rule,
    RuleViolation,
    ValidationSummary,
    evaluate,
)


def __getattr__(name: str):
    """Lazy loading of ambient components."""
    _imports = {
        "Config": "formflow.core.config",
        "get_config": "formflow.core.config",
        "Logger": "formflow.utils.logger",
        "get_logger": "formflow.utils.logger",
        "configure_logging": "formflow.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'formflow' has no attribute '{name}'")


__all__ = [
    "__version__",
    "__license__",
    # Engine
    "ChangeNotifier",
    "Custom",
    "ErrorKind",
    "Field",
    "FieldRegistry",
    "FieldStatus",
    "FieldView",
    "FormController",
    "FormItem",
    "FormOptions",
    "MaxLength",
    "MinLength",
    "Pattern",
    "PatternConfigError",
    "Required",
    "Rule",
    "RuleViolation",
    "ValidationSummary",
    "evaluate",
    # Ambient (lazy)
    "Config",
    "get_config",
    "Logger",
    "get_logger",
    "configure_logging",
]
