"""
Formflow Form Controller
========================

Turns UI events into registry operations.

Features:
- Field registration and live revalidation on change
- Submit with success/failure branching
- Form-level presentation options for renderers
- FormItem binding for field-level components
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

from formflow.core.config import get_config
from formflow.events.notifier import ChangeNotifier
from formflow.utils.logger import get_logger
from formflow.validation.field import FieldStatus, FieldView
from formflow.validation.registry import FieldRegistry, ValidationSummary
from formflow.validation.rules import Required, Rule

logger = get_logger("formflow.form")

DEFAULT_LABEL_COL = 6
DEFAULT_WRAPPER_COL = 18


class FormState(str, Enum):
    """Submission state of a form."""

    IDLE = "idle"
    SUBMITTING = "submitting"


class FormLayout(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    INLINE = "inline"


class FormSize(str, Enum):
    SMALL = "small"
    MIDDLE = "middle"
    LARGE = "large"


class LabelAlign(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class FormOptions:
    """
    Presentation settings handed to renderers.

    The engine never acts on these. In particular `disabled` does
    not block `on_field_change` or `submit`; disabling controls is
    left to the rendering layer.

    Attributes:
        layout: Label/control arrangement
        size: Control size
        label_align: Label text alignment
        label_col: Label column span out of 24
        wrapper_col: Control column span out of 24
        disabled: Render every control disabled
    """

    layout: FormLayout = FormLayout.HORIZONTAL
    size: FormSize = FormSize.MIDDLE
    label_align: LabelAlign = LabelAlign.RIGHT
    label_col: Optional[int] = None
    wrapper_col: Optional[int] = None
    disabled: bool = False


class FormController:
    """
    Orchestrates one form instance.

    Each controller owns its own registry; two forms never share
    fields.

    Example:
        form = FormController(
            notifier=ChangeNotifier(
                on_finish=lambda values: save(values),
                on_finish_failed=lambda values: redisplay(values),
            ),
        )

        form.on_field_register("username", [Required("Required")])
        form.on_field_change("username", "alice")

        form.submit()  # calls on_finish({"username": "alice"})
    """

    def __init__(
        self,
        registry: Optional[FieldRegistry] = None,
        notifier: Optional[ChangeNotifier] = None,
        options: Optional[FormOptions] = None,
    ) -> None:
        self.registry = registry if registry is not None else FieldRegistry()
        self.notifier = notifier if notifier is not None else ChangeNotifier()
        self.options = options or FormOptions()
        self._state = FormState.IDLE

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def disabled(self) -> bool:
        return self.options.disabled

    def on_field_register(self, name: str, rules: Iterable[Rule] = ()) -> None:
        """Register a field, or replace its rules if already known."""
        self.registry.register(name, rules)

    def on_field_change(self, name: str, value: str) -> None:
        """
        Route a value change.

        The registry updates and revalidates the field first, then
        the values_change callbacks run. Callbacks run even when the
        field is unknown to the registry.
        """
        self.registry.update_value(name, value)
        self.notifier.notify_values_change(name, value)

    def submit(self) -> ValidationSummary:
        """
        Validate every field and branch.

        Exactly one of finish / finish_failed is notified, always
        with the complete value map.
        """
        self._state = FormState.SUBMITTING
        try:
            summary = self.registry.validate_all()
        finally:
            self._state = FormState.IDLE

        if summary.all_valid:
            logger.info("Form submitted", fields=len(summary.values))
            self.notifier.notify_finish(summary.values)
        else:
            logger.info(
                "Form submission failed validation",
                fields=len(summary.values),
                invalid=",".join(summary.errors),
            )
            self.notifier.notify_finish_failed(summary.values)

        return summary

    def get(self, name: str) -> Optional[FieldView]:
        """Read a field for rendering."""
        return self.registry.get(name)

    def item(
        self,
        name: str,
        rules: Sequence[Rule] = (),
        required: bool = False,
        label: Optional[str] = None,
        **presentation: Any,
    ) -> FormItem:
        """
        Create a FormItem bound to this form and mount it.

        Extra keyword arguments (`extra`, `colon`, `label_col`,
        `wrapper_col`, `required_message`) are passed to FormItem.
        """
        form_item = FormItem(
            name, rules=rules, required=required, label=label, **presentation
        )
        form_item.mount(self)
        return form_item


class FormItem:
    """
    Field-level binding between a control and its form.

    Mirrors what a rendered form item does: registers its rules on
    every mount, forwards changes, and reads status back.

    Example:
        item = FormItem("email", rules=[Pattern(r"@", "Invalid email")], required=True)
        item.mount(form)

        item.change("someone@example.com")
        item.status  # FieldStatus.SUCCESS
    """

    def __init__(
        self,
        name: Optional[str],
        rules: Sequence[Rule] = (),
        required: bool = False,
        label: Optional[str] = None,
        required_message: Optional[str] = None,
        extra: Optional[str] = None,
        colon: bool = True,
        label_col: Optional[int] = None,
        wrapper_col: Optional[int] = None,
    ) -> None:
        self.name = name
        self.rules = list(rules)
        self.required = required
        self.label = label
        self.required_message = required_message
        # Presentation only, read by renderers
        self.extra = extra
        self.colon = colon
        self.label_col = label_col
        self.wrapper_col = wrapper_col
        self._form: Optional[FormController] = None

    @property
    def form(self) -> Optional[FormController]:
        return self._form

    def resolved_label_col(self) -> int:
        """Label span: item, then form, then 6 of 24."""
        if self.label_col is not None:
            return self.label_col
        if self._form is not None and self._form.options.label_col is not None:
            return self._form.options.label_col
        return DEFAULT_LABEL_COL

    def resolved_wrapper_col(self) -> int:
        """Control span: item, then form, then 18 of 24."""
        if self.wrapper_col is not None:
            return self.wrapper_col
        if self._form is not None and self._form.options.wrapper_col is not None:
            return self._form.options.wrapper_col
        return DEFAULT_WRAPPER_COL

    def effective_rules(self) -> List[Rule]:
        """
        Rules this item registers.

        With `required` set and no Required rule given, a Required
        rule using the configured default message is appended after
        the item's own rules.
        """
        rules = list(self.rules)
        if self.required and not any(isinstance(r, Required) for r in rules):
            message = self.required_message or get_config().get_str(
                "form.required_message", "This field is required"
            )
            rules.append(Required(message=message))
        return rules

    def mount(self, form: FormController) -> FormItem:
        """
        Bind to a form and register.

        Safe to call on every render; the field's value survives.
        Items without a name are display-only and never register.
        """
        self._form = form
        if self.name:
            form.on_field_register(self.name, self.effective_rules())
        return self

    def change(self, value: str) -> None:
        """Forward a change event from the bound control."""
        if self._form is None:
            raise RuntimeError(f"FormItem {self.name!r} is not mounted")
        if self.name:
            self._form.on_field_change(self.name, value)

    @property
    def view(self) -> Optional[FieldView]:
        if self._form is None or not self.name:
            return None
        return self._form.get(self.name)

    @property
    def status(self) -> Optional[FieldStatus]:
        view = self.view
        return view.status if view else None

    @property
    def error(self) -> Optional[str]:
        view = self.view
        return view.error if view else None

    def __repr__(self) -> str:
        return f"<FormItem {self.name!r} rules={len(self.rules)}>"
