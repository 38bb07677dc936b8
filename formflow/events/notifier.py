"""
Formflow Change Notifier
========================

Host callbacks a form controller fires.

Three hooks cover the whole boundary: a field value changed, the
form was submitted and every field passed, or it was submitted and
at least one field failed. Callbacks are fire-and-forget; their
return values are ignored and their errors are logged.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from formflow.events.hooks import Hook, HookCallback, HookPriority

ValuesChangeCallback = Callable[[str, str], None]
SubmitCallback = Callable[[Dict[str, str]], None]


class ChangeNotifier:
    """
    Callback surface for one form.

    Example:
        notifier = ChangeNotifier(
            on_finish=lambda values: save(values),
            on_finish_failed=lambda values: show_errors(values),
        )

        @notifier.values_change.handler()
        def track(name, value):
            print(f"{name} changed")
    """

    def __init__(
        self,
        on_values_change: Optional[ValuesChangeCallback] = None,
        on_finish: Optional[SubmitCallback] = None,
        on_finish_failed: Optional[SubmitCallback] = None,
    ) -> None:
        self.values_change: Hook[str] = Hook(
            "values_change", "A field value changed"
        )
        self.finish: Hook[Dict[str, str]] = Hook(
            "finish", "Submitted with every field valid"
        )
        self.finish_failed: Hook[Dict[str, str]] = Hook(
            "finish_failed", "Submitted with at least one invalid field"
        )

        if on_values_change:
            self.values_change.add(on_values_change)
        if on_finish:
            self.finish.add(on_finish)
        if on_finish_failed:
            self.finish_failed.add(on_finish_failed)

    def on(
        self,
        event: str,
        callback: HookCallback,
        priority: int = HookPriority.NORMAL.value,
    ) -> "ChangeNotifier":
        """
        Add a callback by event name.

        Args:
            event: "values_change", "finish" or "finish_failed"
            callback: Handler function
            priority: Execution priority

        Returns:
            Self for chaining
        """
        self._hook(event).add(callback, priority)
        return self

    def off(self, event: str, callback: HookCallback) -> bool:
        """Remove a callback by event name."""
        return self._hook(event).remove(callback)

    def _hook(self, event: str) -> Hook:
        hooks = {
            "values_change": self.values_change,
            "finish": self.finish,
            "finish_failed": self.finish_failed,
        }
        if event not in hooks:
            raise KeyError(f"Unknown form event: {event!r}")
        return hooks[event]

    def notify_values_change(self, name: str, value: str) -> None:
        self.values_change.trigger(name, value)

    def notify_finish(self, values: Dict[str, str]) -> None:
        self.finish.trigger(dict(values))

    def notify_finish_failed(self, values: Dict[str, str]) -> None:
        self.finish_failed.trigger(dict(values))
